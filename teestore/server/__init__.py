"""
Teestore Server Package.

This package contains the web server implementation for the Teestore storefront.
It includes the API definition, configuration, exception handling and the
service layer that implements cart, checkout and order workflows.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configurations and constants.
    exception_handlers: Error to HTTP response mapping.
    middleware: Request logging and timing.
    services: Business logic and service layer.
"""
