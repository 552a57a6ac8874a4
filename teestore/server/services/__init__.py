"""
Service layer.

Business workflows composed from repositories: catalogue management, cart,
coupons, checkout, orders, reviews and reward points.
"""
