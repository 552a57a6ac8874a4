"""
I/O models for API requests and responses.

Each module holds the Pydantic schemas of one API resource, split into
create, read and update shapes where the resource supports them.
"""
