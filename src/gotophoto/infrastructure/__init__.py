"""Infrastructure layer: adapters that implement application ports.

This layer bridges the application's port interfaces to concrete
external dependencies (SQLAlchemy, pymongo, Cloud Datastore).
"""
