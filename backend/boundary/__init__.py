"""
Boundary layer for external system integrations.

Handles all interactions with the database: ORM models, CRUD operations,
and connection management.
"""
