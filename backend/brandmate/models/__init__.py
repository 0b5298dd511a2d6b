# brandmate/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account and authentication model
- Name: Free-text name record submitted through /api/names
"""
from .user import User, Role
from .name import Name
