# brandmate/schemas/names.py
"""
Pydantic schemas for the name submission endpoints.
"""
from pydantic import BaseModel

__all__ = ["NameIn", "NameItem"]

class NameIn(BaseModel):
    """Request body for POST /api/names."""
    fullName: str = ""

class NameItem(BaseModel):
    id: str
    fullName: str
    createdAt: str
    timestamp: str
