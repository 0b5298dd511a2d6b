# brandmate/api/routers/names.py
import math
import uuid

from fastapi import APIRouter, Depends, Query, status

from brandmate.api.deps import get_optional_user, require_admin
from brandmate.core.errors import NotFound, ValidationError
from brandmate.models.name import FULL_NAME_MAX_LENGTH, Name
from brandmate.models.user import User
from brandmate.schemas.names import NameIn

router = APIRouter(prefix="/names", tags=["names"])

def _name_to_dict(n: Name) -> dict:
    return {
        "id": str(n.id),
        "fullName": n.full_name,
        "createdAt": n.created_at.isoformat(),
        "timestamp": n.created_at.isoformat(),
    }

async def _get_name_or_404(name_id: str) -> Name:
    try:
        uuid.UUID(name_id)
    except ValueError:
        raise ValidationError("Please provide a valid name ID")
    n = await Name.get_or_none(id=name_id)
    if not n:
        raise NotFound("Name not found")
    return n

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_name(body: NameIn, user: User | None = Depends(get_optional_user)):
    """
    Save a submitted full name.

    Anonymous submissions are accepted; with a valid bearer token the record
    is linked to the submitting user.

    Raises:
        ValidationError (400): Blank or over-long name
    """
    full_name = body.fullName.strip()
    if not full_name:
        raise ValidationError("Full name is required and cannot be empty")
    if len(full_name) > FULL_NAME_MAX_LENGTH:
        raise ValidationError(f"Full name cannot exceed {FULL_NAME_MAX_LENGTH} characters")

    n = await Name.create(full_name=full_name, submitted_by=user)
    return {
        "success": True,
        "message": "Name saved successfully!",
        "data": {
            "id": str(n.id),
            "name": n.full_name,
            "createdAt": n.created_at.isoformat(),
            "timestamp": n.created_at.isoformat(),
        },
    }

@router.get("")
async def list_names(
    limit: int = Query(50, ge=1, le=200),
    page: int = Query(1, ge=1),
):
    """Paginated list of names, newest first."""
    total = await Name.all().count()
    rows = await Name.all().order_by("-created_at").offset((page - 1) * limit).limit(limit)
    return {
        "success": True,
        "count": len(rows),
        "totalCount": total,
        "currentPage": page,
        "totalPages": math.ceil(total / limit),
        "data": [_name_to_dict(n) for n in rows],
    }

@router.get("/{name_id}")
async def get_name(name_id: str):
    n = await _get_name_or_404(name_id)
    data = _name_to_dict(n)
    data["updatedAt"] = n.updated_at.isoformat()
    return {"success": True, "data": data}

@router.delete("/{name_id}", dependencies=[Depends(require_admin)])
async def delete_name(name_id: str):
    """Delete a name record (admin only)."""
    n = await _get_name_or_404(name_id)
    await n.delete()
    return {
        "success": True,
        "message": "Name deleted successfully",
        "data": {"id": str(n.id), "fullName": n.full_name},
    }
