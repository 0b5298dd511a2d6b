# brandmate/models/name.py
"""
Database model for submitted name records.
"""
import uuid
from tortoise import fields, models

FULL_NAME_MAX_LENGTH = 100

class Name(models.Model):
    """
    A free-text full name submitted from the name form.

    `submitted_by` is set when the request carried a valid bearer token and
    stays null for anonymous submissions.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    full_name = fields.CharField(max_length=FULL_NAME_MAX_LENGTH, index=True)
    submitted_by = fields.ForeignKeyField(
        "models.User",
        related_name="names",
        null=True,
        on_delete=fields.SET_NULL,
    )
    created_at = fields.DatetimeField(auto_now_add=True, index=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "names"
