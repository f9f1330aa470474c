from typing import Type
from uuid import UUID

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError

from finance_dashboard.core.exceptions import ValidationFailedError


def ensure_valid_id(record_id: str, label: str) -> None:
    try:
        UUID(record_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label} ID")


def revalidate(model: Type[BaseModel], record: dict) -> BaseModel:
    """Validate a record after merging a partial update into it."""
    try:
        return model.model_validate(record)
    except ValidationError as e:
        raise ValidationFailedError(
            "Updated record failed validation",
            details={"errors": "; ".join(err["msg"] for err in e.errors())},
            original_error=e,
        )
