"""
Validation Service - Field-level validation that reports instead of raising
"""
from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from hrsystem.schemas.common import FieldViolation

M = TypeVar("M", bound=BaseModel)


def violations_from_error(exc: ValidationError) -> List[FieldViolation]:
    """Flatten a pydantic ValidationError the way atams' 422 handler does"""
    return [
        FieldViolation(
            field=" -> ".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]


def violation(field: str, message: str, type: str = "value_error") -> FieldViolation:
    return FieldViolation(field=field, message=message, type=type)


def validate_payload(model: Type[M], data: Mapping[str, Any]) -> Tuple[Optional[M], List[FieldViolation]]:
    """
    Validate request data against a DTO

    Returns:
        (instance, []) on success, (None, violations) otherwise
    """
    try:
        return model.model_validate(data), []
    except ValidationError as exc:
        return None, violations_from_error(exc)


def require_text(violations: List[FieldViolation], field: str, value: Optional[str], message: str) -> None:
    """Append a 'missing' violation when value is empty or blank"""
    if value is None or not value.strip():
        violations.append(violation(field, message, "missing"))
