"""
Catalog validation — field-level checks for vehicle and item records.

Validation never raises: every function returns a ValidationResult whose
errors carry a dotted, indexed field path such as
``items[2].dimensions.length`` so a data maintainer can find the record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from pydantic import BaseModel, ValidationError

from bootfit.catalog.schemas import ItemRecord, VehicleRecord


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str
    value: Any = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": [
                {"field": e.field, "message": e.message, "value": e.value}
                for e in self.errors
            ],
        }


def _format_loc(loc: Sequence[Any], prefix: str = "") -> str:
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "record"


def issues_from_error(exc: ValidationError, prefix: str = "") -> list[ValidationIssue]:
    """Translate a pydantic ValidationError into ValidationIssues."""
    return [
        ValidationIssue(
            field=_format_loc(err["loc"], prefix),
            message=err["msg"],
            value=err.get("input"),
        )
        for err in exc.errors()
    ]


def _validate(model: type[BaseModel], data: Any, prefix: str = "") -> ValidationResult:
    try:
        model.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(is_valid=False, errors=issues_from_error(exc, prefix))
    return ValidationResult(is_valid=True)


def validate_vehicle(data: Any) -> ValidationResult:
    """Validate one vehicle record in catalog (camelCase) form."""
    return _validate(VehicleRecord, data)


def validate_item(data: Any) -> ValidationResult:
    """Validate one item record in catalog (camelCase) form."""
    return _validate(ItemRecord, data)


def _validate_many(model: type[BaseModel], data: Any, name: str) -> ValidationResult:
    if not isinstance(data, list):
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(field=name, message=f"{name} must be an array")],
        )
    errors: list[ValidationIssue] = []
    for idx, record in enumerate(data):
        errors.extend(_validate(model, record, prefix=f"{name}[{idx}]").errors)
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_vehicles(data: Any) -> ValidationResult:
    """Validate a list of vehicle records."""
    return _validate_many(VehicleRecord, data, "vehicles")


def validate_items(data: Any) -> ValidationResult:
    """Validate a list of item records."""
    return _validate_many(ItemRecord, data, "items")
