"""Turns a raw payload into clean data or one error message."""

from typing import Any, Dict, Mapping, NoReturn, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from backoffice.core.exceptions import ValidationError


def first_error(exc: PydanticValidationError) -> Tuple[str, str]:
    """Field path and human-readable message of the first violated constraint."""
    error = exc.errors(include_url=False)[0]
    field = ".".join(str(part) for part in error.get("loc", ()))

    # Our own validators already name the field in their message
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        return field, str(error["ctx"]["error"])

    return field, f"{field}: {error['msg']}" if field else error["msg"]


def _raise_first(exc: PydanticValidationError) -> NoReturn:
    field, message = first_error(exc)
    raise ValidationError(message, details={"field": field}) from exc


def validate_create(schema: Type[BaseModel], payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a create payload; every required field must be present."""
    try:
        return schema.model_validate(dict(payload)).model_dump()
    except PydanticValidationError as exc:
        _raise_first(exc)


def validate_update(
    schema: Type[BaseModel],
    payload: Mapping[str, Any],
    reject_unknown: bool = False,
) -> Dict[str, Any]:
    """Validate a partial update.

    Only the fields actually sent come back; ``None`` counts as not sent.
    With ``reject_unknown`` any key outside the schema fails the request.
    """
    if reject_unknown:
        invalid = [key for key in payload if key not in schema.model_fields]
        if invalid:
            raise ValidationError(f"Invalid fields: {', '.join(invalid)}", details={"fields": invalid})

    try:
        model = schema.model_validate(dict(payload))
    except PydanticValidationError as exc:
        _raise_first(exc)

    return model.model_dump(exclude_unset=True, exclude_none=True)
