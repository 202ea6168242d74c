from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from homeaway.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _first_error_message(exc: PydanticValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ())) or "input"
    # Messages raised by our own validators already name the field
    raised = error.get("ctx", {}).get("error")
    if isinstance(raised, ValueError):
        return field, str(raised)
    return field, f"{field}: {error['msg']}"


def validate_with_schema(schema: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """
    Validate raw form data against a schema.

    Raises ValidationError with the first violated constraint's message;
    nothing is returned for partially valid input.
    """
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as e:
        field, message = _first_error_message(e)
        raise ValidationError(message, field=field)
