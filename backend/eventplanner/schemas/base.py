"""
Shared schema plumbing.

Input schemas double as the declarative constraint set for each record:
`collect_errors` runs a schema against a raw payload and turns every
pydantic error into one readable message per field ("Event name cannot
exceed 100 characters"). Services call `validate_payload` before any write.
"""

from typing import Annotated, Any, Optional, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StringConstraints,
    ValidationError as PydanticValidationError,
)
from pydantic.alias_generators import to_camel

from eventplanner.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"

MESSAGE_TEMPLATES = {
    "missing": "{title} is required",
    "string_too_short": "{title} is required",
    "string_too_long": "{title} cannot exceed {max_length} characters",
    "greater_than_equal": "{title} cannot be negative",
    "less_than_equal": "{title} cannot be more than {le}",
    "literal_error": "{title} must be one of {expected}",
    "string_pattern_mismatch": "Please provide a valid {lower_title}",
}


class InputSchema(BaseModel):
    """Request payload: camelCase keys, trimmed strings, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        str_strip_whitespace=True,
        extra="ignore",
    )


class OutputSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional text where "" means "not provided"
OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]

# Optional, pattern-checked, stored lowercase
EmailText = Annotated[
    Optional[Annotated[str, StringConstraints(pattern=EMAIL_PATTERN, to_lower=True)]],
    BeforeValidator(blank_to_none),
]


def _field_for(model: type[BaseModel], key: Any):
    for name, field in model.model_fields.items():
        if key in (name, field.alias):
            return name, field
    return None, None


def _describe(model: type[BaseModel], error: dict) -> str:
    loc = error.get("loc") or ()
    name, field = _field_for(model, loc[0]) if loc else (None, None)
    title = (field.title if field and field.title else None) or (name or "Payload").replace("_", " ").capitalize()

    overrides = ((field.json_schema_extra or {}) if field else {}).get("messages", {})
    kind = error["type"]
    # An explicit null for a required field reads the same as a missing one
    if error.get("input") is None and kind.endswith("_type"):
        kind = "missing"

    template = overrides.get(kind) or MESSAGE_TEMPLATES.get(kind)
    if template is None:
        return f"{title}: {error['msg']}"
    return template.format(title=title, lower_title=title.lower(), **(error.get("ctx") or {}))


def collect_errors(model: type[BaseModel], data: Any) -> list[str]:
    """Return every constraint violation of `data` against `model` (empty if valid)."""
    try:
        model.model_validate(data)
    except PydanticValidationError as exc:
        return [_describe(model, err) for err in exc.errors()]
    return []


def validate_payload(model: type[ModelT], data: Any, prefix: str = "") -> ModelT:
    """Validate `data`, raising ValidationError with one message per violated field."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError([prefix + _describe(model, err) for err in exc.errors()])
