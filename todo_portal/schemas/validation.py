# File: todo_portal/schemas/validation.py

"""
Turns pydantic validation failures into per-field message lists that the
templates can render next to the offending input.
"""

from typing import Dict, Mapping, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from todo_portal.core.errors import FORM_ERROR_KEY, FieldErrors, FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def issues_to_map(
    exc: ValidationError,
    required: Mapping[str, str],
    messages: Mapping[Tuple[str, str], str],
) -> FieldErrors:
    errors: Dict[str, list] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else FORM_ERROR_KEY
        if err.get("input") in ("", None) and field in required:
            message = required[field]
        else:
            message = messages.get((field, err["type"]), err["msg"])
        bucket = errors.setdefault(field, [])
        if message not in bucket:
            bucket.append(message)
    return errors


def parse_form(model: Type[FormT], data: Mapping[str, object]) -> FormT:
    """
    Validate raw form data against ``model``.

    Raises FormValidationError carrying field -> messages on failure.
    """
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise FormValidationError(
            issues_to_map(
                exc,
                getattr(model, "REQUIRED_MESSAGES", {}),
                getattr(model, "ERROR_MESSAGES", {}),
            )
        ) from exc
