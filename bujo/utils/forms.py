"""Client-side form validation helpers."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from bujo.core.exceptions import FormValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "


def _clean_message(message: str) -> str:
    if message.startswith(_VALUE_ERROR_PREFIX):
        return message[len(_VALUE_ERROR_PREFIX):]
    return message


def parse_form(
    model: Type[ModelT],
    data: Union[ModelT, Mapping[str, Any]],
    *,
    message: Optional[str] = None,
) -> ModelT:
    """Validate ``data`` against ``model`` before anything reaches the network.

    Raises ``FormValidationError`` carrying a form-level message and one
    message per offending field.
    """
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        fields: Dict[str, str] = {}
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ())) or "__all__"
            fields.setdefault(location, _clean_message(error.get("msg", "Invalid value")))
        summary = message or next(iter(fields.values()), "Invalid form data")
        raise FormValidationError(summary, fields=fields) from exc


__all__ = ["parse_form"]
