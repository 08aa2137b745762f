"""
Form submission handling.

Form actions answer with either ``{"type": "success"}`` or
``{"type": "error", "formState": ...}``. Anything that is not a
``FormError`` is left to propagate and becomes a 500.
"""

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from starlette.datastructures import FormData
from starlette.responses import JSONResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


class FormErrorDetail(BaseModel):
    """A single message, tied to a field when the field is known"""
    field: Optional[str] = None
    message: str


class FormState(BaseModel):
    """What the client needs to redisplay a rejected form"""
    values: dict[str, Any] = {}
    errors: list[FormErrorDetail] = []


class FormError(Exception):
    """Base class for failures reported back to the form"""

    def __init__(self, message: str, form_state: Optional[FormState] = None):
        super().__init__(message)
        self.form_state = form_state or FormState(errors=[FormErrorDetail(message=message)])


class FormValidationError(FormError):
    """Submitted fields failed validation"""

    @classmethod
    def from_validation_error(
        cls,
        values: dict[str, Any],
        exc: ValidationError,
        model: Optional[Type[BaseModel]] = None,
    ) -> "FormValidationError":
        errors = [
            FormErrorDetail(
                field=_field_name(model, error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return cls(errors[0].message, FormState(values=values, errors=errors))


class ActionError(FormError):
    """Fields were valid but the action could not be carried out"""


def _field_name(model: Optional[Type[BaseModel]], loc: tuple) -> Optional[str]:
    """Dotted error location, named as the field is submitted"""
    parts = [str(part) for part in loc]
    if model is not None and parts and parts[0] in model.model_fields:
        parts[0] = model.model_fields[parts[0]].alias or parts[0]
    return ".".join(parts) or None


def form_values(form: FormData, exclude: tuple[str, ...] = ("token",)) -> dict[str, Any]:
    """Flatten submitted fields, last value wins"""
    return {
        key: value
        for key, value in form.multi_items()
        if isinstance(value, str) and key not in exclude
    }


def validate_form(model: Type[ModelT], form: FormData) -> ModelT:
    """Validate a submission against ``model`` or raise ``FormValidationError``"""
    data: Mapping[str, Any] = {
        key: value for key, value in form.multi_items() if isinstance(value, str)
    }
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise FormValidationError.from_validation_error(form_values(form), e, model)


def success_response(**kwargs) -> JSONResponse:
    return JSONResponse({"type": "success"}, **kwargs)


def error_response(error: FormError, **kwargs) -> JSONResponse:
    kwargs.setdefault("status_code", 400)
    return JSONResponse(
        {"type": "error", "formState": error.form_state.model_dump(mode="json")},
        **kwargs,
    )
