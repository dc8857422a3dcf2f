from typing import Any, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


def multi_dict(source) -> dict[str, Any]:
    """Flatten a starlette multi-dict: repeated keys become lists."""
    data: dict[str, Any] = {}
    for key in source.keys():
        values = [v for v in source.getlist(key) if isinstance(v, str)]
        if not values:
            continue
        data[key] = values if len(values) > 1 else values[0]
    return data


def parse_model(model_cls: type[M], data: dict[str, Any]) -> M:
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False, include_context=False))


def query_model(model_cls: type[M]) -> Callable[[Request], M]:
    def _dependency(request: Request) -> M:
        return parse_model(model_cls, multi_dict(request.query_params))

    return _dependency


def form_model(model_cls: type[M]) -> Callable[[Request], Any]:
    async def _dependency(request: Request) -> M:
        form = await request.form()
        return parse_model(model_cls, multi_dict(form))

    return _dependency
