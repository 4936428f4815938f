"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: binding.py
@DateTime: 2026-02-08
@Docs: Bind validated safe data onto models and objects.
将校验后的安全数据绑定到模型与对象。
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar, overload

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fastapi_data_validate.exceptions import BindMismatchError, FieldNotFoundError, FieldNotSettableError
from fastapi_data_validate.paths import has_wildcard, set_by_path, split_path
from fastapi_data_validate.sources import StructSource

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def _bindable(safe_data: Mapping[str, Any]) -> dict[str, Any]:
    # Wildcard keys are aggregated views of several fields.
    return {k: v for k, v in safe_data.items() if not has_wildcard(k)}


def _model_payload(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    names = {name.lower(): name for name in model.model_fields}
    payload: dict[str, Any] = {}
    for key, value in data.items():
        head, *rest = split_path(key)
        name = head if head in model.model_fields else names.get(head.lower())
        if name is None:
            raise BindMismatchError(
                message=f"field '{key}' has no destination on {model.__name__}",
                details={"field": key, "model": model.__name__},
            )
        set_by_path(payload, ".".join([name, *rest]), value)
    return payload


@overload
def bind_safe_data(safe_data: Mapping[str, Any], dst: type[M]) -> M: ...


@overload
def bind_safe_data(safe_data: Mapping[str, Any], dst: T) -> T: ...


def bind_safe_data(safe_data: Mapping[str, Any], dst: Any) -> Any:
    """
    Copy safe data onto a destination.
    将安全数据复制到目标对象。

    A pydantic model class yields a new instance; a mapping is updated; any
    other object has its fields assigned one by one (case-insensitive names,
    values converted to the field annotation).
    pydantic 模型类会生成新实例；映射会被更新；其它对象逐个字段赋值（字段名大小写
    不敏感，值转换为字段注解类型）。

    Args:
        safe_data: Validated data.
            校验通过的数据。
        dst: Model class, mapping or object instance.
            模型类、映射或对象实例。

    Returns:
        Any: The new model instance, or `dst` itself.
        Any: 新的模型实例，或 `dst` 本身。

    Raises:
        BindMismatchError: A key has no destination field or a value does not fit.
        BindMismatchError: 某个键没有对应字段或值类型不匹配。
    """
    data = _bindable(safe_data)
    if isinstance(dst, type) and issubclass(dst, BaseModel):
        try:
            return dst.model_validate(_model_payload(dst, data))
        except PydanticValidationError as exc:
            raise BindMismatchError(
                message=f"safe data does not match {dst.__name__}", details=exc.errors()
            ) from exc
    if isinstance(dst, MutableMapping):
        for key, value in data.items():
            set_by_path(dst, key, value)
        return dst
    if dst is None or isinstance(dst, (type, Mapping, str, bytes, int, float, list, tuple)):
        raise BindMismatchError(
            message="bind destination must be a model class or an object instance",
            details={"type": type(dst).__name__},
        )

    target = StructSource(dst)
    for key, value in data.items():
        try:
            target.set(key, value)
        except FieldNotFoundError as exc:
            raise BindMismatchError(
                message=f"field '{key}' has no destination on {type(dst).__name__}", details={"field": key}
            ) from exc
        except FieldNotSettableError as exc:
            raise BindMismatchError(
                message=f"field '{key}' cannot be bound: {exc.message}", details={"field": key}
            ) from exc
    return dst
