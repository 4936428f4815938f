"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: typing.py
@DateTime: 2026-02-08
@Docs: Shared protocols, types and annotation helpers.
共享协议、类型与注解助手。
"""

import functools
import types
import typing
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter

if TYPE_CHECKING:
    from fastapi_data_validate.validation import Validation

type BeforeFunc = Callable[[str, "Validation"], bool]
type FilterFunc = Callable[[Any], Any]
type ValidatorFunc = Callable[..., bool]


@runtime_checkable
class ConfigValidationHook(Protocol):
    """
    Object that customizes its own validation session.
    可自定义自身校验会话的对象。
    """

    def config_validation(self, v: "Validation") -> None: ...


@runtime_checkable
class TranslatesHook(Protocol):
    """
    Object that provides field display labels.
    提供字段显示名称的对象。

    Returns:
        dict[str, str]: Field name to label.
        dict[str, str]: 字段名到显示名称的映射。
    """

    def translates(self) -> Mapping[str, str]: ...


@runtime_checkable
class MessagesHook(Protocol):
    """
    Object that provides custom error messages.
    提供自定义错误消息的对象。

    Returns:
        dict[str, str]: Message key to template.
        dict[str, str]: 消息键到模板的映射。
    """

    def messages(self) -> Mapping[str, str]: ...


# ---------------------------------------------------------------------------
# Annotation helpers / 注解助手
# ---------------------------------------------------------------------------


def annotations_of(cls: type) -> dict[str, Any]:
    """
    Field annotations of a model, dataclass or plain class.
    模型、数据类或普通类的字段注解。

    Args:
        cls: Class object.
            类对象。

    Returns:
        dict[str, Any]: Field name to annotation.
        dict[str, Any]: 字段名到注解的映射。
    """
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return dict(getattr(cls, "__annotations__", {}) or {})


def is_nullable(annotation: Any) -> bool:
    """
    Whether an annotation explicitly admits None (Optional[X], X | None).
    注解是否显式允许 None（Optional[X]、X | None）。
    """
    if annotation is type(None):
        return True
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        return type(None) in typing.get_args(annotation)
    return False


def unwrap_optional(annotation: Any) -> Any:
    """
    Strip None from Optional[X] (other unions are returned unchanged).
    去掉 Optional[X] 中的 None（其它联合类型原样返回）。
    """
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


@functools.lru_cache(maxsize=256)
def _cached_adapter(annotation: Any) -> TypeAdapter[Any]:
    return TypeAdapter(annotation)


def type_adapter(annotation: Any) -> TypeAdapter[Any]:
    """
    Return a (cached when hashable) pydantic TypeAdapter.
    返回（可哈希时带缓存的）pydantic TypeAdapter。
    """
    try:
        return _cached_adapter(annotation)
    except TypeError:
        return TypeAdapter(annotation)


def adapt_value(annotation: Any, value: Any) -> Any:
    """
    Convert a value to an annotation using pydantic lax mode.
    使用 pydantic 宽松模式将值转换为注解类型。

    Raises:
        pydantic.ValidationError: Value is not convertible.
        pydantic.ValidationError: 值无法转换。
    """
    if annotation is None or annotation is Any:
        return value
    return type_adapter(annotation).validate_python(value)
