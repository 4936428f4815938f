"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: values.py
@DateTime: 2026-02-08
@Docs: Value kinds, emptiness, coercion and comparison helpers.
值类别、空值判断、类型转换与比较助手。

Validators and filters are plain Python callables with optional annotations.
The engine maps annotations and runtime values onto a small set of kinds and
converts between kinds before calling a function.
校验器与过滤器是带可选注解的普通 Python 可调用对象。引擎将注解与运行时值映射到
少量类别上，并在调用函数前完成类别间的转换。
"""

import inspect
import operator
import types
import typing
from collections.abc import Callable, Mapping, Sequence, Set
from decimal import Decimal
from enum import StrEnum
from typing import Any

_TRUE_STRINGS = frozenset({"1", "on", "yes", "true"})
_FALSE_STRINGS = frozenset({"0", "off", "no", "false", ""})


class Kind(StrEnum):
    """
    Coarse value kind used for argument matching.
    用于参数匹配的粗粒度值类别。
    """

    ANY = "any"
    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"
    LIST = "list"
    MAP = "map"
    OBJECT = "object"


def kind_of(value: Any) -> Kind:
    """
    Return the kind of a runtime value.
    返回运行时值的类别。

    Args:
        value: Any value.
            任意值。

    Returns:
        Kind: Value kind.
        Kind: 值类别。
    """
    if value is None:
        return Kind.NONE
    # bool is a subclass of int / bool 是 int 的子类
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, (float, Decimal)):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (bytes, bytearray)):
        return Kind.BYTES
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, (list, tuple, Set)):
        return Kind.LIST
    return Kind.OBJECT


def kind_from_annotation(annotation: Any) -> Kind:
    """
    Map a type annotation onto a kind.
    将类型注解映射为值类别。

    Optional[X] resolves to X; unions of several types, Any, object and missing
    annotations resolve to Kind.ANY.
    Optional[X] 解析为 X；多类型联合、Any、object 及缺失注解解析为 Kind.ANY。

    Args:
        annotation: Annotation object.
            注解对象。

    Returns:
        Kind: Matching kind.
        Kind: 对应的类别。
    """
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is object or annotation is None:
        return Kind.ANY
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return kind_from_annotation(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return kind_from_annotation(args[0]) if len(args) == 1 else Kind.ANY
    target = origin or annotation
    if target is bool:
        return Kind.BOOL
    if target is int:
        return Kind.INT
    if target in (float, Decimal):
        return Kind.FLOAT
    if target is str:
        return Kind.STRING
    if target in (bytes, bytearray):
        return Kind.BYTES
    if isinstance(target, type):
        if issubclass(target, Mapping):
            return Kind.MAP
        if issubclass(target, (Sequence, Set)) and not issubclass(target, (str, bytes, bytearray)):
            return Kind.LIST
    return Kind.ANY


def is_nil(value: Any) -> bool:
    return value is None


def is_empty(value: Any) -> bool:
    """
    Check whether a value is empty.
    判断值是否为空。

    None, zero-length strings/collections, False and numeric zero are empty.
    None、零长度字符串/集合、False 以及数值零都视为空。

    Args:
        value: Any value.
            任意值。

    Returns:
        bool: True when empty.
        bool: 为空时返回 True。
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    try:
        return len(value) == 0
    except TypeError:
        return False


def parse_bool(value: Any) -> bool:
    """
    Convert a value to bool (strict textual forms only).
    将值转换为 bool（仅接受严格的文本形式）。

    Raises:
        ValueError: Value is not a recognized boolean.
        ValueError: 值不是可识别的布尔值。
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False
    raise ValueError(f"cannot convert {value!r} to bool")


def to_int(value: Any) -> int:
    """
    Convert a value to int.
    将值转换为 int。

    Raises:
        ValueError: Value is not an integer.
        ValueError: 值不是整数。
    """
    if isinstance(value, bool):
        raise ValueError("bool is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        if value != int(value):
            raise ValueError(f"{value!r} is not an integral number")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"cannot convert {type(value).__name__} to int")


def to_float(value: Any) -> float:
    """
    Convert a value to float.
    将值转换为 float。

    Raises:
        ValueError: Value is not numeric.
        ValueError: 值不是数值。
    """
    if isinstance(value, bool):
        raise ValueError("bool is not a number")
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise ValueError(f"cannot convert {type(value).__name__} to float")


def to_number(value: Any) -> int | float:
    """
    Convert a value to int when possible, else float.
    尽可能转换为 int，否则转换为 float。

    Raises:
        ValueError: Value is not numeric.
        ValueError: 值不是数值。
    """
    if isinstance(value, bool):
        raise ValueError("bool is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return float(value)
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            return float(s)
    raise ValueError(f"cannot convert {type(value).__name__} to number")


def is_numeric(value: Any) -> bool:
    try:
        to_number(value)
    except ValueError:
        return False
    return True


def to_str(value: Any) -> str:
    """
    Convert a scalar value to str.
    将标量值转换为 str。

    Raises:
        TypeError: Value is not a scalar.
        TypeError: 值不是标量。
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    raise TypeError(f"cannot convert {type(value).__name__} to str")


def convert_to_kind(value: Any, kind: Kind) -> Any:
    """
    Best-effort conversion of a value into the given kind.
    尽力将值转换为指定类别。

    Args:
        value: Source value.
            源值。
        kind: Target kind.
            目标类别。

    Returns:
        Any: Converted value.
        Any: 转换后的值。

    Raises:
        ValueError: Conversion failed.
        ValueError: 转换失败。
        TypeError: Kinds are not convertible.
        TypeError: 类别之间不可转换。
    """
    src = kind_of(value)
    if kind is Kind.ANY or src is kind:
        return value
    if src is Kind.NONE:
        raise TypeError(f"cannot convert None to {kind}")
    match kind:
        case Kind.STRING:
            return to_str(value)
        case Kind.INT:
            return to_int(value)
        case Kind.FLOAT:
            return to_float(value)
        case Kind.BOOL:
            return parse_bool(value)
        case Kind.BYTES if src is Kind.STRING:
            return value.encode("utf-8")
        case Kind.LIST if src is Kind.LIST:
            return list(value)
        case Kind.MAP if src is Kind.MAP:
            return dict(value)
    raise TypeError(f"cannot convert {src} to {kind}")


def value_length(value: Any) -> int:
    """
    Length of strings, bytes and collections, -1 for anything else.
    字符串、字节与集合的长度，其它类型返回 -1。
    """
    if value is None or isinstance(value, (bool, int, float, Decimal)):
        return -1
    try:
        return len(value)
    except TypeError:
        return -1


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "lte": operator.le,
    "gt": operator.gt,
    "gte": operator.ge,
}


def compare(src: Any, dst: Any, op: str) -> bool:
    """
    Compare two values with a named operator.
    使用命名运算符比较两个值。

    Numbers and numeric strings compare numerically; a non-numeric string or a
    collection against a number compares its length.
    数值与数值字符串按数值比较；非数值字符串或集合与数字比较时使用其长度。

    Args:
        src: Left value.
            左值。
        dst: Right value.
            右值。
        op: One of eq, ne, lt, lte, gt, gte.
            eq、ne、lt、lte、gt、gte 之一。

    Returns:
        bool: Comparison result, False when not comparable.
        bool: 比较结果，不可比较时为 False。
    """
    fn = _OPERATORS[op]
    try:
        right = to_number(dst)
    except ValueError:
        if isinstance(src, str) and isinstance(dst, str):
            return fn(src, dst)
        return False
    try:
        left: int | float = to_number(src)
    except ValueError:
        length = value_length(src)
        if length < 0:
            return False
        left = length
    return fn(left, right)


def values_equal(a: Any, b: Any) -> bool:
    """
    Loose equality with numeric crossover (1 == 1.0 == "1").
    支持数值互通的宽松相等判断（1 == 1.0 == "1"）。
    """
    if a is None or b is None:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        try:
            return parse_bool(a) == parse_bool(b)
        except ValueError:
            return False
    if a == b:
        return True
    if kind_of(a) in (Kind.INT, Kind.FLOAT) or kind_of(b) in (Kind.INT, Kind.FLOAT):
        try:
            return to_number(a) == to_number(b)
        except ValueError:
            return False
    if isinstance(a, str) or isinstance(b, str):
        try:
            return to_str(a) == to_str(b)
        except TypeError:
            return False
    return False


def contains(container: Any, item: Any) -> bool:
    """
    Check membership across strings, mappings and collections.
    在字符串、映射和集合中判断包含关系。
    """
    if isinstance(container, str):
        try:
            return to_str(item) in container
        except TypeError:
            return False
    if isinstance(container, Mapping):
        return any(values_equal(k, item) for k in container)
    if isinstance(container, (list, tuple, Set)):
        return any(values_equal(v, item) for v in container)
    return False


def format_value(value: Any) -> str:
    """
    Render a value for messages (lists as [a,b,c]).
    渲染用于消息的值（列表渲染为 [a,b,c]）。
    """
    if isinstance(value, (list, tuple, Set)):
        return "[" + ",".join(format_value(v) for v in value) + "]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)
