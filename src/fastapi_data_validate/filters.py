"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: filters.py
@DateTime: 2026-02-08
@Docs: Builtin value filters.
内置值过滤器。

A filter is `fn(value, *args) -> new_value`. Conversion filters raise
ValueError/TypeError on bad input; the engine reports that as a `_filter`
error instead of propagating it.
过滤器为 `fn(value, *args) -> new_value`。转换类过滤器在输入非法时抛出
ValueError/TypeError，引擎会将其记录为 `_filter` 错误而不是向上抛出。
"""

import html
import re
from collections.abc import Callable
from datetime import datetime
from typing import Any
from urllib.parse import quote_plus, unquote_plus

from fastapi_data_validate.values import parse_bool, to_float, to_int

_WORD_SPLIT_RE = re.compile(r"[\s_\-]+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "\n": "\\n",
    "\r": "\\r",
}


# ---------------------------------------------------------------------------
# Conversion / 类型转换
# ---------------------------------------------------------------------------


def to_integer(val: Any) -> int:
    """
    Convert to int ("50 " -> 50).
    转换为 int（"50 " -> 50）。

    Raises:
        ValueError: Value is not an integer.
        ValueError: 值不是整数。
    """
    return to_int(val)


def to_unsigned(val: Any) -> int:
    num = to_int(val)
    if num < 0:
        raise ValueError(f"{val!r} is not an unsigned integer")
    return num


def to_float_value(val: Any) -> float:
    return to_float(val)


def to_bool(val: Any) -> bool:
    return parse_bool(val)


# ---------------------------------------------------------------------------
# Strings / 字符串
# ---------------------------------------------------------------------------


def trim(val: str, cutset: str = "") -> str:
    return val.strip(cutset or None)


def ltrim(val: str, cutset: str = "") -> str:
    return val.lstrip(cutset or None)


def rtrim(val: str, cutset: str = "") -> str:
    return val.rstrip(cutset or None)


def lower(val: str) -> str:
    return val.lower()


def upper(val: str) -> str:
    return val.upper()


def lc_first(val: str) -> str:
    return val[:1].lower() + val[1:]


def uc_first(val: str) -> str:
    return val[:1].upper() + val[1:]


def uc_word(val: str) -> str:
    return " ".join(uc_first(w) for w in val.split(" "))


def camel(val: str, sep: str = "_") -> str:
    """
    Convert to lowerCamelCase ("user_name" -> "userName").
    转换为小驼峰（"user_name" -> "userName"）。
    """
    parts = [p for p in (val.split(sep) if sep else _WORD_SPLIT_RE.split(val)) if p]
    if not parts:
        return ""
    return parts[0][:1].lower() + parts[0][1:] + "".join(uc_first(p) for p in parts[1:])


def snake(val: str, sep: str = "_") -> str:
    """
    Convert to snake_case ("userName" -> "user_name").
    转换为蛇形命名（"userName" -> "user_name"）。
    """
    spaced = _CAMEL_BOUNDARY_RE.sub(" ", val.strip())
    return sep.join(p.lower() for p in _WORD_SPLIT_RE.split(spaced) if p)


def escape_js(val: str) -> str:
    return "".join(_JS_ESCAPES.get(c, c) for c in val)


def escape_html(val: str) -> str:
    return html.escape(val)


def url_encode(val: str) -> str:
    return quote_plus(val)


def url_decode(val: str) -> str:
    return unquote_plus(val)


def substr(val: str, start: int, length: int = -1) -> str:
    if length < 0:
        return val[start:]
    return val[start : start + length]


def email(val: str) -> str:
    return val.strip().lower()


def url(val: str) -> str:
    return val.strip()


# ---------------------------------------------------------------------------
# Splitting / 拆分
# ---------------------------------------------------------------------------


def str2arr(val: str, sep: str = ",") -> list[str]:
    """
    Split a string into trimmed, non-empty items.
    将字符串拆分为去空白的非空条目。
    """
    return [s.strip() for s in val.split(sep) if s.strip()]


def str2ints(val: str, sep: str = ",") -> list[int]:
    return [to_int(s) for s in str2arr(val, sep)]


def str2time(val: str, layout: str = "") -> datetime:
    """
    Parse a time string (ISO 8601 when no layout is given).
    解析时间字符串（未提供格式时使用 ISO 8601）。

    Raises:
        ValueError: Text does not match the layout.
        ValueError: 文本与格式不匹配。
    """
    if layout:
        return datetime.strptime(val.strip(), layout)
    return datetime.fromisoformat(val.strip())


BUILTIN_FILTERS: dict[str, Callable[..., Any]] = {
    "int": to_integer,
    "uint": to_unsigned,
    "int64": to_integer,
    "float": to_float_value,
    "bool": to_bool,
    "trim": trim,
    "ltrim": ltrim,
    "rtrim": rtrim,
    "lower": lower,
    "upper": upper,
    "lcFirst": lc_first,
    "ucFirst": uc_first,
    "ucWord": uc_word,
    "camel": camel,
    "snake": snake,
    "escapeJs": escape_js,
    "escapeHtml": escape_html,
    "urlEncode": url_encode,
    "urlDecode": url_decode,
    "str2arr": str2arr,
    "str2ints": str2ints,
    "str2time": str2time,
    "substr": substr,
    "email": email,
    "url": url,
}
