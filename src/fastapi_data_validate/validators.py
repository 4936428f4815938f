"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validators.py
@DateTime: 2026-02-08
@Docs: Builtin value validators.
内置值校验器。

Each validator is a pure function `fn(value, *args) -> bool` and never raises
on bad data; it returns False instead. Parameter annotations drive argument
conversion: a rule string `minLength:6` passes "6", which is converted to int
because the parameter is annotated `int`.
每个校验器都是纯函数 `fn(value, *args) -> bool`，遇到非法数据不会抛出异常，而是
返回 False。参数注解驱动参数转换：规则字符串 `minLength:6` 传入 "6"，由于参数注解
为 `int`，会被转换为整数。
"""

import base64
import binascii
import ipaddress
import json
import os
import re
import uuid
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any
from urllib.parse import urlsplit

from fastapi_data_validate.values import (
    compare,
    contains,
    is_empty,
    parse_bool,
    to_float,
    to_int,
    to_number,
    value_length,
    values_equal,
)

_EMAIL_RE = re.compile(r"^[\w.+\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9\-]+)+$")
_INT_STRING_RE = re.compile(r"^[+-]?\d+$")
_NUMBER_STRING_RE = re.compile(r"^\d+(\.\d+)?$")
_DIGITS_RE = re.compile(r"^\d+$")
_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_ALPHA_NUM_RE = re.compile(r"^[A-Za-z0-9]+$")
_ALPHA_DASH_RE = re.compile(r"^[A-Za-z0-9_\-]+$")
_HEX_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]+$")
_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
_MAC_RE = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}$")
_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_BASE64_RE = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
_DNS_NAME_RE = re.compile(r"^(?=.{1,253}$)([A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?\.)*[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?\.?$")
_DATA_URI_RE = re.compile(r"^data:[\w.+\-]+/[\w.+\-]+(;[\w\-]+=[\w.\-]+)*(;base64)?,.*$", re.DOTALL)
_CN_MOBILE_RE = re.compile(r"^1\d{10}$")
_UNIX_PATH_RE = re.compile(r"^(/[^/\x00]*)+/?$|^[^/\x00]+(/[^/\x00]*)*$")
_WIN_PATH_RE = re.compile(r"^[a-zA-Z]:\\(?:[^\\/:*?\"<>|\r\n]+\\?)*$")
_WHITESPACE_RE = re.compile(r"\s")

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%Y%m%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
)


def _match(pattern: re.Pattern[str], val: Any) -> bool:
    return isinstance(val, str) and pattern.match(val) is not None


# ---------------------------------------------------------------------------
# Type checks / 类型检查
# ---------------------------------------------------------------------------


def is_empty_value(val: Any) -> bool:
    return is_empty(val)


def is_int(val: Any, *min_max: int) -> bool:
    """
    Check integer value (or integer string), optionally within [min, max].
    检查整数值（或整数字符串），可选地限制在 [min, max] 内。
    """
    if isinstance(val, bool):
        return False
    if isinstance(val, str):
        if not _INT_STRING_RE.match(val.strip()):
            return False
        num = int(val)
    elif isinstance(val, int):
        num = val
    else:
        return False
    if len(min_max) >= 1 and num < min_max[0]:
        return False
    if len(min_max) >= 2 and num > min_max[1]:
        return False
    return True


def is_uint(val: Any) -> bool:
    return is_int(val) and int(val) >= 0


def is_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return True
    if isinstance(val, str):
        try:
            parse_bool(val)
        except ValueError:
            return False
        return True
    return False


def is_float(val: Any) -> bool:
    if isinstance(val, float):
        return True
    if isinstance(val, str) and val.strip():
        try:
            float(val)
        except ValueError:
            return False
        return True
    return False


def is_string(val: Any, *min_max: int) -> bool:
    """
    Check string value, optionally with [min_len, max_len].
    检查字符串值，可选地限制长度 [min_len, max_len]。
    """
    if not isinstance(val, str):
        return False
    if len(min_max) >= 1 and len(val) < min_max[0]:
        return False
    if len(min_max) >= 2 and len(val) > min_max[1]:
        return False
    return True


def is_number(val: Any) -> bool:
    """
    Check non-negative integer or digit string.
    检查非负整数或纯数字字符串。
    """
    if isinstance(val, bool):
        return False
    if isinstance(val, int):
        return val >= 0
    return _match(_DIGITS_RE, val)


def is_string_number(val: str) -> bool:
    return _NUMBER_STRING_RE.match(val) is not None


def is_int_string(val: str) -> bool:
    return _INT_STRING_RE.match(val) is not None


def is_slice(val: Any) -> bool:
    return isinstance(val, (list, tuple))


def is_ints(val: Any) -> bool:
    return isinstance(val, (list, tuple)) and all(isinstance(v, int) and not isinstance(v, bool) for v in val)


def is_strings(val: Any) -> bool:
    return isinstance(val, (list, tuple)) and all(isinstance(v, str) for v in val)


def is_map(val: Any) -> bool:
    return isinstance(val, Mapping)


def is_json(val: str) -> bool:
    if not val:
        return False
    try:
        json.loads(val)
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# Comparison / 比较
# ---------------------------------------------------------------------------


def is_equal(val: Any, want: Any) -> bool:
    return values_equal(val, want)


def not_equal(val: Any, want: Any) -> bool:
    return not values_equal(val, want)


def int_equal(val: int, want: int) -> bool:
    return val == want


def enum(val: Any, values: list) -> bool:
    """
    Check the value is one of the listed values.
    检查值是否在列表中。
    """
    return any(values_equal(val, v) for v in values)


def not_in(val: Any, values: list) -> bool:
    return not enum(val, values)


def in_integers(val: Any, values: list) -> bool:
    try:
        num = to_int(val)
        return any(num == to_int(v) for v in values)
    except ValueError:
        return False


def in_strings(val: str, values: list) -> bool:
    return val in [str(v) for v in values]


def min_value(val: Any, min_val: Any) -> bool:
    return compare(val, min_val, "gte")


def max_value(val: Any, max_val: Any) -> bool:
    return compare(val, max_val, "lte")


def lt(val: Any, dst: Any) -> bool:
    return compare(val, dst, "lt")


def gt(val: Any, dst: Any) -> bool:
    return compare(val, dst, "gt")


def between(val: Any, min_val: int, max_val: int) -> bool:
    """
    Check a numeric value is within [min_val, max_val].
    检查数值是否在 [min_val, max_val] 范围内。
    """
    try:
        num = to_number(val)
    except ValueError:
        return False
    return min_val <= num <= max_val


# ---------------------------------------------------------------------------
# Length / 长度
# ---------------------------------------------------------------------------


def length(val: Any, want: int) -> bool:
    return value_length(val) == want


def min_length(val: Any, min_len: int) -> bool:
    n = value_length(val)
    return n != -1 and n >= min_len


def max_length(val: Any, max_len: int) -> bool:
    n = value_length(val)
    return n != -1 and n <= max_len


def string_length(val: Any, *min_max: int) -> bool:
    """
    Check string length within [min, max] (max optional).
    检查字符串长度在 [min, max] 内（max 可选）。
    """
    if not isinstance(val, str) or not min_max:
        return False
    n = len(val)
    if n < min_max[0]:
        return False
    return len(min_max) < 2 or n <= min_max[1]


# ---------------------------------------------------------------------------
# String content / 字符串内容
# ---------------------------------------------------------------------------


def regexp(val: str, pattern: str) -> bool:
    try:
        return re.search(pattern, val) is not None
    except re.error:
        return False


def contains_value(val: Any, sub: Any) -> bool:
    return contains(val, sub)


def not_contains(val: Any, sub: Any) -> bool:
    return not contains(val, sub)


def starts_with(val: str, prefix: str) -> bool:
    return val.startswith(prefix)


def ends_with(val: str, suffix: str) -> bool:
    return val.endswith(suffix)


def is_email(val: str) -> bool:
    return _EMAIL_RE.match(val) is not None


def is_url(val: str) -> bool:
    """
    Check URL address (scheme optional).
    检查 URL 地址（协议可省略）。
    """
    if not val or _WHITESPACE_RE.search(val):
        return False
    parts = urlsplit(val if "://" in val else f"http://{val}")
    host = parts.hostname or ""
    return bool(host) and ("." in host or host == "localhost" or is_ip(host))


def is_full_url(val: str) -> bool:
    return "://" in val and bool(urlsplit(val).scheme) and is_url(val)


def is_ip(val: str) -> bool:
    try:
        ipaddress.ip_address(val)
    except ValueError:
        return False
    return True


def is_ipv4(val: str) -> bool:
    try:
        ipaddress.IPv4Address(val)
    except ValueError:
        return False
    return True


def is_ipv6(val: str) -> bool:
    try:
        ipaddress.IPv6Address(val)
    except ValueError:
        return False
    return True


def _cidr_version(val: str) -> int:
    if "/" not in val:
        return 0
    try:
        return ipaddress.ip_network(val, strict=False).version
    except ValueError:
        return 0


def is_cidr(val: str) -> bool:
    return _cidr_version(val) != 0


def is_cidr_v4(val: str) -> bool:
    return _cidr_version(val) == 4


def is_cidr_v6(val: str) -> bool:
    return _cidr_version(val) == 6


def is_mac(val: str) -> bool:
    return _MAC_RE.match(val) is not None


def _uuid_version(val: str) -> int | None:
    if not _UUID_RE.match(val):
        return None
    try:
        return uuid.UUID(val).version
    except ValueError:
        return None


def is_uuid(val: str) -> bool:
    return _UUID_RE.match(val) is not None


def is_uuid3(val: str) -> bool:
    return _uuid_version(val) == 3


def is_uuid4(val: str) -> bool:
    return _uuid_version(val) == 4


def is_uuid5(val: str) -> bool:
    return _uuid_version(val) == 5


def is_alpha(val: str) -> bool:
    return _ALPHA_RE.match(val) is not None


def is_alpha_num(val: str) -> bool:
    return _ALPHA_NUM_RE.match(val) is not None


def is_alpha_dash(val: str) -> bool:
    return _ALPHA_DASH_RE.match(val) is not None


def is_ascii(val: str) -> bool:
    return bool(val) and val.isascii()


def is_printable_ascii(val: str) -> bool:
    return bool(val) and all(32 <= ord(c) <= 126 for c in val)


def is_multi_byte(val: str) -> bool:
    return any(ord(c) > 127 for c in val)


def is_base64(val: str) -> bool:
    if not val or not _BASE64_RE.match(val):
        return False
    try:
        base64.b64decode(val, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def is_hexadecimal(val: str) -> bool:
    return _HEX_RE.match(val) is not None


def is_hex_color(val: str) -> bool:
    return _HEX_COLOR_RE.match(val) is not None


def is_rgb_color(val: str) -> bool:
    m = _RGB_COLOR_RE.match(val)
    return m is not None and all(int(g) <= 255 for g in m.groups())


def is_latitude(val: Any) -> bool:
    try:
        return -90.0 <= to_float(val) <= 90.0
    except ValueError:
        return False


def is_longitude(val: Any) -> bool:
    try:
        return -180.0 <= to_float(val) <= 180.0
    except ValueError:
        return False


def is_dns_name(val: str) -> bool:
    return val != "." and _DNS_NAME_RE.match(val) is not None


def is_data_uri(val: str) -> bool:
    return _DATA_URI_RE.match(val) is not None


def is_cn_mobile(val: str) -> bool:
    return _CN_MOBILE_RE.match(val) is not None


def has_whitespace(val: str) -> bool:
    return _WHITESPACE_RE.search(val) is not None


def is_unix_path(val: str) -> bool:
    return _UNIX_PATH_RE.match(val) is not None


def is_win_path(val: str) -> bool:
    return _WIN_PATH_RE.match(val) is not None


def is_file_path(val: str) -> bool:
    return bool(val) and os.path.isfile(val)


def is_dir_path(val: str) -> bool:
    return bool(val) and os.path.isdir(val)


def _isbn10(val: str) -> bool:
    digits = val.replace("-", "").replace(" ", "")
    if len(digits) != 10 or not digits[:9].isdigit() or not (digits[9].isdigit() or digits[9] in "Xx"):
        return False
    total = sum((10 - i) * int(d) for i, d in enumerate(digits[:9]))
    total += 10 if digits[9] in "Xx" else int(digits[9])
    return total % 11 == 0


def _isbn13(val: str) -> bool:
    digits = val.replace("-", "").replace(" ", "")
    if len(digits) != 13 or not digits.isdigit():
        return False
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits[:12]))
    return (10 - total % 10) % 10 == int(digits[12])


def is_isbn10(val: str) -> bool:
    return _isbn10(val)


def is_isbn13(val: str) -> bool:
    return _isbn13(val)


# ---------------------------------------------------------------------------
# Dates / 日期
# ---------------------------------------------------------------------------


def parse_date(val: Any) -> datetime | None:
    """
    Parse a date/datetime value or string.
    解析日期/日期时间值或字符串。

    Args:
        val: date, datetime or string.
            date、datetime 或字符串。

    Returns:
        datetime | None: Parsed datetime (naive), None when invalid.
        datetime | None: 解析后的（无时区）日期时间，非法时为 None。
    """
    if isinstance(val, datetime):
        return val.replace(tzinfo=None)
    if isinstance(val, date):
        return datetime(val.year, val.month, val.day)
    if not isinstance(val, str) or not val.strip():
        return None
    text = val.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        return None


def is_date(val: Any) -> bool:
    return parse_date(val) is not None


def _compare_date(val: Any, dst: Any, op: str) -> bool:
    left, right = parse_date(val), parse_date(dst)
    if left is None or right is None:
        return False
    return compare(left.timestamp(), right.timestamp(), op)


def after_date(val: Any, dst: str) -> bool:
    return _compare_date(val, dst, "gt")


def after_or_equal_date(val: Any, dst: str) -> bool:
    return _compare_date(val, dst, "gte")


def before_date(val: Any, dst: str) -> bool:
    return _compare_date(val, dst, "lt")


def before_or_equal_date(val: Any, dst: str) -> bool:
    return _compare_date(val, dst, "lte")


# ---------------------------------------------------------------------------
# Registry table / 注册表
# ---------------------------------------------------------------------------

BUILTIN_VALIDATORS: dict[str, Callable[..., bool]] = {
    "isEmpty": is_empty_value,
    "isInt": is_int,
    "isUint": is_uint,
    "isBool": is_bool,
    "isFloat": is_float,
    "isString": is_string,
    "isNumber": is_number,
    "isStringNumber": is_string_number,
    "isIntString": is_int_string,
    "isSlice": is_slice,
    "isArray": is_slice,
    "isInts": is_ints,
    "isStrings": is_strings,
    "isMap": is_map,
    "isJSON": is_json,
    "isEqual": is_equal,
    "notEqual": not_equal,
    "intEqual": int_equal,
    "enum": enum,
    "notIn": not_in,
    "inIntegers": in_integers,
    "inStrings": in_strings,
    "min": min_value,
    "max": max_value,
    "lt": lt,
    "gt": gt,
    "between": between,
    "length": length,
    "minLength": min_length,
    "maxLength": max_length,
    "stringLength": string_length,
    "regexp": regexp,
    "contains": contains_value,
    "notContains": not_contains,
    "startsWith": starts_with,
    "endsWith": ends_with,
    "isEmail": is_email,
    "isURL": is_url,
    "isFullURL": is_full_url,
    "isIP": is_ip,
    "isIPv4": is_ipv4,
    "isIPv6": is_ipv6,
    "isCIDR": is_cidr,
    "isCIDRv4": is_cidr_v4,
    "isCIDRv6": is_cidr_v6,
    "isMAC": is_mac,
    "isUUID": is_uuid,
    "isUUID3": is_uuid3,
    "isUUID4": is_uuid4,
    "isUUID5": is_uuid5,
    "isAlpha": is_alpha,
    "isAlphaNum": is_alpha_num,
    "isAlphaDash": is_alpha_dash,
    "isASCII": is_ascii,
    "isPrintableASCII": is_printable_ascii,
    "isMultiByte": is_multi_byte,
    "isBase64": is_base64,
    "isHexadecimal": is_hexadecimal,
    "isHexColor": is_hex_color,
    "isRGBColor": is_rgb_color,
    "isLatitude": is_latitude,
    "isLongitude": is_longitude,
    "isDNSName": is_dns_name,
    "isDataURI": is_data_uri,
    "isCnMobile": is_cn_mobile,
    "hasWhitespace": has_whitespace,
    "isUnixPath": is_unix_path,
    "isWinPath": is_win_path,
    "isFilePath": is_file_path,
    "isDirPath": is_dir_path,
    "isDate": is_date,
    "afterDate": after_date,
    "beforeDate": before_date,
    "afterOrEqualDate": after_or_equal_date,
    "beforeOrEqualDate": before_or_equal_date,
    "isISBN10": is_isbn10,
    "isISBN13": is_isbn13,
}
