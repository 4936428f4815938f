"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: registry.py
@DateTime: 2026-02-08
@Docs: Validator and filter function registries.
校验器与过滤器函数注册表。

Two independent registries exist: one for validators and one for filters.
Function metadata (arity, variadic flag, parameter kinds) is computed once at
registration time and reused on every call.
存在两个相互独立的注册表：校验器与过滤器。函数元数据（参数个数、是否可变参数、
参数类别）在注册时计算一次，并在每次调用时复用。

The process-wide registries are plain dicts without locking. Register
functions during application startup, not while other threads validate.
进程级注册表是未加锁的普通字典。请在应用启动阶段注册函数，不要在其它线程
校验期间修改。
"""

import inspect
import logging
import re
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from fastapi_data_validate.exceptions import InvalidFunctionError
from fastapi_data_validate.filters import BUILTIN_FILTERS
from fastapi_data_validate.validators import BUILTIN_VALIDATORS
from fastapi_data_validate.values import Kind, kind_from_annotation

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class FuncType(StrEnum):
    """
    Registry function type.
    注册表函数类型。
    """

    VALIDATOR = "validator"
    FILTER = "filter"


# ---------------------------------------------------------------------------
# Alias tables / 别名表
# ---------------------------------------------------------------------------

VALIDATOR_ALIASES: dict[str, str] = {
    "in": "enum",
    "not_in": "notIn",
    "num": "isNumber",
    "range": "between",
    "size": "between",
    "int": "isInt",
    "integer": "isInt",
    "uint": "isUint",
    "bool": "isBool",
    "float": "isFloat",
    "map": "isMap",
    "ints": "isInts",
    "str": "isString",
    "string": "isString",
    "strings": "isStrings",
    "arr": "isArray",
    "array": "isArray",
    "slice": "isSlice",
    "regex": "regexp",
    "eq": "isEqual",
    "equal": "isEqual",
    "intEq": "intEqual",
    "ne": "notEqual",
    "notEq": "notEqual",
    "lte": "max",
    "gte": "min",
    "lessThan": "lt",
    "greaterThan": "gt",
    "len": "length",
    "lenEq": "length",
    "lengthEq": "length",
    "minLen": "minLength",
    "min_len": "minLength",
    "min_length": "minLength",
    "maxLen": "maxLength",
    "max_len": "maxLength",
    "max_length": "maxLength",
    "minSize": "minLength",
    "maxSize": "maxLength",
    "strlen": "stringLength",
    "strLen": "stringLength",
    "strLength": "stringLength",
    "runeLength": "stringLength",
    "ip": "isIP",
    "ipv4": "isIPv4",
    "ipv6": "isIPv6",
    "email": "isEmail",
    "intStr": "isIntString",
    "strInt": "isIntString",
    "intString": "isIntString",
    "hexadecimal": "isHexadecimal",
    "printableASCII": "isPrintableASCII",
    "ascii": "isASCII",
    "ASCII": "isASCII",
    "alpha": "isAlpha",
    "alphaNum": "isAlphaNum",
    "alphaDash": "isAlphaDash",
    "base64": "isBase64",
    "CIDR": "isCIDR",
    "CIDRv4": "isCIDRv4",
    "CIDRv6": "isCIDRv6",
    "dnsName": "isDNSName",
    "DNSName": "isDNSName",
    "dataURI": "isDataURI",
    "empty": "isEmpty",
    "filePath": "isFilePath",
    "dirPath": "isDirPath",
    "hexColor": "isHexColor",
    "isbn10": "isISBN10",
    "ISBN10": "isISBN10",
    "isbn13": "isISBN13",
    "ISBN13": "isISBN13",
    "json": "isJSON",
    "JSON": "isJSON",
    "lat": "isLatitude",
    "latitude": "isLatitude",
    "lon": "isLongitude",
    "longitude": "isLongitude",
    "mac": "isMAC",
    "multiByte": "isMultiByte",
    "number": "isNumber",
    "rgbColor": "isRGBColor",
    "RGBColor": "isRGBColor",
    "url": "isURL",
    "URL": "isURL",
    "fullURL": "isFullURL",
    "uuid": "isUUID",
    "uuid3": "isUUID3",
    "uuid4": "isUUID4",
    "uuid5": "isUUID5",
    "UUID": "isUUID",
    "UUID3": "isUUID3",
    "UUID4": "isUUID4",
    "UUID5": "isUUID5",
    "unixPath": "isUnixPath",
    "winPath": "isWinPath",
    "cnMobile": "isCnMobile",
    "date": "isDate",
    "gtDate": "afterDate",
    "ltDate": "beforeDate",
    "gteDate": "afterOrEqualDate",
    "lteDate": "beforeOrEqualDate",
    "img": "isImage",
    "file": "isFile",
    "image": "isImage",
    "mimes": "inMimeTypes",
    "mimeType": "inMimeTypes",
    "mimeTypes": "inMimeTypes",
    "required_if": "requiredIf",
    "required_unless": "requiredUnless",
    "required_with": "requiredWith",
    "required_with_all": "requiredWithAll",
    "required_without": "requiredWithout",
    "required_without_all": "requiredWithoutAll",
    "eq_field": "eqField",
    "ne_field": "neField",
    "gt_field": "gtField",
    "gte_field": "gteField",
    "lt_field": "ltField",
    "lte_field": "lteField",
    "starts_with": "startsWith",
    "ends_with": "endsWith",
}

FILTER_ALIASES: dict[str, str] = {
    "toInt": "int",
    "toUint": "uint",
    "toInt64": "int64",
    "toFloat": "float",
    "toBool": "bool",
    "trimSpace": "trim",
    "trimLeft": "ltrim",
    "trimRight": "rtrim",
    "lowercase": "lower",
    "uppercase": "upper",
    "lowerFirst": "lcFirst",
    "upperFirst": "ucFirst",
    "upperWord": "ucWord",
    "camelCase": "camel",
    "snakeCase": "snake",
    "escapeJS": "escapeJs",
    "escapeHTML": "escapeHtml",
    "encodeUrl": "urlEncode",
    "decodeUrl": "urlDecode",
    "str2array": "str2arr",
    "strToArray": "str2arr",
    "strToInts": "str2ints",
    "strToTime": "str2time",
}


def validator_name(name: str) -> str:
    """
    Resolve a validator alias to its canonical name.
    将校验器别名解析为规范名称。
    """
    return VALIDATOR_ALIASES.get(name, name)


def filter_name(name: str) -> str:
    """
    Resolve a filter alias to its canonical name.
    将过滤器别名解析为规范名称。
    """
    return FILTER_ALIASES.get(name, name)


def validator_aliases(canonical: str) -> list[str]:
    """
    Return every alias pointing at a canonical validator name.
    返回指向某个规范校验器名称的全部别名。
    """
    return [alias for alias, real in VALIDATOR_ALIASES.items() if real == canonical]


def is_required_name(name: str) -> bool:
    """
    Whether a validator belongs to the required* family.
    校验器是否属于 required* 系列。
    """
    return validator_name(name).startswith("required")


# ---------------------------------------------------------------------------
# Function metadata / 函数元数据
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FuncMeta:
    """
    Metadata of a registered validator or filter.
    已注册校验器或过滤器的元数据。

    Attributes:
        name: Registered name.
            注册名称。
        func: The callable.
            可调用对象。
        is_builtin: Shipped with the engine.
            是否为引擎内置函数。
        num_params: Positional parameter count (value included, variadic excluded).
            位置参数数量（包含值参数，不含可变参数）。
        num_required: Positional parameters without default.
            无默认值的位置参数数量。
        is_variadic: Accepts *args.
            是否接受 *args。
        param_kinds: Kinds of the positional parameters.
            位置参数的类别。
        variadic_kind: Kind of each *args element.
            每个 *args 元素的类别。
        returns_error: Filter returns (value, error).
            过滤器返回 (值, 错误)。
        is_context: Bound to a validation session (receives session and field first).
            绑定到校验会话（首先接收会话与字段名）。
    """

    name: str
    func: Callable[..., Any]
    is_builtin: bool = False
    num_params: int = 1
    num_required: int = 1
    is_variadic: bool = False
    param_kinds: tuple[Kind, ...] = (Kind.ANY,)
    variadic_kind: Kind = Kind.ANY
    returns_error: bool = False
    is_context: bool = False

    @property
    def value_kind(self) -> Kind:
        return self.param_kinds[0] if self.param_kinds else Kind.ANY

    def arg_kind(self, index: int) -> Kind:
        """
        Kind of the positional parameter at index (0 is the value).
        指定位置参数的类别（0 为值参数）。
        """
        if index < len(self.param_kinds):
            return self.param_kinds[index]
        return self.variadic_kind

    def accepts_arg_count(self, count: int) -> bool:
        """
        Whether `count` extra arguments (value excluded) fit the signature.
        `count` 个额外参数（不含值参数）是否符合签名。
        """
        if count < self.num_required - 1:
            return False
        return self.is_variadic or count <= self.num_params - 1


def _type_hints(fn: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(fn)
    except (NameError, TypeError):
        return dict(getattr(fn, "__annotations__", {}) or {})


def _returns_error(annotation: Any) -> bool:
    if typing.get_origin(annotation) is not tuple:
        return False
    args = typing.get_args(annotation)
    if len(args) != 2:
        return False
    second = args[1]
    if typing.get_origin(second) in (typing.Union, types.UnionType):
        candidates = typing.get_args(second)
    else:
        candidates = (second,)
    return any(isinstance(c, type) and issubclass(c, BaseException) for c in candidates)


def build_meta(
    name: str,
    fn: Callable[..., Any],
    *,
    func_type: FuncType = FuncType.VALIDATOR,
    is_builtin: bool = False,
    skip: int = 0,
) -> FuncMeta:
    """
    Inspect a function and build its metadata.
    检查函数并构建其元数据。

    Args:
        name: Registered name.
            注册名称。
        fn: Validator or filter callable.
            校验器或过滤器可调用对象。
        func_type: Validator or filter.
            校验器或过滤器。
        is_builtin: Shipped with the engine.
            是否为内置函数。
        skip: Leading parameters that are not part of the call (self, field).
            不参与调用的前置参数数量（self、field）。

    Returns:
        FuncMeta: Function metadata.
        FuncMeta: 函数元数据。

    Raises:
        InvalidFunctionError: Name or signature is invalid.
        InvalidFunctionError: 名称或签名无效。
    """
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise InvalidFunctionError(message=f"invalid {func_type} name '{name}'", details={"name": name})
    if not callable(fn):
        raise InvalidFunctionError(message=f"{func_type} '{name}' must be callable", details={"name": name})
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise InvalidFunctionError(message=f"cannot inspect {func_type} '{name}'", details={"name": name}) from exc

    hints = _type_hints(fn)
    positional = [
        p
        for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ][skip:]
    variadic = next((p for p in sig.parameters.values() if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
    if not positional and variadic is None:
        raise InvalidFunctionError(
            message=f"{func_type} '{name}' must accept at least one parameter", details={"name": name}
        )

    ret = hints.get("return", sig.return_annotation)
    if func_type is FuncType.VALIDATOR and ret is not inspect.Signature.empty and ret is not bool:
        raise InvalidFunctionError(
            message=f"validator '{name}' must return bool", details={"name": name, "return": repr(ret)}
        )

    kinds = tuple(kind_from_annotation(hints.get(p.name, p.annotation)) for p in positional)
    return FuncMeta(
        name=name,
        func=fn,
        is_builtin=is_builtin,
        num_params=len(positional),
        num_required=max(1, sum(1 for p in positional if p.default is inspect.Parameter.empty)) if positional else 0,
        is_variadic=variadic is not None,
        param_kinds=kinds,
        variadic_kind=kind_from_annotation(hints.get(variadic.name, variadic.annotation)) if variadic else Kind.ANY,
        returns_error=func_type is FuncType.FILTER and _returns_error(ret),
        is_context=skip > 0,
    )


# ---------------------------------------------------------------------------
# Registry / 注册表
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """
    Copy of registry contents for later restore.
    注册表内容副本，用于之后恢复。
    """

    funcs: dict[str, FuncMeta]
    aliases: dict[str, str]


class FuncRegistry:
    """
    Named function registry with alias resolution.
    支持别名解析的具名函数注册表。

    Re-registering a name replaces the previous function (last write wins).
    重复注册同名函数会替换旧函数（后写入者生效）。
    """

    def __init__(self, func_type: FuncType, aliases: Mapping[str, str] | None = None) -> None:
        self.func_type = func_type
        self._funcs: dict[str, FuncMeta] = {}
        self._aliases = aliases if aliases is not None else {}

    def __len__(self) -> int:
        return len(self._funcs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def has(self, name: str) -> bool:
        return name in self

    def register(self, name: str, fn: Callable[..., Any], *, is_builtin: bool = False) -> FuncMeta:
        """
        Register a function under a name.
        以指定名称注册函数。

        Args:
            name: Function name.
                函数名称。
            fn: Callable.
                可调用对象。
            is_builtin: Shipped with the engine.
                是否为内置函数。

        Returns:
            FuncMeta: Computed metadata.
            FuncMeta: 计算得到的元数据。

        Raises:
            InvalidFunctionError: Invalid name or signature.
            InvalidFunctionError: 名称或签名无效。
        """
        meta = build_meta(name, fn, func_type=self.func_type, is_builtin=is_builtin)
        self._funcs[name] = meta
        logger.debug("registered %s %s", self.func_type, name)
        return meta

    def register_many(self, funcs: Mapping[str, Callable[..., Any]], *, is_builtin: bool = False) -> None:
        for name, fn in funcs.items():
            self.register(name, fn, is_builtin=is_builtin)

    def real_name(self, name: str) -> str:
        return self._aliases.get(name, name)

    def get(self, name: str) -> FuncMeta | None:
        """
        Look up a function by name or alias.
        按名称或别名查找函数。
        """
        meta = self._funcs.get(name)
        if meta is None:
            meta = self._funcs.get(self.real_name(name))
        return meta

    def resolve(self, name: str, *, local: "FuncRegistry | None" = None) -> tuple[FuncMeta | None, bool]:
        """
        Resolve a function, checking session-local overrides first.
        解析函数，优先检查会话级覆盖。

        Args:
            name: Function name or alias.
                函数名称或别名。
            local: Session-local registry.
                会话级注册表。

        Returns:
            tuple[FuncMeta | None, bool]: Metadata and found flag.
            tuple[FuncMeta | None, bool]: 元数据与是否找到的标记。
        """
        if local is not None:
            meta = local.get(name)
            if meta is not None:
                return meta, True
        meta = self.get(name)
        return meta, meta is not None

    def names(self) -> list[str]:
        return list(self._funcs)

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(funcs=dict(self._funcs), aliases=dict(self._aliases))

    def restore(self, snapshot: RegistrySnapshot) -> None:
        """
        Restore contents captured by snapshot().
        恢复 snapshot() 捕获的内容。
        """
        self._funcs = dict(snapshot.funcs)
        self._aliases.clear()
        self._aliases.update(snapshot.aliases)


# ---------------------------------------------------------------------------
# Process-wide registries / 进程级注册表
# ---------------------------------------------------------------------------

validator_registry = FuncRegistry(FuncType.VALIDATOR, VALIDATOR_ALIASES)
validator_registry.register_many(BUILTIN_VALIDATORS, is_builtin=True)

filter_registry = FuncRegistry(FuncType.FILTER, FILTER_ALIASES)
filter_registry.register_many(BUILTIN_FILTERS, is_builtin=True)


def add_validator(name: str, fn: Callable[..., bool]) -> FuncMeta:
    """
    Register a global validator.
    注册全局校验器。

    Args:
        name: Validator name.
            校验器名称。
        fn: Callable `fn(value, *args) -> bool`.
            可调用对象 `fn(value, *args) -> bool`。

    Returns:
        FuncMeta: Computed metadata.
        FuncMeta: 计算得到的元数据。
    """
    return validator_registry.register(name, fn)


def add_validators(funcs: Mapping[str, Callable[..., bool]]) -> None:
    validator_registry.register_many(funcs)


def add_filter(name: str, fn: Callable[..., Any]) -> FuncMeta:
    """
    Register a global filter.
    注册全局过滤器。

    Args:
        name: Filter name.
            过滤器名称。
        fn: Callable `fn(value, *args) -> new_value`.
            可调用对象 `fn(value, *args) -> new_value`。

    Returns:
        FuncMeta: Computed metadata.
        FuncMeta: 计算得到的元数据。
    """
    return filter_registry.register(name, fn)


def add_filters(funcs: Mapping[str, Callable[..., Any]]) -> None:
    filter_registry.register_many(funcs)


def snapshot_registries() -> tuple[RegistrySnapshot, RegistrySnapshot]:
    """
    Capture both global registries (for tests).
    捕获两个全局注册表（用于测试）。
    """
    return validator_registry.snapshot(), filter_registry.snapshot()


def restore_registries(snapshot: tuple[RegistrySnapshot, RegistrySnapshot]) -> None:
    validator_registry.restore(snapshot[0])
    filter_registry.restore(snapshot[1])
