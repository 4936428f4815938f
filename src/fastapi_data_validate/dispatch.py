"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: dispatch.py
@DateTime: 2026-02-08
@Docs: Validator and filter invocation.
校验器与过滤器调用。

Validator lookup order: the rule's own check function, session validators,
session-aware builtins (`required`, `eqField`, ...), then the global registry.
Frequently used builtins are called directly; everything else goes through the
recorded function metadata with value and argument conversion.
校验器查找顺序：规则自带的校验函数、会话级校验器、感知会话的内置校验器
（`required`、`eqField` 等），最后是全局注册表。常用内置校验器直接调用；
其余函数依据记录的元数据进行值与参数转换后调用。
"""

from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from fastapi_data_validate.context_validators import CONTEXT_VALIDATORS
from fastapi_data_validate.exceptions import (
    ArgumentTypeMismatchError,
    FilterExecutionError,
    InvalidFunctionError,
    RuleConfigError,
    ValidatorExecutionError,
)
from fastapi_data_validate.paths import flatten, has_wildcard, wildcard_depth
from fastapi_data_validate.registry import (
    FuncMeta,
    FuncRegistry,
    filter_registry,
    is_required_name,
    validator_name,
    validator_registry,
)
from fastapi_data_validate.rule import Rule
from fastapi_data_validate.validators import BUILTIN_VALIDATORS
from fastapi_data_validate.values import convert_to_kind

if TYPE_CHECKING:
    from fastapi_data_validate.validation import Validation


class Outcome(Enum):
    """
    Result of one validator call.
    单次校验器调用的结果。
    """

    PASS = "pass"
    FAIL = "fail"
    MISMATCH = "mismatch"


# Marker names that accept any value as safe without a validator lookup.
SAFE_MARKERS = frozenset({"safe", "-"})


# Builtins that accept any value kind and are called without value conversion.
_FAST_PATH: dict[str, Callable[..., bool]] = {
    name: BUILTIN_VALIDATORS[name]
    for name in (
        "min",
        "max",
        "lt",
        "gt",
        "enum",
        "notIn",
        "between",
        "isInt",
        "isString",
        "isNumber",
        "isSlice",
        "length",
        "minLength",
        "maxLength",
        "stringLength",
    )
}


def convert_args(meta: FuncMeta, args: Sequence[Any]) -> tuple[Any, ...]:
    """
    Convert rule arguments to the declared parameter kinds.
    将规则参数转换为声明的参数类别。

    Args:
        meta: Function metadata.
            函数元数据。
        args: Rule arguments (value excluded).
            规则参数（不含值）。

    Returns:
        tuple[Any, ...]: Converted arguments.
        tuple[Any, ...]: 转换后的参数。

    Raises:
        ArgumentTypeMismatchError: An argument cannot be converted.
        ArgumentTypeMismatchError: 参数无法转换。
    """
    out: list[Any] = []
    for i, arg in enumerate(args, start=1):
        kind = meta.arg_kind(i)
        try:
            out.append(convert_to_kind(arg, kind))
        except (TypeError, ValueError) as exc:
            raise ArgumentTypeMismatchError(
                message=f"argument {i} of '{meta.name}' must be {kind}, got {arg!r}",
                details={"func": meta.name, "index": i, "expect": str(kind), "value": repr(arg)},
            ) from exc
    return tuple(out)


def resolve_validator(v: "Validation", rule: Rule, name: str) -> FuncMeta:
    """
    Find the validator for a rule.
    为规则查找校验器。

    Raises:
        RuleConfigError: No validator with that name.
        RuleConfigError: 不存在该名称的校验器。
    """
    if rule.check_func is not None:
        return rule.check_meta(name)
    meta = v.local_validators.get(name)
    if meta is None:
        meta = CONTEXT_VALIDATORS.get(validator_name(name))
    if meta is None:
        meta = validator_registry.get(name)
    if meta is None:
        raise RuleConfigError(message=f"validator '{name}' is not exist", details={"validator": name})
    return meta


def _rule_args(meta: FuncMeta, name: str, args: Sequence[Any]) -> Sequence[Any]:
    if is_required_name(name) and meta.is_context:
        return args if meta.is_variadic else args[: max(meta.num_params - 1, 0)]
    if not meta.accepts_arg_count(len(args)):
        raise RuleConfigError(
            message=f"validator '{name}' does not accept {len(args)} argument(s)",
            details={"validator": name, "count": len(args)},
        )
    return args


def _check(v: "Validation", meta: FuncMeta, field: str, val: Any, args: tuple[Any, ...]) -> tuple[Outcome, str]:
    if meta.is_context:
        ok = meta.func(v, field, val, *args)
        return (Outcome.PASS if ok else Outcome.FAIL), ""

    fast = _FAST_PATH.get(meta.name) if meta.is_builtin else None
    if fast is not None:
        return (Outcome.PASS if fast(val, *args) else Outcome.FAIL), ""

    kind = meta.value_kind
    try:
        val = convert_to_kind(val, kind)
    except (TypeError, ValueError):
        return Outcome.MISMATCH, str(kind)

    if meta.is_builtin:
        ok = meta.func(val, *args)
    else:
        try:
            ok = meta.func(val, *args)
        except Exception as exc:
            raise ValidatorExecutionError(
                message=f"validator '{meta.name}' failed on field '{field}': {exc}",
                details={"validator": meta.name, "field": field},
            ) from exc
        if not isinstance(ok, bool):
            raise InvalidFunctionError(
                message=f"validator '{meta.name}' must return bool, got {type(ok).__name__}",
                details={"validator": meta.name},
            )
    return (Outcome.PASS if ok else Outcome.FAIL), ""


def value_validate(v: "Validation", rule: Rule, field: str, name: str, val: Any) -> tuple[Outcome, str]:
    """
    Run one validator on a field value.
    对字段值执行一个校验器。

    Wildcard fields holding a list are flattened and every element is checked;
    one failing element fails the field. An empty list is checked as a whole.
    持有列表的通配符字段会被展开并逐个检查元素；任一元素失败则该字段失败。
    空列表作为整体检查。

    Args:
        v: Validation session.
            校验会话。
        rule: Rule being applied.
            正在执行的规则。
        field: Field path.
            字段路径。
        name: Validator name as written in the rule.
            规则中书写的校验器名称。
        val: Field value.
            字段值。

    Returns:
        tuple[Outcome, str]: Outcome and the expected kind for MISMATCH.
        tuple[Outcome, str]: 结果，以及 MISMATCH 时期望的类别。

    Raises:
        RuleConfigError: Unknown validator or wrong argument count.
        RuleConfigError: 未知校验器或参数个数错误。
        ArgumentTypeMismatchError: Rule argument cannot be converted.
        ArgumentTypeMismatchError: 规则参数无法转换。
        ValidatorExecutionError: Custom validator raised.
        ValidatorExecutionError: 自定义校验器抛出异常。
    """
    if name in SAFE_MARKERS:
        return Outcome.PASS, ""
    meta = resolve_validator(v, rule, name)
    args = convert_args(meta, _rule_args(meta, name, rule.arguments))

    if has_wildcard(field) and isinstance(val, list):
        depth = v.config.wildcard_flatten_depth
        items = flatten(val, wildcard_depth(field) - 1 if depth is None else depth)
        if items:
            for item in items:
                outcome = _check(v, meta, field, item, args)
                if outcome[0] is not Outcome.PASS:
                    return outcome
            return Outcome.PASS, ""
    return _check(v, meta, field, val, args)


# ---------------------------------------------------------------------------
# Filters / 过滤器
# ---------------------------------------------------------------------------


def call_filter(meta: FuncMeta, val: Any, args: Sequence[Any]) -> Any:
    """
    Call one registered filter.
    调用一个已注册过滤器。

    Raises:
        RuleConfigError: Wrong argument count.
        RuleConfigError: 参数个数错误。
        ArgumentTypeMismatchError: Filter argument cannot be converted.
        ArgumentTypeMismatchError: 过滤器参数无法转换。
        FilterExecutionError: Filter rejected the value.
        FilterExecutionError: 过滤器拒绝该值。
    """
    if not meta.accepts_arg_count(len(args)):
        raise RuleConfigError(
            message=f"filter '{meta.name}' does not accept {len(args)} argument(s)",
            details={"filter": meta.name, "count": len(args)},
        )
    call_args = convert_args(meta, args)
    try:
        val = convert_to_kind(val, meta.value_kind)
        out = meta.func(val, *call_args)
    except Exception as exc:
        raise FilterExecutionError(
            message=f"filter '{meta.name}' failed: {exc}", details={"filter": meta.name}
        ) from exc
    if meta.returns_error:
        out, err = out
        if err is not None:
            raise FilterExecutionError(message=str(err), details={"filter": meta.name}) from err
    return out


def apply_filter_func(fn: Callable[[Any], Any], val: Any) -> Any:
    """
    Call a rule's own filter function.
    调用规则自带的过滤函数。

    Raises:
        FilterExecutionError: The function raised.
        FilterExecutionError: 函数抛出异常。
    """
    try:
        return fn(val)
    except Exception as exc:
        raise FilterExecutionError(message=str(exc) or type(exc).__name__) from exc


def run_filters(chain: Sequence[tuple[str, Sequence[Any]]], val: Any, *, local: FuncRegistry | None = None) -> Any:
    """
    Pipe a value through a filter chain.
    将值依次通过过滤器链。

    Args:
        chain: (filter name, arguments) pairs in run order.
            按执行顺序排列的 (过滤器名称, 参数) 对。
        val: Input value.
            输入值。
        local: Session filter registry.
            会话级过滤器注册表。

    Returns:
        Any: Filtered value.
        Any: 过滤后的值。

    Raises:
        RuleConfigError: Unknown filter.
        RuleConfigError: 未知过滤器。
        FilterExecutionError: A filter rejected the value.
        FilterExecutionError: 某个过滤器拒绝该值。
    """
    for name, args in chain:
        meta, ok = filter_registry.resolve(name, local=local)
        if not ok or meta is None:
            raise RuleConfigError(message=f"filter '{name}' is not exist", details={"filter": name})
        val = call_filter(meta, val, args)
    return val
