"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: rule.py
@DateTime: 2026-02-08
@Docs: Validation rules, filter rules and the rule string grammar.
校验规则、过滤规则与规则字符串语法。

Rule strings look like `"required|minLen:2|enum:a,b,c"`: validators are
separated by `|`, arguments follow `:` and are comma separated.
规则字符串形如 `"required|minLen:2|enum:a,b,c"`：校验器以 `|` 分隔，参数跟在
`:` 之后并以逗号分隔。
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

from fastapi_data_validate.exceptions import RuleConfigError, ValidateError
from fastapi_data_validate.messages import Translator
from fastapi_data_validate.registry import FuncMeta, build_meta, validator_name
from fastapi_data_validate.typing import BeforeFunc, FilterFunc

if TYPE_CHECKING:
    from fastapi_data_validate.validation import Validation

# Validators whose argument is taken verbatim (may contain `,` or `:`).
WHOLE_ARG_VALIDATORS = frozenset({"regexp", "message", "default"})
# Validators receiving the comma separated arguments as one list.
LIST_ARG_VALIDATORS = frozenset({"enum", "notIn", "inIntegers", "inStrings"})


def split_fields(fields: str | Sequence[str]) -> list[str]:
    """
    Split a comma separated field list.
    拆分逗号分隔的字段列表。

    Args:
        fields: `"name, age"` or a sequence of names.
            `"name, age"` 或字段名序列。

    Returns:
        list[str]: Non-empty field names.
        list[str]: 非空字段名列表。
    """
    if isinstance(fields, str):
        fields = fields.split(",")
    return [f.strip() for f in fields if f and f.strip()]


def parse_args(text: str) -> list[str]:
    """
    Split a rule argument string on commas.
    按逗号拆分规则参数字符串。

    A single character is returned as-is so `","` can be an argument.
    单个字符原样返回，因此 `","` 也可作为参数。
    """
    if len(text) == 1:
        return [text]
    return [a.strip() for a in text.split(",")]


def parse_rule_string(rule: str) -> list[tuple[str, list[Any]]]:
    """
    Parse a rule string into (validator, arguments) pairs.
    将规则字符串解析为 (校验器, 参数) 对。

    Args:
        rule: e.g. `"required|min:1|enum:1,2,3|regexp:^\\w+$"`.
            例如 `"required|min:1|enum:1,2,3|regexp:^\\w+$"`。

    Returns:
        list[tuple[str, list[Any]]]: Parsed items in declaration order.
        list[tuple[str, list[Any]]]: 按声明顺序解析出的条目。

    Raises:
        RuleConfigError: A part has an empty validator name.
        RuleConfigError: 某段的校验器名称为空。
    """
    text = rule.strip().strip("|:")
    if not text:
        return []
    items: list[tuple[str, list[Any]]] = []
    for part in text.split("|"):
        part = part.strip()
        if not part:
            continue
        name, sep, arg = part.partition(":")
        name = name.strip()
        if not name:
            raise RuleConfigError(message=f"invalid rule string '{rule}'", details={"rule": rule})
        if not sep:
            items.append((name, []))
            continue
        real = validator_name(name)
        if real in WHOLE_ARG_VALIDATORS:
            items.append((name, [arg]))
        elif real in LIST_ARG_VALIDATORS:
            items.append((name, [parse_args(arg)]))
        else:
            items.append((name, list(parse_args(arg))))
    return items


@dataclass(slots=True)
class Rule:
    """
    One validator applied to one or more fields.
    作用于一个或多个字段的校验器。

    Attributes:
        fields: Target field paths (dotted/wildcard allowed).
            目标字段路径（允许点号/通配符）。
        validator: Validator name, several joined by `|` run in order.
            校验器名称，多个以 `|` 连接时按顺序执行。
        arguments: Validator arguments.
            校验器参数。
        scene: Only apply in this scene ("" = always).
            仅在该场景下生效（"" 表示始终生效）。
        optional: Skip when the value is empty.
            值为空时跳过。
        skip_empty: Skip non-required validators on empty values (None = session setting).
            空值跳过非 required 校验器（None 表示使用会话设置）。
        default_value: Value injected when the field is absent or empty.
            字段缺失或为空时注入的值。
        check_func: Custom validator used instead of the registry.
            替代注册表的自定义校验器。
        filter_func: Filter applied to the value before validation.
            校验前作用于值的过滤器。
        before_func: `fn(field, validation) -> bool`, False skips the field.
            `fn(field, validation) -> bool`，返回 False 时跳过该字段。
        message: Custom message for every validator of the rule.
            规则所有校验器共用的自定义消息。
        messages: Custom messages keyed by validator or `field.validator`.
            以校验器或 `field.validator` 为键的自定义消息。
    """

    fields: list[str]
    validator: str
    arguments: list[Any] = field(default_factory=list)
    scene: str = ""
    optional: bool = False
    skip_empty: bool | None = None
    default_value: Any = None
    check_func: Callable[..., bool] | None = None
    filter_func: FilterFunc | None = None
    before_func: BeforeFunc | None = None
    message: str = ""
    messages: dict[str, str] = field(default_factory=dict)
    _check_meta: FuncMeta | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def new(cls, fields: str | Sequence[str], validator: str, *args: Any) -> Self:
        """
        Create a rule from a field list and validator name.
        根据字段列表与校验器名称创建规则。

        Raises:
            RuleConfigError: No field or no validator given.
            RuleConfigError: 未提供字段或校验器。
        """
        names = split_fields(fields)
        if not names or not validator.strip():
            raise RuleConfigError(
                message="rule requires at least one field and a validator",
                details={"fields": fields, "validator": validator},
            )
        return cls(fields=names, validator=validator.strip(), arguments=list(args))

    def set_scene(self, scene: str) -> Self:
        self.scene = scene
        return self

    def set_optional(self, optional: bool = True) -> Self:
        self.optional = optional
        return self

    def set_skip_empty(self, skip_empty: bool = True) -> Self:
        self.skip_empty = skip_empty
        return self

    def set_default(self, value: Any) -> Self:
        self.default_value = value
        return self

    def set_check_func(self, fn: Callable[..., bool]) -> Self:
        self.check_func = fn
        self._check_meta = None
        return self

    def set_filter_func(self, fn: FilterFunc) -> Self:
        self.filter_func = fn
        return self

    def set_before_func(self, fn: BeforeFunc) -> Self:
        self.before_func = fn
        return self

    def set_message(self, message: str) -> Self:
        self.message = message
        return self

    def set_messages(self, messages: Mapping[str, str]) -> Self:
        self.messages.update(messages)
        return self

    def validator_names(self) -> list[str]:
        return [n.strip() for n in self.validator.split("|") if n.strip()]

    def check_meta(self, name: str) -> FuncMeta:
        """
        Metadata of the custom check function (computed once).
        自定义校验函数的元数据（只计算一次）。
        """
        if self.check_func is None:
            raise RuleConfigError(message=f"rule '{self.validator}' has no check function")
        if self._check_meta is None:
            self._check_meta = build_meta(name, self.check_func)
        return self._check_meta

    def error_message(self, name: str, field_path: str, translator: Translator) -> str:
        """
        Message for a failed validator.
        校验器失败时的消息。

        Rule messages win over translator messages, the most specific first:
        `field.validator`, `validator`, then the rule-wide message.
        规则消息优先于翻译器消息，按特定程度依次为：`field.validator`、
        `validator`、规则通用消息。
        """
        template = (
            self.messages.get(f"{field_path}.{name}")
            or self.messages.get(name)
            or self.messages.get(validator_name(name))
            or self.message
        )
        if template:
            return translator.format(template, field_path, self.arguments)
        return translator.message(name, field_path, *self.arguments)

    def apply(self, v: "Validation") -> bool:
        """
        Run the rule on a session.
        在会话上执行规则。

        Returns:
            bool: True when the session should stop.
            bool: 会话需要停止时返回 True。
        """
        return v.apply_rule(self)


@dataclass(slots=True)
class FilterRule:
    """
    Ordered filter chain applied to fields before validation.
    校验前作用于字段的有序过滤器链。

    Attributes:
        fields: Target field paths.
            目标字段路径。
        filters: Filter name to argument string, in run order.
            过滤器名称到参数字符串，按执行顺序排列。
    """

    fields: list[str]
    filters: dict[str, str] = field(default_factory=dict)

    @classmethod
    def new(cls, fields: str | Sequence[str], rule: str = "") -> Self:
        names = split_fields(fields)
        if not names:
            raise RuleConfigError(message="filter rule requires at least one field", details={"fields": fields})
        fr = cls(fields=names)
        if rule:
            fr.add_filters(*rule.split("|"))
        return fr

    def add_filters(self, *filters: str) -> Self:
        """
        Append filters given as `"name"` or `"name:args"`.
        追加以 `"name"` 或 `"name:args"` 形式给出的过滤器。
        """
        for item in filters:
            name, _, args = item.strip().partition(":")
            if name.strip():
                self.filters[name.strip()] = args.strip()
        return self

    def chain(self) -> list[tuple[str, list[str]]]:
        return [(name, parse_args(args) if args else []) for name, args in self.filters.items()]

    def apply(self, v: "Validation") -> ValidateError | None:
        """
        Run the filter chain on a session.
        在会话上执行过滤器链。

        Returns:
            ValidateError | None: First filter or write-back failure, None on success.
            ValidateError | None: 首个过滤或写回失败，成功时为 None。
        """
        return v.apply_filter_rule(self)
