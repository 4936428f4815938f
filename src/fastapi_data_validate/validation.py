"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation.py
@DateTime: 2026-02-08
@Docs: Validation session.
校验会话。

A session wraps one data source, holds the rules and runs the two-phase
pipeline: filter rules first (values are rewritten in the source), then
validation rules (passing values are copied into the safe data).
会话包装一个数据源并持有规则，执行两阶段流程：先执行过滤规则（值会写回数据源），
再执行校验规则（通过校验的值会复制到安全数据中）。

A session is not safe for concurrent use; create one per request.
会话不支持并发使用，请为每个请求单独创建。

Examples:
    >>> from fastapi_data_validate import from_map
    >>> v = from_map({"age": 45})
    >>> v.string_rule("age", "required|min:1").validate()
    True
    >>> v.safe_val("age")
    45
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Self

from fastapi_data_validate.binding import bind_safe_data
from fastapi_data_validate.config import ValidateConfig, get_global_config
from fastapi_data_validate.context_validators import FILE_VALIDATORS, ContextValidators
from fastapi_data_validate.dispatch import Outcome, apply_filter_func, run_filters, value_validate
from fastapi_data_validate.errors import Errors
from fastapi_data_validate.exceptions import (
    FieldNotFoundError,
    FieldNotSettableError,
    FilterExecutionError,
    ValidateError,
    ValidationError,
)
from fastapi_data_validate.messages import (
    DEFAULT_MESSAGE_KEY,
    FILTER_ERROR_KEY,
    TYPE_ERROR_KEY,
    VALIDATE_ERROR_KEY,
    Translator,
)
from fastapi_data_validate.paths import expand_path, has_wildcard
from fastapi_data_validate.registry import (
    FILTER_ALIASES,
    VALIDATOR_ALIASES,
    FuncRegistry,
    FuncType,
    is_required_name,
    validator_name,
)
from fastapi_data_validate.rule import FilterRule, Rule, parse_rule_string, split_fields
from fastapi_data_validate.sources import DataSource, SourceKind
from fastapi_data_validate.values import is_empty

logger = logging.getLogger(__name__)


class Validation(ContextValidators):
    """
    Validation session over one data source.
    基于单个数据源的校验会话。

    Args:
        data: Data source.
            数据源。
        scene: Active scene name.
            当前场景名。
        config: Session config (defaults to the global config).
            会话配置（默认使用全局配置）。
    """

    def __init__(self, data: DataSource, *, scene: str | None = None, config: ValidateConfig | None = None) -> None:
        self.data = data
        self.config = config or get_global_config()
        self.translator = Translator()
        self.errors = Errors()
        self.rules: list[Rule] = []
        self.filter_rules: list[FilterRule] = []
        self.scenes: dict[str, list[str]] = {}
        self.local_validators = FuncRegistry(FuncType.VALIDATOR, VALIDATOR_ALIASES)
        self.local_filters = FuncRegistry(FuncType.FILTER, FILTER_ALIASES)

        self._scene = scene or ""
        self._stop_on_error = self.config.stop_on_error
        self._skip_on_empty = self.config.skip_on_empty
        self._update_source = self.config.update_source
        self._check_default = self.config.check_default

        self._defaults: dict[str, Any] = {}
        self._safe_data: dict[str, Any] = {}
        self._filtered_data: dict[str, Any] = {}
        self._has_validated = False
        self._creation_error: Exception | None = None

    def __repr__(self) -> str:
        return f"<Validation source={self.data.kind} scene={self._scene!r} rules={len(self.rules)}>"

    # -----------------------------------------------------------------------
    # Options / 选项
    # -----------------------------------------------------------------------

    def stop_on_error(self, flag: bool = True) -> Self:
        self._stop_on_error = flag
        return self

    def skip_on_empty(self, flag: bool = True) -> Self:
        self._skip_on_empty = flag
        return self

    def update_source(self, flag: bool = True) -> Self:
        self._update_source = flag
        return self

    def check_default(self, flag: bool = True) -> Self:
        self._check_default = flag
        return self

    def with_error(self, err: Exception) -> Self:
        """
        Record an error raised while building the session.
        记录构建会话时产生的错误。

        A session carrying such an error fails validation immediately.
        带有此类错误的会话会直接校验失败。
        """
        self._creation_error = err
        self.errors.add(VALIDATE_ERROR_KEY, VALIDATE_ERROR_KEY, str(err))
        return self

    # -----------------------------------------------------------------------
    # Rule builders / 规则构建
    # -----------------------------------------------------------------------

    def add_rule(self, fields: str | Sequence[str], validator: str, *args: Any) -> Rule:
        """
        Add a rule for one or more fields.
        为一个或多个字段添加规则。

        Args:
            fields: `"name"`, `"name,email"` or a sequence.
                `"name"`、`"name,email"` 或序列。
            validator: Validator name(s), e.g. `"required|email"`.
                校验器名称，例如 `"required|email"`。
            *args: Validator arguments.
                校验器参数。

        Returns:
            Rule: The new rule (for fluent configuration).
            Rule: 新规则（可继续链式配置）。
        """
        return self.append_rule(Rule.new(fields, validator, *args))

    def append_rule(self, rule: Rule) -> Rule:
        self.rules.append(rule)
        return rule

    def append_rules(self, *rules: Rule) -> Self:
        self.rules.extend(rules)
        return self

    def string_rule(self, fields: str, rule: str, filter_rule: str = "") -> Self:
        """
        Add rules from a rule string.
        根据规则字符串添加规则。

        `message:text` sets the field's catch-all message and `default:value`
        sets its default value; both are not validators.
        `message:text` 设置字段兜底消息，`default:value` 设置默认值；二者都不是校验器。

        Args:
            fields: Field name(s).
                字段名。
            rule: e.g. `"required|minLen:2|default:tom"`.
                例如 `"required|minLen:2|default:tom"`。
            filter_rule: Optional filter chain, e.g. `"trim|lower"`.
                可选过滤器链，例如 `"trim|lower"`。
        """
        names = split_fields(fields)
        for name, args in parse_rule_string(rule):
            real = validator_name(name)
            if real == "message":
                self.add_messages({f"{f}.{DEFAULT_MESSAGE_KEY}": args[0] for f in names})
            elif real == "default":
                for f in names:
                    self.set_default(f, args[0])
            else:
                self.add_rule(names, name, *args)
        if filter_rule:
            self.filter_rule(names, filter_rule)
        return self

    def string_rules(self, rules: Mapping[str, str]) -> Self:
        for fields, rule in rules.items():
            self.string_rule(fields, rule)
        return self

    def config_rules(self, rules: Mapping[str, str | Sequence[str]]) -> Self:
        """
        Add rules from a mapping of field to rule string(s).
        根据字段到规则字符串（或其列表）的映射添加规则。
        """
        for fields, rule in rules.items():
            self.string_rule(fields, rule if isinstance(rule, str) else "|".join(rule))
        return self

    def filter_rule(self, fields: str | Sequence[str], rule: str) -> FilterRule:
        fr = FilterRule.new(fields, rule)
        self.filter_rules.append(fr)
        return fr

    def filter_rules(self, rules: Mapping[str, str]) -> Self:
        for fields, rule in rules.items():
            self.filter_rule(fields, rule)
        return self

    # -----------------------------------------------------------------------
    # Scenes / 场景
    # -----------------------------------------------------------------------

    @property
    def scene(self) -> str:
        return self._scene

    def with_scenes(self, scenes: Mapping[str, str | Sequence[str]]) -> Self:
        """
        Declare scenes as scene name to field whitelist.
        声明场景：场景名到字段白名单。
        """
        for name, fields in scenes.items():
            self.scenes[name] = split_fields(fields)
        return self

    def set_scene(self, scene: str) -> Self:
        self._scene = scene
        return self

    def scene_fields(self) -> list[str]:
        return list(self.scenes.get(self._scene, []))

    def in_scene(self, field: str) -> bool:
        """
        Whether a field is checked in the active scene.
        字段在当前场景中是否参与校验。

        A whitelisted `address` also admits `address.city`.
        白名单中的 `address` 同样允许 `address.city`。
        """
        fields = self.scenes.get(self._scene)
        if not fields:
            return True
        return any(field == f or field.startswith(f + ".") for f in fields)

    # -----------------------------------------------------------------------
    # Functions and messages / 函数与消息
    # -----------------------------------------------------------------------

    def add_validator(self, name: str, fn: Callable[..., bool]) -> Self:
        self.local_validators.register(name, fn)
        return self

    def add_validators(self, funcs: Mapping[str, Callable[..., bool]]) -> Self:
        self.local_validators.register_many(funcs)
        return self

    def add_filter(self, name: str, fn: Callable[..., Any]) -> Self:
        self.local_filters.register(name, fn)
        return self

    def add_filters(self, funcs: Mapping[str, Callable[..., Any]]) -> Self:
        self.local_filters.register_many(funcs)
        return self

    def add_messages(self, messages: Mapping[str, str]) -> Self:
        self.translator.add_messages(messages)
        return self

    def with_messages(self, messages: Mapping[str, str]) -> Self:
        return self.add_messages(messages)

    def add_translates(self, labels: Mapping[str, str]) -> Self:
        self.translator.add_labels(labels)
        return self

    def with_translates(self, labels: Mapping[str, str]) -> Self:
        return self.add_translates(labels)

    def add_error(self, field: str, validator: str, message: str) -> None:
        """
        Record an error under the field's output name.
        以字段输出名称记录错误。
        """
        self.errors.add(self.translator.field_name(field), validator, message)

    # -----------------------------------------------------------------------
    # Data access / 数据访问
    # -----------------------------------------------------------------------

    def set_default(self, field: str, value: Any) -> Self:
        self._defaults[field] = value
        return self

    def get(self, field: str) -> tuple[Any, bool]:
        """
        Current value of a field (filtered value first).
        字段的当前值（优先返回过滤后的值）。
        """
        if field in self._filtered_data:
            return self._filtered_data[field], True
        return self.data.get(field)

    def raw(self, field: str) -> tuple[Any, bool]:
        return self.data.get(field)

    def get_with_default(self, field: str, rule: Rule | None = None) -> tuple[Any, bool, bool]:
        """
        Current value, falling back to the rule or session default.
        字段当前值，缺失或为空时回退到规则或会话默认值。

        Returns:
            tuple[Any, bool, bool]: Value, found flag and whether the default was used.
            tuple[Any, bool, bool]: 值、是否找到、是否使用了默认值。
        """
        val, ok = self.get(field)
        if ok and not self.value_is_empty(field, val):
            return val, True, False
        default = rule.default_value if rule is not None and rule.default_value is not None else None
        if default is None:
            default = self._defaults.get(field)
        if default is not None:
            return default, True, True
        return val, ok, False

    def value_is_empty(self, field: str, val: Any) -> bool:
        """
        Emptiness of a field value; for nullable fields only None is empty.
        字段值是否为空；可空字段仅 None 为空。
        """
        if self.data.is_nullable(field):
            return val is None
        return is_empty(val)

    def set(self, field: str, val: Any) -> Any:
        return self.data.set(field, val)

    def update_value(self, field: str, val: Any) -> Any:
        """
        Write a value back into the source when `update_source` is on.
        `update_source` 开启时将值写回数据源。

        Returns:
            Any: The value as the source holds it.
            Any: 数据源持有的值。
        """
        if not self._update_source or has_wildcard(field):
            return val
        return self.data.set(field, val)

    def _write_back(self, field: str, val: Any) -> tuple[Any, bool]:
        # Refused writes become field errors.
        try:
            return self.update_value(field, val), True
        except (FieldNotFoundError, FieldNotSettableError) as exc:
            self.add_error(field, VALIDATE_ERROR_KEY, exc.message)
            logger.debug("write back failed on %s: %s", field, exc.message)
            return val, False

    def safe(self, field: str) -> tuple[Any, bool]:
        return self._safe_data.get(field), field in self._safe_data

    def safe_val(self, field: str) -> Any:
        return self._safe_data.get(field)

    def safe_data(self) -> dict[str, Any]:
        return dict(self._safe_data)

    def filtered(self, field: str) -> Any:
        return self._filtered_data.get(field)

    def filtered_data(self) -> dict[str, Any]:
        return dict(self._filtered_data)

    def bind_safe_data(self, dst: Any) -> Any:
        """
        Copy the safe data onto a model class or instance.
        将安全数据复制到模型类或实例。

        Raises:
            BindMismatchError: A key has no destination field or the value does not fit.
            BindMismatchError: 某个键没有对应字段或值类型不匹配。
        """
        return bind_safe_data(self._safe_data, dst)

    # -----------------------------------------------------------------------
    # Execution / 执行
    # -----------------------------------------------------------------------

    def is_ok(self) -> bool:
        return self.errors.empty()

    def is_fail(self) -> bool:
        return not self.errors.empty()

    def should_stop(self) -> bool:
        return self._stop_on_error and not self.errors.empty()

    def reset_result(self) -> Self:
        """
        Drop results and keep rules, so the session can run again.
        清除结果并保留规则，以便会话再次执行。
        """
        self.errors = Errors()
        self._safe_data = {}
        self._filtered_data = {}
        self._has_validated = False
        return self

    def reset(self) -> Self:
        """
        Drop results, rules, defaults and custom messages.
        清除结果、规则、默认值与自定义消息。
        """
        self.reset_result()
        self.rules = []
        self.filter_rules = []
        self._defaults = {}
        self.translator.reset()
        return self

    def validate(self, scene: str | None = None) -> bool:
        """
        Run filter rules and validation rules.
        执行过滤规则与校验规则。

        A second call without a scene change returns the cached result.
        未切换场景时再次调用会直接返回缓存结果。

        Args:
            scene: Scene to activate.
                要激活的场景。

        Returns:
            bool: True when no error was recorded.
            bool: 没有记录错误时返回 True。

        Raises:
            RuleConfigError: A rule references an unknown function or has wrong arguments.
            RuleConfigError: 规则引用了未知函数或参数错误。
            ArgumentTypeMismatchError: A rule argument does not fit the function.
            ArgumentTypeMismatchError: 规则参数与函数不匹配。
        """
        if scene is not None and scene != self._scene:
            self.reset_result()
            self._scene = scene
        if self._has_validated:
            return self.errors.empty()

        if self._creation_error is not None:
            self.errors.add(VALIDATE_ERROR_KEY, VALIDATE_ERROR_KEY, str(self._creation_error))
        else:
            logger.debug(
                "validate %s source: scene=%r rules=%d filters=%d",
                self.data.kind,
                self._scene,
                len(self.rules),
                len(self.filter_rules),
            )
            self._run()

        self._has_validated = True
        if self.errors:
            self._safe_data.clear()
            logger.debug("validation failed: %s", self.errors.all())
        return self.errors.empty()

    def _run(self) -> None:
        for fr in self.filter_rules:
            if fr.apply(self) is not None and self._stop_on_error:
                return
        for rule in self.rules:
            if rule.apply(self):
                return

    def validate_e(self, scene: str | None = None) -> Errors:
        self.validate(scene)
        return self.errors

    def validate_err(self, scene: str | None = None) -> ValidationError | None:
        """
        Validate and return the errors as an exception object (not raised).
        执行校验，并以异常对象（不抛出）返回错误。
        """
        self.validate(scene)
        return self.errors.to_error()

    # -----------------------------------------------------------------------
    # Rule application / 规则执行
    # -----------------------------------------------------------------------

    def _add_filter_error(self, field: str, exc: FilterExecutionError) -> None:
        message = f"{self.translator.message(FILTER_ERROR_KEY, field)}: {exc.message}"
        self.errors.add(FILTER_ERROR_KEY, self.translator.field_name(field), message)
        logger.debug("filter failed on %s: %s", field, exc.message)

    def apply_filter_rule(self, fr: FilterRule) -> ValidateError | None:
        """
        Filter every present target field and write the results back.
        过滤每个存在的目标字段并写回结果。

        Returns:
            ValidateError | None: First filter or write-back failure, None on success.
            ValidateError | None: 首个过滤或写回失败，成功时为 None。
        """
        chain = fr.chain()
        first: ValidateError | None = None
        for field in fr.fields:
            if has_wildcard(field) and self.data.kind is not SourceKind.FORM:
                paths = expand_path(self.data.src, field)
            else:
                paths = [field]
            for path in paths:
                val, ok = self.data.get(path)
                if not ok:
                    continue
                try:
                    val = run_filters(chain, val, local=self.local_filters)
                except FilterExecutionError as exc:
                    self._add_filter_error(path, exc)
                    if self._stop_on_error:
                        return exc
                    first = first or exc
                    continue
                try:
                    self._filtered_data[path] = self.update_value(path, val)
                except (FieldNotFoundError, FieldNotSettableError) as exc:
                    self.add_error(path, VALIDATE_ERROR_KEY, exc.message)
                    if self._stop_on_error:
                        return exc
                    first = first or exc
        return first

    def apply_rule(self, rule: Rule) -> bool:
        """
        Apply a rule to each of its fields.
        对规则的每个字段执行规则。

        Returns:
            bool: True when the session should stop.
            bool: 会话需要停止时返回 True。
        """
        if rule.scene and rule.scene != self._scene:
            return False
        names = rule.validator_names()
        for field in rule.fields:
            if not self.in_scene(field):
                continue
            if rule.before_func is not None and not rule.before_func(field, self):
                continue
            for name in names:
                if self._apply_one(rule, field, name):
                    return True
        return False

    def _apply_one(self, rule: Rule, field: str, name: str) -> bool:
        if validator_name(name) in FILE_VALIDATORS:
            if self.data.kind is not SourceKind.FORM:
                self.add_error(field, TYPE_ERROR_KEY, self.translator.message(TYPE_ERROR_KEY, field, "file"))
                return self.should_stop()
            skip_empty = self._skip_on_empty if rule.skip_empty is None else rule.skip_empty
            if skip_empty and not self.data.has_file(field):
                return False
            val, _ = self.data.get(field)
            return self._record(rule, field, name, val)

        val, _, is_default = self.get_with_default(field, rule)
        if is_default:
            val, written = self._write_back(field, val)
            if not written:
                return self.should_stop()
            if not self._check_default:
                self._safe_data[field] = val
                return False
        elif rule.optional and self.value_is_empty(field, val):
            return False

        if rule.filter_func is not None:
            try:
                val = apply_filter_func(rule.filter_func, val)
            except FilterExecutionError as exc:
                self._add_filter_error(field, exc)
                return True
            val, written = self._write_back(field, val)
            if not written:
                return self.should_stop()
            self._filtered_data[field] = val

        skip_empty = self._skip_on_empty if rule.skip_empty is None else rule.skip_empty
        if skip_empty and not is_required_name(name) and self.value_is_empty(field, val):
            return False
        return self._record(rule, field, name, val)

    def _record(self, rule: Rule, field: str, name: str, val: Any) -> bool:
        outcome, expect = value_validate(self, rule, field, name, val)
        if outcome is Outcome.PASS:
            self._safe_data[field] = val
        elif outcome is Outcome.FAIL:
            self.add_error(field, name, rule.error_message(name, field, self.translator))
        else:
            self.add_error(field, TYPE_ERROR_KEY, self.translator.message(TYPE_ERROR_KEY, field, expect))
        return self.should_stop()
