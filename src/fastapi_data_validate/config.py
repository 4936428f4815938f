"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: config.py
@DateTime: 2026-02-08
@Docs: Validation engine configuration helpers.
校验引擎配置助手。

Configuration helpers for the validation engine.
校验引擎配置助手。

Every new validation session copies its switches from the process-wide
default config. The default can be replaced at startup with
`set_global_config()` / `configure()`, or built from environment variables.
每个新的校验会话都会从进程级默认配置复制开关。可在启动时通过
`set_global_config()` / `configure()` 替换，或从环境变量构建。

Environment variables / 环境变量:
        - DATA_VALIDATE_STOP_ON_ERROR:
            Stop at the first failed rule (default: true).
            首个规则失败即停止（默认 true）。
        - DATA_VALIDATE_SKIP_ON_EMPTY:
            Skip non-required validators on empty values (default: true).
            空值跳过非 required 校验器（默认 true）。
        - DATA_VALIDATE_UPDATE_SOURCE:
            Write filtered/default values back into the source (default: true).
            将过滤值/默认值写回数据源（默认 true）。
        - DATA_VALIDATE_CHECK_DEFAULT:
            Validate injected default values (default: false).
            校验注入的默认值（默认 false）。
        - DATA_VALIDATE_VALIDATE_TAG / DATA_VALIDATE_FILTER_TAG:
            Metadata keys used for struct rules.
            结构体规则使用的元数据键。
        - DATA_VALIDATE_MAX_FILES / DATA_VALIDATE_MAX_FIELDS:
            Multipart parsing limits.
            multipart 解析限制。

Examples:
        >>> from fastapi_data_validate.config import resolve_config
        >>> cfg = resolve_config(stop_on_error=False)
        >>> cfg.stop_on_error
        False
"""

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_FILES = 1000
DEFAULT_MAX_FIELDS = 1000

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ValidateConfig:
    """Validation engine configuration.

    校验引擎配置。

    Attributes:
        validate_tag: Metadata key holding the validate rule string.
            保存校验规则字符串的元数据键。
        filter_tag: Metadata key holding the filter rule string.
            保存过滤规则字符串的元数据键。
        label_tag: Metadata key holding the display label.
            保存显示名称的元数据键。
        message_tag: Metadata key holding custom messages.
            保存自定义消息的元数据键。
        field_tag: Metadata key holding the output field name.
            保存输出字段名的元数据键。
        stop_on_error: Stop at the first failed rule.
            首个规则失败即停止。
        skip_on_empty: Skip non-required validators on empty values.
            空值跳过非 required 校验器。
        update_source: Write filtered/default values back into the source.
            将过滤值/默认值写回数据源。
        check_default: Validate injected default values.
            校验注入的默认值。
        check_sub_on_parent_marked: Only collect nested rules when the parent field has rules.
            仅当父字段有规则时才收集嵌套规则。
        max_files: Multipart file count limit.
            multipart 文件数量上限。
        max_fields: Multipart field count limit.
            multipart 字段数量上限。
        wildcard_flatten_depth: Flatten depth for wildcard results (None = wildcard count minus one).
            通配符结果展开深度（None 表示通配符个数减一）。
    """

    validate_tag: str = "validate"
    filter_tag: str = "filter"
    label_tag: str = "label"
    message_tag: str = "message"
    field_tag: str = "json"
    stop_on_error: bool = True
    skip_on_empty: bool = True
    update_source: bool = True
    check_default: bool = False
    check_sub_on_parent_marked: bool = False
    max_files: int = DEFAULT_MAX_FILES
    max_fields: int = DEFAULT_MAX_FIELDS
    wildcard_flatten_depth: int | None = None


def _env_get(*names: str) -> str | None:
    """Get the first non-empty environment variable value.

    获取第一个非空环境变量值。

    Args:
        *names: Candidate environment variable names in priority order.
            候选环境变量名（按优先级顺序）。

    Returns:
        The first non-empty value, or None.
            返回第一个非空值；若都为空则返回 None。
    """
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip():
            return v.strip()
    return None


def _parse_bool(value: str | None) -> bool | None:
    """
    Parse a boolean switch from text.
    从文本解析布尔开关。

    Args:
        value: Raw text.
            原始文本。

    Returns:
        bool | None: Parsed value, None when unrecognized.
        bool | None: 解析结果，无法识别时为 None。
    """
    if value is None:
        return None
    v = value.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    return None


def _parse_int(value: str | None) -> int | None:
    """
    Parse a positive integer from text.
    从文本解析正整数。

    Args:
        value: Raw text.
            原始文本。

    Returns:
        int | None: Parsed value, None when invalid.
        int | None: 解析结果，非法时为 None。
    """
    if value is None:
        return None
    try:
        n = int(value.strip())
    except ValueError:
        return None
    return n if n > 0 else None


def _pick_bool(param: bool | None, env_value: str | None, default: bool) -> bool:
    if param is not None:
        return param
    parsed = _parse_bool(env_value)
    return default if parsed is None else parsed


def resolve_config(
    *,
    stop_on_error: bool | None = None,
    skip_on_empty: bool | None = None,
    update_source: bool | None = None,
    check_default: bool | None = None,
    validate_tag: str | None = None,
    filter_tag: str | None = None,
    max_files: int | None = None,
    max_fields: int | None = None,
    env_prefix: str = "DATA_VALIDATE",
) -> ValidateConfig:
    """Resolve configuration from parameters and environment variables.

    从参数和环境变量解析配置。

     Resolution order / 解析优先级:
        1) resolve_config parameters / resolve_config 参数
        2) env: `{env_prefix}_STOP_ON_ERROR`, `{env_prefix}_SKIP_ON_EMPTY`, ...
           环境变量：`{env_prefix}_STOP_ON_ERROR`、`{env_prefix}_SKIP_ON_EMPTY` 等
        3) defaults / 默认值

    Args:
        stop_on_error: Stop at the first failed rule.
            首个规则失败即停止。
        skip_on_empty: Skip non-required validators on empty values.
            空值跳过非 required 校验器。
        update_source: Write filtered/default values back into the source.
            将过滤值/默认值写回数据源。
        check_default: Validate injected default values.
            校验注入的默认值。
        validate_tag: Metadata key for validate rules.
            校验规则元数据键。
        filter_tag: Metadata key for filter rules.
            过滤规则元数据键。
        max_files: Multipart file count limit.
            multipart 文件数量上限。
        max_fields: Multipart field count limit.
            multipart 字段数量上限。
        env_prefix: Prefix for environment variables.
            环境变量前缀（默认 DATA_VALIDATE）。

    Returns:
        A ValidateConfig instance.
            返回 ValidateConfig 配置实例。
    """
    defaults = ValidateConfig()
    return ValidateConfig(
        validate_tag=validate_tag or _env_get(f"{env_prefix}_VALIDATE_TAG") or defaults.validate_tag,
        filter_tag=filter_tag or _env_get(f"{env_prefix}_FILTER_TAG") or defaults.filter_tag,
        stop_on_error=_pick_bool(stop_on_error, _env_get(f"{env_prefix}_STOP_ON_ERROR"), defaults.stop_on_error),
        skip_on_empty=_pick_bool(skip_on_empty, _env_get(f"{env_prefix}_SKIP_ON_EMPTY"), defaults.skip_on_empty),
        update_source=_pick_bool(update_source, _env_get(f"{env_prefix}_UPDATE_SOURCE"), defaults.update_source),
        check_default=_pick_bool(check_default, _env_get(f"{env_prefix}_CHECK_DEFAULT"), defaults.check_default),
        max_files=max_files or _parse_int(_env_get(f"{env_prefix}_MAX_FILES")) or defaults.max_files,
        max_fields=max_fields or _parse_int(_env_get(f"{env_prefix}_MAX_FIELDS")) or defaults.max_fields,
    )


# ---------------------------------------------------------------------------
# Process-wide defaults / 进程级默认配置
# ---------------------------------------------------------------------------

_global_config = ValidateConfig()


def get_global_config() -> ValidateConfig:
    """
    Return the process-wide default config.
    返回进程级默认配置。
    """
    return _global_config


def set_global_config(config: ValidateConfig) -> None:
    """
    Replace the process-wide default config (startup-time only).
    替换进程级默认配置（仅限启动阶段调用）。

    Args:
        config: New default config.
            新的默认配置。
    """
    global _global_config
    _global_config = config


def configure(**changes: Any) -> ValidateConfig:
    """
    Update selected fields of the process-wide default config.
    更新进程级默认配置的部分字段。

    Args:
        **changes: ValidateConfig field overrides.
            ValidateConfig 字段覆盖值。

    Returns:
        ValidateConfig: The new default config.
        ValidateConfig: 新的默认配置。
    """
    set_global_config(dataclasses.replace(_global_config, **changes))
    return _global_config


def reset_global_config() -> None:
    """
    Restore the built-in default config.
    恢复内置默认配置。
    """
    set_global_config(ValidateConfig())
