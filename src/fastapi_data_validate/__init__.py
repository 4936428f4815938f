"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-02-08
@Docs: Package exports for fastapi_data_validate.
fastapi_data_validate 包导出定义。
"""

from fastapi_data_validate.binding import bind_safe_data
from fastapi_data_validate.config import ValidateConfig, configure, get_global_config, resolve_config
from fastapi_data_validate.easy import (
    from_json,
    from_json_bytes,
    from_map,
    from_query,
    from_request,
    from_struct,
    from_url_values,
    new,
    validate_map,
    validate_request,
    validate_struct,
    validate_value,
)
from fastapi_data_validate.errors import Errors
from fastapi_data_validate.exceptions import (
    ArgumentTypeMismatchError,
    BindMismatchError,
    FieldNotFoundError,
    FieldNotSettableError,
    FilterExecutionError,
    InvalidDataSourceError,
    InvalidFunctionError,
    RuleConfigError,
    ValidateError,
    ValidationError,
    ValidatorExecutionError,
)
from fastapi_data_validate.messages import Translator, add_global_messages
from fastapi_data_validate.registry import (
    FuncMeta,
    add_filter,
    add_filters,
    add_validator,
    add_validators,
    filter_registry,
    validator_registry,
)
from fastapi_data_validate.rule import FilterRule, Rule, parse_rule_string
from fastapi_data_validate.sources import DataSource, FormSource, MapSource, SourceKind, StructSource
from fastapi_data_validate.validation import Validation

__all__ = [
    "Validation",
    "Rule",
    "FilterRule",
    "parse_rule_string",
    "DataSource",
    "SourceKind",
    "MapSource",
    "FormSource",
    "StructSource",
    "Errors",
    "Translator",
    "add_global_messages",
    "FuncMeta",
    "validator_registry",
    "filter_registry",
    "add_validator",
    "add_validators",
    "add_filter",
    "add_filters",
    "bind_safe_data",
    "ValidateConfig",
    "resolve_config",
    "get_global_config",
    "configure",
    "new",
    "from_map",
    "from_struct",
    "from_url_values",
    "from_query",
    "from_json",
    "from_json_bytes",
    "from_request",
    "validate_map",
    "validate_struct",
    "validate_request",
    "validate_value",
    "ValidateError",
    "InvalidDataSourceError",
    "FieldNotFoundError",
    "FieldNotSettableError",
    "ArgumentTypeMismatchError",
    "FilterExecutionError",
    "ValidationError",
    "BindMismatchError",
    "InvalidFunctionError",
    "RuleConfigError",
    "ValidatorExecutionError",
]
