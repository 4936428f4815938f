"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exceptions.py
@DateTime: 2026-02-08
@Docs: Data validation error hierarchy.
数据校验异常体系。
"""

from typing import Any


class ValidateError(Exception):
    """
    Validate Errors.
    数据校验异常。

    Errors raised by the validation engine (configuration and data source errors).
    校验引擎抛出的异常（配置错误与数据源错误）。

    Attributes:
        message: Error message.
        message: 错误消息。
        status_code: HTTP status code.
        status_code: HTTP 状态码。
        details: Error details.
        details: 错误详情。
        error_code: Stable error code.
        error_code: 稳定错误码。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "validate_error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.error_code = error_code


class InvalidDataSourceError(ValidateError):
    """
    Invalid or unsupported input data for a validation session.
    校验会话的输入数据为空或不受支持。
    """

    def __init__(self, *, message: str = "invalid input data", **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "invalid_data_source")
        super().__init__(message=message, **kwargs)


class FieldNotFoundError(ValidateError):
    """
    Field does not exist in the source data.
    源数据中不存在该字段。
    """

    def __init__(self, *, message: str = "field not exist in the source data", **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "field_not_found")
        super().__init__(message=message, **kwargs)


class FieldNotSettableError(ValidateError):
    """
    Field exists but the value cannot be stored.
    字段存在但无法写入值。
    """

    def __init__(self, *, message: str = "field value cannot be set", **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "field_not_settable")
        super().__init__(message=message, **kwargs)


class ArgumentTypeMismatchError(ValidateError):
    """
    Rule argument cannot be converted to the validator parameter type.
    规则参数无法转换为校验函数的参数类型。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "argument_type_mismatch")
        super().__init__(message=message, **kwargs)


class FilterExecutionError(ValidateError):
    """
    Filter function failed for a value.
    过滤函数处理值时失败。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "filter_error")
        super().__init__(message=message, **kwargs)


class ValidationError(ValidateError):
    """
    Validation failed, details carry the field errors.
    校验失败，details 中携带字段错误。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 422)
        kwargs.setdefault("error_code", "validation_failed")
        super().__init__(message=message, **kwargs)


class BindMismatchError(ValidateError):
    """
    Safe data cannot be bound onto the destination object.
    安全数据无法绑定到目标对象。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "bind_mismatch")
        super().__init__(message=message, **kwargs)


class InvalidFunctionError(ValidateError):
    """
    Validator or filter function has an invalid name or signature.
    校验器或过滤器函数的名称或签名无效。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "invalid_function")
        super().__init__(message=message, **kwargs)


class RuleConfigError(ValidateError):
    """
    Rule is misconfigured (unknown validator, wrong argument count, bad rule string).
    规则配置错误（未知校验器、参数数量错误、规则字符串非法）。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "rule_config_error")
        super().__init__(message=message, **kwargs)


class ValidatorExecutionError(ValidateError):
    """
    Custom validator raised while checking a value.
    自定义校验器在检查值时抛出异常。
    """

    def __init__(self, *, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "validator_error")
        super().__init__(message=message, **kwargs)
