"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: messages.py
@DateTime: 2026-02-08
@Docs: Builtin error messages and the message translator.
内置错误消息与消息翻译器。

Templates use `{field}` for the field display name and Go-style positional
placeholders (`%v`, `%d`, `%s`) for rule arguments. `{values}`, `{args0}` and
`{args1end}` render argument lists.
模板使用 `{field}` 表示字段显示名，使用 Go 风格的位置占位符（`%v`、`%d`、`%s`）
表示规则参数。`{values}`、`{args0}`、`{args1end}` 用于渲染参数列表。
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from fastapi_data_validate.registry import validator_aliases, validator_name
from fastapi_data_validate.values import format_value

DEFAULT_MESSAGE_KEY = "_"
FILTER_ERROR_KEY = "_filter"
TYPE_ERROR_KEY = "_type"
VALIDATE_ERROR_KEY = "_validate"

BUILTIN_MESSAGES: dict[str, str] = {
    "_": "{field} did not pass validation",
    "_validate": "{field} did not pass validation",
    "_filter": "{field} data is invalid",
    "_type": "{field} value type is invalid, expect %v",
    "min": "{field} min value is %v",
    "max": "{field} max value is %v",
    "isInt": "{field} value must be an integer",
    "isInt1": "{field} value must be an integer and mix value is %d",
    "isInt2": "{field} value must be an integer and in the range %d - %d",
    "isInts": "{field} value must be an int slice",
    "isUint": "{field} value must be an unsigned integer(>= 0)",
    "isString": "{field} value must be a string",
    "isString1": "{field} value must be a string and min length is %d",
    "isString2": "{field} value must be a string and length in the range %d - %d",
    "minLength": "{field} value min length is %d",
    "maxLength": "{field} value max length is %d",
    "length": "{field} value length must be %d",
    "stringLength": "{field} length must be in the range %d - %d",
    "stringLength1": "{field} min length is %d",
    "stringLength2": "{field} length must be in the range %d - %d",
    "isURL": "{field} must be a valid URL address",
    "isFullURL": "{field} must be a valid full URL address",
    "regexp": "{field} must match pattern %s",
    "isFile": "{field} must be an uploaded file",
    "isImage": "{field} must be an uploaded image file",
    "inMimeTypes": "{field} file type must be in %v",
    "enum": "{field} value must be in the enum %v",
    "between": "{field} value must be in the range %d - %d",
    "lt": "{field} value should be less than %v",
    "gt": "{field} value should be greater than %v",
    "required": "{field} is required to not be empty",
    "requiredIf": "{field} is required when {args0} is {args1end}",
    "requiredUnless": "{field} field is required unless {args0} is in {args1end}",
    "requiredWith": "{field} field is required when {values} is present",
    "requiredWithAll": "{field} field is required when {values} is present",
    "requiredWithout": "{field} field is required when {values} is not present",
    "requiredWithoutAll": "{field} field is required when none of {values} are present",
    "eqField": "{field} value must be equal the field %s",
    "neField": "{field} value cannot be equal to the field %s",
    "ltField": "{field} value should be less than the field %s",
    "lteField": "{field} value should be less than or equal to the field %s",
    "gtField": "{field} value must be greater than the field %s",
    "gteField": "{field} value should be greater or equal to the field %s",
    "isEqual": "{field} value must be equal to %v",
    "notEqual": "{field} value cannot be equal to %v",
    "isBool": "{field} value must be a bool",
    "isFloat": "{field} value must be a float",
    "isSlice": "{field} value must be a slice",
    "isMap": "{field} value must be a map",
    "isArray": "{field} value must be an array",
    "isStrings": "{field} value must be a []string",
    "notIn": "{field} value must not be in the given enum list %v",
    "contains": "{field} value does not contain %s",
    "notContains": "{field} value contains %s",
    "startsWith": "{field} value does not start with %s",
    "endsWith": "{field} value does not end with %s",
    "email": "{field} value is an invalid email address",
    "isDate": "{field} value should be a date string",
    "afterDate": "{field} value should be after %s",
    "beforeDate": "{field} value should be before %s",
    "afterOrEqualDate": "{field} value should be after or equal to %s",
    "beforeOrEqualDate": "{field} value should be before or equal to %s",
    "hasWhitespace": "{field} value should contains spaces",
    "ascii": "{field} value should be an ASCII string",
    "alpha": "{field} value contains only alpha char",
    "alphaNum": "{field} value contains only alpha char and num",
    "alphaDash": "{field} value contains only letters, num, dashes (-) and underscores (_)",
    "multiByte": "{field} value should be a multiByte string",
    "base64": "{field} value should be a base64 string",
    "dnsName": "{field} value should be a DNS string",
    "dataURI": "{field} value should be a DataURL string",
    "empty": "{field} value should be empty",
    "hexColor": "{field} value should be a color string in hexadecimal",
    "hexadecimal": "{field} value should be a hexadecimal string",
    "json": "{field} value should be a json string",
    "lat": "{field} value should be a latitude coordinate",
    "lon": "{field} value should be a longitude coordinate",
    "num": "{field} value should be a num (>=0) string",
    "mac": "{field} value should be a MAC address",
    "cnMobile": "{field} value should be string of Chinese 11-digit mobile phone numbers",
    "printableASCII": "{field} value should be a printable ASCII string",
    "rgbColor": "{field} value should be a RGB color string",
    "ip": "{field} value should be an IP (v4 or v6) string",
    "ipv4": "{field} value should be an IPv4 string",
    "ipv6": "{field} value should be an IPv6 string",
    "CIDR": "{field} value should be a CIDR string",
    "CIDRv4": "{field} value should be a CIDRv4 string",
    "CIDRv6": "{field} value should be a CIDRv6 string",
    "uuid": "{field} value should be a UUID string",
    "uuid3": "{field} value should be a UUID3 string",
    "uuid4": "{field} value should be a UUID4 string",
    "uuid5": "{field} value should be a UUID5 string",
    "filePath": "{field} value should be an existing file path",
    "dirPath": "{field} value should be an existing directory path",
    "unixPath": "{field} value should be a unix path string",
    "winPath": "{field} value should be a windows path string",
    "isbn10": "{field} value should be a isbn10 string",
    "isbn13": "{field} value should be a isbn13 string",
}

_global_messages: dict[str, str] = dict(BUILTIN_MESSAGES)

_PLACEHOLDER_RE = re.compile(r"%%|%[vdsfqt]")


def add_global_messages(messages: Mapping[str, str]) -> None:
    """
    Add or override process-wide default messages.
    添加或覆盖进程级默认消息。

    Sessions created afterwards pick up the change; existing translators keep
    their own copy.
    之后创建的会话会使用新消息；已有翻译器保留自己的副本。

    Args:
        messages: Message key to template.
            消息键到模板的映射。
    """
    _global_messages.update(messages)


def global_messages() -> dict[str, str]:
    return dict(_global_messages)


def snapshot_global_messages() -> dict[str, str]:
    return dict(_global_messages)


def restore_global_messages(snapshot: Mapping[str, str]) -> None:
    _global_messages.clear()
    _global_messages.update(snapshot)


def fill_placeholders(template: str, args: Sequence[Any]) -> str:
    """
    Fill `%v`/`%d`/`%s` placeholders positionally.
    按位置填充 `%v`/`%d`/`%s` 占位符。

    Surplus placeholders stay as literal text; `%%` renders a percent sign.
    多余的占位符保持原样；`%%` 渲染为百分号。

    Args:
        template: Message template.
            消息模板。
        args: Positional arguments.
            位置参数。

    Returns:
        str: Rendered text.
        str: 渲染后的文本。
    """
    index = 0

    def _sub(m: re.Match[str]) -> str:
        nonlocal index
        token = m.group(0)
        if token == "%%":
            return "%"
        if index >= len(args):
            return token
        value = args[index]
        index += 1
        return format_value(value)

    return _PLACEHOLDER_RE.sub(_sub, template)


class Translator:
    """
    Resolve and render validation error messages.
    解析并渲染校验错误消息。

    Lookup order for `message(validator, field)`:
    `message(validator, field)` 的查找顺序：
        1) `field.validator` (argument-count variant first)
           `field.validator`（优先参数个数变体）
        2) the validator name, its canonical name and aliases
           校验器名称、其规范名称及别名
        3) `field._` field catch-all
           `field._` 字段兜底消息
        4) `_` global default
           `_` 全局默认消息
    """

    def __init__(self) -> None:
        self.messages: dict[str, str] = global_messages()
        self.label_map: dict[str, str] = {}
        self.field_map: dict[str, str] = {}

    def reset(self) -> None:
        """
        Restore default messages and drop labels and field names.
        恢复默认消息，并清除标签与字段名映射。
        """
        self.messages = global_messages()
        self.label_map = {}
        self.field_map = {}

    def add_message(self, key: str, message: str) -> None:
        self.messages[key] = message

    def add_messages(self, messages: Mapping[str, str]) -> None:
        self.messages.update(messages)

    def has_message(self, key: str) -> bool:
        return key in self.messages

    def add_label(self, field: str, label: str) -> None:
        self.label_map[field] = label

    def add_labels(self, labels: Mapping[str, str]) -> None:
        self.label_map.update(labels)

    def add_field_map(self, field_map: Mapping[str, str]) -> None:
        self.field_map.update(field_map)

    def field_name(self, field: str) -> str:
        """
        Output name of a field (used as error key).
        字段的输出名称（用作错误键）。
        """
        return self.field_map.get(field, field)

    def label_name(self, field: str) -> str:
        """
        Display name of a field (used in messages).
        字段的显示名称（用于消息）。
        """
        return self.label_map.get(field) or self.field_map.get(field) or field

    def lookup(self, validator: str, field: str, arg_count: int = 0) -> str:
        """
        Find the template for a validator on a field.
        查找字段上某个校验器的消息模板。

        Args:
            validator: Validator name as written in the rule.
                规则中书写的校验器名称。
            field: Field name.
                字段名。
            arg_count: Number of rule arguments.
                规则参数个数。

        Returns:
            str: Message template.
            str: 消息模板。
        """
        real = validator_name(validator)
        names = [validator]
        for n in (real, *validator_aliases(real)):
            if n not in names:
                names.append(n)

        suffixes = (str(arg_count), "") if arg_count > 0 else ("",)
        for name in names:
            for suffix in suffixes:
                key = f"{field}.{name}{suffix}"
                if key in self.messages:
                    return self.messages[key]
        for name in names:
            for suffix in suffixes:
                if f"{name}{suffix}" in self.messages:
                    return self.messages[f"{name}{suffix}"]
        catch_all = f"{field}.{DEFAULT_MESSAGE_KEY}"
        if catch_all in self.messages:
            return self.messages[catch_all]
        return self.messages.get(DEFAULT_MESSAGE_KEY, BUILTIN_MESSAGES[DEFAULT_MESSAGE_KEY])

    def message(self, validator: str, field: str, *args: Any) -> str:
        """
        Build the error message for a validator failure.
        为校验失败构建错误消息。

        Args:
            validator: Validator name.
                校验器名称。
            field: Field name.
                字段名。
            *args: Rule arguments.
                规则参数。

        Returns:
            str: Rendered message.
            str: 渲染后的消息。
        """
        return self.format(self.lookup(validator, field, len(args)), field, args)

    def format(self, template: str, field: str, args: Sequence[Any] = ()) -> str:
        """
        Render a template for a field.
        为字段渲染消息模板。

        String arguments naming a labelled field are shown with that label.
        指向已设置标签字段的字符串参数会以标签显示。
        """
        shown = [self.label_map.get(a, a) if isinstance(a, str) else a for a in args]
        if "%" in template:
            template = fill_placeholders(template, shown)
        if "{" not in template:
            return template
        template = template.replace("{field}", self.label_name(field))
        if "{values}" in template:
            template = template.replace("{values}", format_value(shown))
        if shown:
            template = template.replace("{args0}", format_value(shown[0]))
            template = template.replace("{args1end}", format_value(shown[1:]))
        return template
