"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: errors.py
@DateTime: 2026-02-08
@Docs: Field error collection.
字段错误集合。

Errors are stored as `field -> {validator: message}` in insertion order, so
`one()` is stable for a given rule order.
错误以 `field -> {validator: message}` 形式按插入顺序保存，因此在规则顺序固定时
`one()` 的结果稳定。
"""

import json
from typing import Any

from fastapi_data_validate.exceptions import ValidationError


class Errors(dict[str, dict[str, str]]):
    """Collect validation errors per field.
    按字段收集校验错误。
    """

    def add(self, field: str, validator: str, message: str) -> None:
        """Add an error item.
        添加一个错误项。

        Args:
            field: Field name.
                字段名。
            validator: Validator name or reason key.
                校验器名称或原因键。
            message: Error message.
                错误消息。
        """
        self.setdefault(field, {})[validator] = message

    def empty(self) -> bool:
        return len(self) == 0

    def has_field(self, field: str) -> bool:
        return field in self

    def field(self, field: str) -> dict[str, str]:
        """Return all messages of a field.
        返回字段的全部错误消息。
        """
        return dict(self.get(field, {}))

    def field_one(self, field: str) -> str:
        for message in self.get(field, {}).values():
            return message
        return ""

    def one(self) -> str:
        """Return the first error message ("" when empty).
        返回第一条错误消息（无错误时返回 ""）。
        """
        for messages in self.values():
            for message in messages.values():
                return message
        return ""

    def random(self) -> str:
        return self.one()

    def all(self) -> dict[str, dict[str, str]]:
        return {field: dict(messages) for field, messages in self.items()}

    def messages(self) -> list[str]:
        return [message for messages in self.values() for message in messages.values()]

    def to_dict(self) -> dict[str, Any]:
        return self.all()

    def to_json(self) -> str:
        return json.dumps(self.all(), ensure_ascii=False)

    def to_error(self) -> ValidationError | None:
        """Wrap errors as a ValidationError, None when there are none.
        将错误包装为 ValidationError，无错误时返回 None。

        Returns:
            ValidationError | None: Error carrying all messages in details.
            ValidationError | None: details 中携带全部消息的错误。
        """
        if not self:
            return None
        return ValidationError(message=self.one(), details=self.all())

    def __str__(self) -> str:
        lines: list[str] = []
        for field, messages in self.items():
            lines.append(f"{field}:")
            lines.extend(f" {validator}: {message}" for validator, message in messages.items())
        return "\n".join(lines)
