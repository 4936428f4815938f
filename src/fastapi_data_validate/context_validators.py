"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: context_validators.py
@DateTime: 2026-02-08
@Docs: Validators that need the validation session.
需要校验会话的校验器。

These validators look at other fields (`requiredIf`, `eqField`, ...), at the
field's declared nullability (`required`) or at uploaded files (`isFile`).
They are methods of a mixin on `Validation` and receive the field name in
addition to the value.
这些校验器需要读取其它字段（`requiredIf`、`eqField` 等）、字段声明的可空性
（`required`）或上传文件（`isFile`）。它们是 `Validation` 混入类的方法，除值之外
还会收到字段名。
"""

import os
from collections.abc import Callable
from typing import Any

from fastapi_data_validate.registry import FuncMeta, FuncType, build_meta
from fastapi_data_validate.sources import DataSource, FormSource
from fastapi_data_validate.values import compare, values_equal

IMAGE_MIME_TYPES: dict[str, str] = {
    "bmp": "image/bmp",
    "gif": "image/gif",
    "ief": "image/ief",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "webp": "image/webp",
    "avif": "image/avif",
    "tif": "image/tiff",
    "tiff": "image/tiff",
}

FILE_VALIDATORS = frozenset({"isFile", "isImage", "inMimeTypes"})


class ContextValidators:
    """
    Session-aware validators, mixed into `Validation`.
    感知会话的校验器，混入 `Validation`。
    """

    data: DataSource
    get: Callable[[str], tuple[Any, bool]]
    value_is_empty: Callable[[str, Any], bool]

    # -----------------------------------------------------------------------
    # Required family / required 系列
    # -----------------------------------------------------------------------

    def required(self, field: str, val: Any) -> bool:
        """
        Check the value is present.
        检查值存在。

        None always fails. A nullable (Optional) field accepts any other value,
        including zero; other fields must not be empty.
        None 总是失败。可空（Optional）字段接受其它任意值（包括零）；
        其它字段不能为空。
        """
        if val is None:
            return False
        if self.data.is_nullable(field):
            return True
        return not self.value_is_empty(field, val)

    def _present(self, field: str) -> bool:
        val, ok = self.get(field)
        return ok and not self.value_is_empty(field, val)

    def required_if(self, field: str, val: Any, other: str, *values: Any) -> bool:
        """
        Required when `other` equals one of `values`.
        当 `other` 等于 `values` 之一时必填。
        """
        other_val, ok = self.get(other)
        if ok and any(values_equal(other_val, v) for v in values):
            return self.required(field, val)
        return True

    def required_unless(self, field: str, val: Any, other: str, *values: Any) -> bool:
        """
        Required unless `other` equals one of `values`.
        除非 `other` 等于 `values` 之一，否则必填。
        """
        other_val, ok = self.get(other)
        if ok and any(values_equal(other_val, v) for v in values):
            return True
        return self.required(field, val)

    def required_with(self, field: str, val: Any, *fields: str) -> bool:
        if any(self._present(f) for f in fields):
            return self.required(field, val)
        return True

    def required_with_all(self, field: str, val: Any, *fields: str) -> bool:
        if fields and all(self._present(f) for f in fields):
            return self.required(field, val)
        return True

    def required_without(self, field: str, val: Any, *fields: str) -> bool:
        if any(not self._present(f) for f in fields):
            return self.required(field, val)
        return True

    def required_without_all(self, field: str, val: Any, *fields: str) -> bool:
        if fields and not any(self._present(f) for f in fields):
            return self.required(field, val)
        return True

    # -----------------------------------------------------------------------
    # Field comparison / 字段比较
    # -----------------------------------------------------------------------

    def eq_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and values_equal(val, other_val)

    def ne_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and not values_equal(val, other_val)

    def gt_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and compare(val, other_val, "gt")

    def gte_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and compare(val, other_val, "gte")

    def lt_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and compare(val, other_val, "lt")

    def lte_field(self, field: str, val: Any, other: str) -> bool:
        other_val, ok = self.get(other)
        return ok and compare(val, other_val, "lte")

    # -----------------------------------------------------------------------
    # Uploaded files / 上传文件
    # -----------------------------------------------------------------------

    def is_file(self, field: str, val: Any) -> bool:
        return isinstance(self.data, FormSource) and self.data.has_file(field)

    def is_image(self, field: str, val: Any, *exts: str) -> bool:
        """
        Check the uploaded file is an image, optionally limited to extensions.
        检查上传文件为图片，可选地限制扩展名。
        """
        source = self.data
        if not isinstance(source, FormSource) or not source.has_file(field):
            return False
        mime = source.file_mime_type(field)
        if mime not in IMAGE_MIME_TYPES.values():
            return False
        if not exts:
            return True
        file = source.get_file(field)
        ext = os.path.splitext(file.filename or "")[1].lstrip(".").lower() if file else ""
        allowed = {e.strip().lstrip(".").lower() for e in exts}
        return ext in allowed or any(IMAGE_MIME_TYPES.get(e) == mime for e in allowed)

    def in_mime_types(self, field: str, val: Any, *mime_types: str) -> bool:
        source = self.data
        if not isinstance(source, FormSource) or not source.has_file(field):
            return False
        return source.file_mime_type(field) in {m.strip().lower() for m in mime_types}


def _context_meta(name: str, fn: Callable[..., bool]) -> FuncMeta:
    return build_meta(name, fn, func_type=FuncType.VALIDATOR, is_builtin=True, skip=2)


CONTEXT_VALIDATORS: dict[str, FuncMeta] = {
    name: _context_meta(name, fn)
    for name, fn in {
        "required": ContextValidators.required,
        "requiredIf": ContextValidators.required_if,
        "requiredUnless": ContextValidators.required_unless,
        "requiredWith": ContextValidators.required_with,
        "requiredWithAll": ContextValidators.required_with_all,
        "requiredWithout": ContextValidators.required_without,
        "requiredWithoutAll": ContextValidators.required_without_all,
        "eqField": ContextValidators.eq_field,
        "neField": ContextValidators.ne_field,
        "gtField": ContextValidators.gt_field,
        "gteField": ContextValidators.gte_field,
        "ltField": ContextValidators.lt_field,
        "lteField": ContextValidators.lte_field,
        "isFile": ContextValidators.is_file,
        "isImage": ContextValidators.is_image,
        "inMimeTypes": ContextValidators.in_mime_types,
    }.items()
}
