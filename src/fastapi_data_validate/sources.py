"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: sources.py
@DateTime: 2026-02-08
@Docs: Data sources for validation: map, form and struct.
校验数据源：映射、表单与结构体。

All sources share one capability interface: `get`, `set`, `has` and `kind`.
Reads never raise; writes raise FieldNotFoundError / FieldNotSettableError
when the value cannot be stored.
所有数据源共享同一能力接口：`get`、`set`、`has` 与 `kind`。读取不会抛出异常；
写入在无法保存值时抛出 FieldNotFoundError / FieldNotSettableError。
"""

import dataclasses
import mimetypes
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar
from urllib.parse import urlencode

from fastapi import UploadFile
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from fastapi_data_validate.config import ValidateConfig, get_global_config
from fastapi_data_validate.exceptions import (
    BindMismatchError,
    FieldNotFoundError,
    FieldNotSettableError,
    InvalidDataSourceError,
)
from fastapi_data_validate.paths import (
    WILDCARD,
    find_attr_name,
    get_by_path,
    get_child,
    set_by_path,
    split_path,
)
from fastapi_data_validate.tags import collect_struct_rules
from fastapi_data_validate.typing import (
    ConfigValidationHook,
    MessagesHook,
    TranslatesHook,
    adapt_value,
    annotations_of,
    is_nullable,
)
from fastapi_data_validate.values import is_empty, parse_bool, to_float, to_int, to_str

if TYPE_CHECKING:
    from fastapi_data_validate.validation import Validation

M = TypeVar("M", bound=BaseModel)

_SCALARS = (str, int, float, bool)


class SourceKind(StrEnum):
    """
    Data source kind.
    数据源类型。
    """

    MAP = "map"
    FORM = "form"
    STRUCT = "struct"


class DataSource(ABC):
    """
    Uniform read/write access to the data being validated.
    对被校验数据的统一读写访问。
    """

    kind: ClassVar[SourceKind]

    @property
    @abstractmethod
    def src(self) -> Any:
        """Underlying data object / 底层数据对象。"""

    @abstractmethod
    def get(self, path: str) -> tuple[Any, bool]:
        """
        Read a value by (dotted/wildcard) path.
        按（点号/通配符）路径读取值。

        Returns:
            tuple[Any, bool]: Value and found flag.
            tuple[Any, bool]: 值与是否找到的标记。
        """

    @abstractmethod
    def set(self, path: str, value: Any) -> Any:
        """
        Write a value by path.
        按路径写入值。

        Returns:
            Any: The value as the source now holds it.
            Any: 数据源当前持有的值。
        """

    def try_get(self, path: str) -> tuple[Any, bool, bool]:
        """
        Read a value and report whether it is empty.
        读取值并报告其是否为空。

        Returns:
            tuple[Any, bool, bool]: Value, found flag and empty flag.
            tuple[Any, bool, bool]: 值、是否找到、是否为空。
        """
        val, ok = self.get(path)
        return val, ok, (not ok) or is_empty(val)

    def has(self, path: str) -> bool:
        return self.get(path)[1]

    def is_nullable(self, path: str) -> bool:
        """
        Whether the field declares None as a legal value (Optional fields).
        字段是否声明 None 为合法值（Optional 字段）。
        """
        return False

    def create(self, scene: str | None = None, *, config: ValidateConfig | None = None) -> "Validation":
        """
        Create a validation session over this source.
        基于该数据源创建校验会话。

        Args:
            scene: Active scene name.
                当前场景名。
            config: Session config (defaults to the global config).
                会话配置（默认使用全局配置）。

        Returns:
            Validation: New session.
            Validation: 新的校验会话。
        """
        from fastapi_data_validate.validation import Validation

        return Validation(self, scene=scene, config=config)

    def validation(self, scene: str | None = None, *, config: ValidateConfig | None = None) -> "Validation":
        return self.create(scene, config=config)


# ---------------------------------------------------------------------------
# Map / 映射
# ---------------------------------------------------------------------------


class MapSource(DataSource):
    """
    Mapping (dict / decoded JSON) data source.
    映射（dict / 解码后的 JSON）数据源。
    """

    kind = SourceKind.MAP

    def __init__(self, data: MutableMapping[str, Any] | None = None, *, body_json: bytes | None = None) -> None:
        self.data: MutableMapping[str, Any] = data if data is not None else {}
        self.body_json = body_json

    @property
    def src(self) -> MutableMapping[str, Any]:
        return self.data

    def get(self, path: str) -> tuple[Any, bool]:
        return get_by_path(self.data, path)

    def set(self, path: str, value: Any) -> Any:
        try:
            set_by_path(self.data, path, value)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            raise FieldNotSettableError(
                message=f"cannot set value for field '{path}'", details={"field": path, "reason": str(exc)}
            ) from exc
        return value

    def bind_json(self, model: type[M]) -> M:
        """
        Decode the raw JSON body into a pydantic model.
        将原始 JSON 请求体解码为 pydantic 模型。

        Raises:
            InvalidDataSourceError: No raw JSON body.
            InvalidDataSourceError: 没有原始 JSON 请求体。
            BindMismatchError: Body does not match the model.
            BindMismatchError: 请求体与模型不匹配。
        """
        if self.body_json is None:
            raise InvalidDataSourceError(message="no JSON body to bind")
        try:
            return model.model_validate_json(self.body_json)
        except PydanticValidationError as exc:
            raise BindMismatchError(message="JSON body does not match the model", details=exc.errors()) from exc


# ---------------------------------------------------------------------------
# Form / 表单
# ---------------------------------------------------------------------------


class FormSource(DataSource):
    """
    URL-encoded / multipart form data source.
    URL 编码 / multipart 表单数据源。

    Form fields are multi-valued strings; `get` returns the first value.
    Uploaded files are kept separately as FastAPI `UploadFile` objects.
    表单字段为多值字符串，`get` 返回第一个值。上传文件以 FastAPI `UploadFile`
    对象单独保存。
    """

    kind = SourceKind.FORM

    def __init__(
        self,
        form: Mapping[str, str | Sequence[str]] | None = None,
        files: Mapping[str, UploadFile] | None = None,
    ) -> None:
        self.form: dict[str, list[str]] = {}
        self.files: dict[str, UploadFile] = dict(files or {})
        if form:
            self.add_values(form)

    @property
    def src(self) -> dict[str, list[str]]:
        return self.form

    def add(self, key: str, value: Any) -> None:
        self.form.setdefault(key, []).append(to_str(value))

    def add_values(self, values: Mapping[str, Any]) -> None:
        """
        Append values (scalars or sequences of scalars).
        追加值（标量或标量序列）。
        """
        for key, value in values.items():
            if isinstance(value, (list, tuple)):
                for item in value:
                    self.add(key, item)
            else:
                self.add(key, value)

    def add_file(self, key: str, file: UploadFile) -> None:
        self.files[key] = file

    def add_files(self, files: Mapping[str, UploadFile]) -> None:
        self.files.update(files)

    def delete(self, key: str) -> None:
        self.form.pop(key, None)

    def delete_file(self, key: str) -> None:
        self.files.pop(key, None)

    def encode(self) -> str:
        return urlencode(self.form, doseq=True)

    def has_field(self, key: str) -> bool:
        return key in self.form

    def has_file(self, key: str) -> bool:
        return key in self.files

    def get(self, path: str) -> tuple[Any, bool]:
        if path in self.form:
            values = self.form[path]
            return (values[0] if values else ""), True
        if path in self.files:
            return self.files[path], True
        return None, False

    def set(self, path: str, value: Any) -> Any:
        """
        Store a value; scalars are stringified, files go to the file map.
        写入值；标量转为字符串，文件写入文件映射。

        Returns the given value unchanged so callers keep its typed form.
        原样返回传入的值，以便调用方保留其类型。

        Raises:
            FieldNotSettableError: Value is not a scalar, list of scalars or file.
            FieldNotSettableError: 值不是标量、标量列表或文件。
        """
        if isinstance(value, StarletteUploadFile):
            self.files[path] = value
        elif isinstance(value, _SCALARS):
            self.form[path] = [to_str(value)]
        elif isinstance(value, (list, tuple)) and all(isinstance(v, _SCALARS) for v in value):
            self.form[path] = [to_str(v) for v in value]
        else:
            raise FieldNotSettableError(
                message=f"cannot store {type(value).__name__} in form field '{path}'",
                details={"field": path, "type": type(value).__name__},
            )
        return value

    def get_string(self, key: str) -> str:
        val, ok = self.get(key)
        return val if ok and isinstance(val, str) else ""

    def get_strings(self, key: str) -> list[str]:
        return list(self.form.get(key, []))

    def get_int(self, key: str, default: int = 0) -> int:
        try:
            return to_int(self.get_string(key))
        except ValueError:
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        try:
            return to_float(self.get_string(key))
        except ValueError:
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        try:
            return parse_bool(self.get_string(key)) if self.has_field(key) else default
        except ValueError:
            return default

    def get_file(self, key: str) -> UploadFile | None:
        return self.files.get(key)

    def file_bytes(self, key: str) -> bytes | None:
        """
        Read an uploaded file's content (stream position is restored).
        读取上传文件内容（会恢复流位置）。
        """
        file = self.files.get(key)
        if file is None:
            return None
        stream = file.file
        pos = stream.tell()
        stream.seek(0)
        try:
            return stream.read()
        finally:
            stream.seek(pos)

    def file_mime_type(self, key: str) -> str:
        """
        MIME type of an uploaded file (header first, then file name).
        上传文件的 MIME 类型（优先请求头，其次文件名）。
        """
        file = self.files.get(key)
        if file is None:
            return ""
        ctype = (file.content_type or "").split(";")[0].strip().lower()
        if ctype and ctype != "application/octet-stream":
            return ctype
        guessed, _ = mimetypes.guess_type(file.filename or "")
        return guessed or ctype


# ---------------------------------------------------------------------------
# Struct / 结构体
# ---------------------------------------------------------------------------


def _is_frozen(obj: Any) -> bool:
    if isinstance(obj, BaseModel):
        return bool(type(obj).model_config.get("frozen"))
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return bool(type(obj).__dataclass_params__.frozen)  # type: ignore[attr-defined]
    return isinstance(obj, tuple)


class StructSource(DataSource):
    """
    Object data source (pydantic model, dataclass or plain object).
    对象数据源（pydantic 模型、数据类或普通对象）。

    Writes convert values to the declared field annotation with pydantic, so a
    default "23" lands in an `int` field as 23.
    写入时使用 pydantic 将值转换为字段声明的类型，因此默认值 "23" 写入 `int`
    字段后为 23。
    """

    kind = SourceKind.STRUCT

    def __init__(self, obj: Any, *, config: ValidateConfig | None = None) -> None:
        if obj is None or isinstance(obj, (type, Mapping, str, bytes, int, float, list, tuple)):
            raise InvalidDataSourceError(
                message="struct source requires an object instance",
                details={"type": type(obj).__name__},
            )
        self.obj = obj
        self.config = config or get_global_config()

    @property
    def src(self) -> Any:
        return self.obj

    def get(self, path: str) -> tuple[Any, bool]:
        return get_by_path(self.obj, path)

    def _parent_of(self, path: str) -> tuple[Any, str]:
        segments = split_path(path)
        parent = self.obj
        for seg in segments[:-1]:
            parent, ok = get_child(parent, seg)
            if not ok:
                raise FieldNotFoundError(details={"field": path})
        return parent, segments[-1]

    def annotation_of(self, path: str) -> Any | None:
        """
        Declared annotation of a field path, None when unknown.
        字段路径的声明注解，未知时为 None。
        """
        if WILDCARD in split_path(path):
            return None
        try:
            parent, last = self._parent_of(path)
        except FieldNotFoundError:
            return None
        name = find_attr_name(parent, last)
        if name is None:
            return None
        return annotations_of(type(parent)).get(name)

    def is_nullable(self, path: str) -> bool:
        return is_nullable(self.annotation_of(path))

    def set(self, path: str, value: Any) -> Any:
        """
        Write a field value.
        写入字段值。

        Raises:
            FieldNotFoundError: Field does not exist.
            FieldNotFoundError: 字段不存在。
            FieldNotSettableError: Object is immutable or value is not convertible.
            FieldNotSettableError: 对象不可变或值无法转换。
        """
        if WILDCARD in split_path(path):
            try:
                set_by_path(self.obj, path, value)
            except AttributeError as exc:
                raise FieldNotFoundError(details={"field": path}) from exc
            except (KeyError, IndexError, TypeError, ValueError, PydanticValidationError) as exc:
                raise FieldNotSettableError(details={"field": path, "reason": str(exc)}) from exc
            return value

        parent, last = self._parent_of(path)
        if isinstance(parent, (MutableMapping, list)):
            try:
                set_by_path(parent, last, value)
            except (KeyError, IndexError, TypeError, ValueError) as exc:
                raise FieldNotSettableError(details={"field": path, "reason": str(exc)}) from exc
            return value

        name = find_attr_name(parent, last)
        if name is None:
            raise FieldNotFoundError(details={"field": path})
        if _is_frozen(parent):
            raise FieldNotSettableError(
                message=f"cannot set field '{path}' on an immutable object", details={"field": path}
            )
        annotation = annotations_of(type(parent)).get(name)
        try:
            value = adapt_value(annotation, value)
            setattr(parent, name, value)
        except PydanticValidationError as exc:
            raise FieldNotSettableError(
                message=f"cannot convert value for field '{path}'", details={"field": path, "errors": exc.errors()}
            ) from exc
        except (AttributeError, TypeError) as exc:
            raise FieldNotSettableError(details={"field": path, "reason": str(exc)}) from exc
        return value

    def create(self, scene: str | None = None, *, config: ValidateConfig | None = None) -> "Validation":
        """
        Create a session with the rules, labels and hooks declared on the object.
        创建会话，并加载对象上声明的规则、标签与钩子。
        """
        cfg = config or self.config
        v = super().create(scene, config=cfg)
        rules = collect_struct_rules(self.obj, cfg)
        v.translator.add_field_map(rules.field_map)
        v.add_translates(rules.labels)
        v.add_messages(rules.messages)
        for field_path, rule in rules.filters.items():
            v.filter_rule(field_path, rule)
        for field_path, rule in rules.rules.items():
            v.string_rule(field_path, rule)

        if isinstance(self.obj, ConfigValidationHook):
            self.obj.config_validation(v)
        if isinstance(self.obj, TranslatesHook):
            v.add_translates(self.obj.translates())
        if isinstance(self.obj, MessagesHook):
            v.add_messages(self.obj.messages())
        return v
