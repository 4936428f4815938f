"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_sources.py
@DateTime: 2026-02-08
@Docs: Tests for sources.py module.
sources.py 模块测试。
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

import pytest
from fastapi import UploadFile
from pydantic import BaseModel, ConfigDict

from fastapi_data_validate.exceptions import (
    BindMismatchError,
    FieldNotFoundError,
    FieldNotSettableError,
    InvalidDataSourceError,
)
from fastapi_data_validate.sources import FormSource, MapSource, SourceKind, StructSource
from fastapi_data_validate.validation import Validation


class Profile(BaseModel):
    city: str = ""


class User(BaseModel):
    name: str = ""
    age: int = 0
    nickname: Optional[str] = None
    profile: Profile = Profile()


class FrozenUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""


@dataclass(frozen=True)
class Point:
    x: int = 0


class TestMapSource:
    """Tests for MapSource.
    MapSource 测试。
    """

    def test_get_and_has(self) -> None:
        src = MapSource({"user": {"name": "tom"}, "tags": []})
        assert src.kind is SourceKind.MAP
        assert src.get("user.name") == ("tom", True)
        assert src.has("tags")
        assert not src.has("missing")

    def test_try_get_reports_empty(self) -> None:
        src = MapSource({"a": "", "b": "x"})
        assert src.try_get("a") == ("", True, True)
        assert src.try_get("b") == ("x", True, False)
        assert src.try_get("c") == (None, False, True)

    def test_set_nested(self) -> None:
        src = MapSource()
        assert src.set("a.b", 1) == 1
        assert src.src == {"a": {"b": 1}}

    def test_set_failure(self) -> None:
        src = MapSource({"a": "text"})
        with pytest.raises(FieldNotSettableError):
            src.set("a.b", 1)

    def test_create_session(self) -> None:
        v = MapSource({"a": 1}).create("add")
        assert isinstance(v, Validation)
        assert v.scene == "add"

    def test_bind_json(self) -> None:
        src = MapSource({"name": "tom"}, body_json=b'{"name": "tom", "age": 3}')
        user = src.bind_json(User)
        assert user.age == 3
        with pytest.raises(InvalidDataSourceError):
            MapSource({}).bind_json(User)
        with pytest.raises(BindMismatchError):
            MapSource({}, body_json=b'{"age": "old"}').bind_json(User)


class TestFormSource:
    """Tests for FormSource.
    FormSource 测试。
    """

    def test_multi_values(self) -> None:
        """get returns the first value / get 返回第一个值。"""
        src = FormSource({"tag": ["a", "b"], "age": "20"})
        assert src.kind is SourceKind.FORM
        assert src.get("tag") == ("a", True)
        assert src.get_strings("tag") == ["a", "b"]
        assert src.get_int("age") == 20
        assert src.get_int("tag", 7) == 7
        assert src.encode() == "tag=a&tag=b&age=20"

    def test_typed_getters(self) -> None:
        src = FormSource({"on": "yes", "price": "1.5"})
        assert src.get_bool("on") is True
        assert src.get_bool("missing", True) is True
        assert src.get_float("price") == 1.5
        assert src.get_string("missing") == ""

    def test_set_scalar_and_list(self) -> None:
        src = FormSource()
        assert src.set("age", 20) == 20
        assert src.form["age"] == ["20"]
        src.set("flags", [True, 1])
        assert src.form["flags"] == ["true", "1"]

    def test_set_rejects_mapping(self) -> None:
        with pytest.raises(FieldNotSettableError):
            FormSource().set("a", {"b": 1})

    def test_delete(self) -> None:
        src = FormSource({"a": "1"})
        src.delete("a")
        src.delete("missing")
        assert not src.has_field("a")

    def test_files(self, upload_file: Callable[..., UploadFile], png_bytes: bytes) -> None:
        """Files are read and typed by header or name / 文件按请求头或文件名识别类型。"""
        avatar = upload_file("avatar.png", png_bytes, "application/octet-stream")
        src = FormSource(files={"avatar": avatar})
        assert src.has_file("avatar")
        assert src.get("avatar") == (avatar, True)
        assert src.get_file("avatar") is avatar
        assert src.file_bytes("avatar") == png_bytes
        assert src.file_mime_type("avatar") == "image/png"
        assert src.file_bytes("missing") is None
        assert src.file_mime_type("missing") == ""

    def test_set_file(self, upload_file: Callable[..., UploadFile]) -> None:
        doc = upload_file("a.txt", b"hello")
        src = FormSource()
        src.set("doc", doc)
        assert src.has_file("doc")
        src.delete_file("doc")
        assert not src.has_file("doc")


class TestStructSource:
    """Tests for StructSource.
    StructSource 测试。
    """

    @pytest.mark.parametrize("value", [None, User, {"a": 1}, "text", 5, [1]])
    def test_rejects_non_objects(self, value: object) -> None:
        with pytest.raises(InvalidDataSourceError):
            StructSource(value)

    def test_get_nested(self) -> None:
        src = StructSource(User(name="tom", profile=Profile(city="Paris")))
        assert src.kind is SourceKind.STRUCT
        assert src.get("profile.city") == ("Paris", True)
        assert src.get("Name") == ("tom", True)

    def test_set_converts_to_annotation(self) -> None:
        """'23' stored in an int field becomes 23 / '23' 写入 int 字段后为 23。"""
        user = User()
        src = StructSource(user)
        assert src.set("age", "23") == 23
        assert user.age == 23
        src.set("profile.city", "Rome")
        assert user.profile.city == "Rome"

    def test_set_errors(self) -> None:
        src = StructSource(User())
        with pytest.raises(FieldNotFoundError):
            src.set("missing", 1)
        with pytest.raises(FieldNotFoundError):
            src.set("nothing.here", 1)
        with pytest.raises(FieldNotSettableError):
            src.set("age", "old")

    def test_frozen_objects(self) -> None:
        with pytest.raises(FieldNotSettableError):
            StructSource(FrozenUser()).set("name", "x")
        with pytest.raises(FieldNotSettableError):
            StructSource(Point()).set("x", 1)

    def test_nullable(self) -> None:
        src = StructSource(User())
        assert src.is_nullable("nickname")
        assert not src.is_nullable("age")
        assert not src.is_nullable("missing")
