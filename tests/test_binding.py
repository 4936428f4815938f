"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_binding.py
@DateTime: 2026-02-08
@Docs: Tests for binding.py module.
binding.py 模块测试。
"""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from fastapi_data_validate import BindMismatchError, bind_safe_data, from_map


class Profile(BaseModel):
    city: str = ""


class UserIn(BaseModel):
    name: str
    age: int = 0
    profile: Profile = Profile()


@dataclass
class UserRecord:
    name: str = ""
    age: int = 0


@dataclass(frozen=True)
class FrozenRecord:
    name: str = ""


class TestBindModelClass:
    """Binding onto pydantic model classes.
    绑定到 pydantic 模型类。
    """

    def test_case_insensitive_names(self) -> None:
        user = bind_safe_data({"Name": "tom", "AGE": "3", "tags.*": ["x"]}, UserIn)
        assert isinstance(user, UserIn)
        assert user.name == "tom"
        assert user.age == 3

    def test_nested_keys(self) -> None:
        user = bind_safe_data({"name": "tom", "profile.city": "Paris"}, UserIn)
        assert user.profile.city == "Paris"

    def test_unknown_key(self) -> None:
        with pytest.raises(BindMismatchError) as exc_info:
            bind_safe_data({"name": "tom", "email": "x"}, UserIn)
        assert exc_info.value.details == {"field": "email", "model": "UserIn"}

    def test_incompatible_value(self) -> None:
        with pytest.raises(BindMismatchError):
            bind_safe_data({"name": "tom", "age": "old"}, UserIn)


class TestBindInstances:
    """Binding onto mappings and objects.
    绑定到映射与对象。
    """

    def test_mapping(self) -> None:
        dst: dict = {"keep": 1}
        assert bind_safe_data({"a.b": 2}, dst) is dst
        assert dst == {"keep": 1, "a": {"b": 2}}

    def test_dataclass_instance(self) -> None:
        record = UserRecord()
        assert bind_safe_data({"Name": "tom", "age": "7"}, record) is record
        assert record.name == "tom"
        assert record.age == 7

    def test_missing_field(self) -> None:
        with pytest.raises(BindMismatchError):
            bind_safe_data({"email": "x"}, UserRecord())

    def test_frozen_instance(self) -> None:
        with pytest.raises(BindMismatchError):
            bind_safe_data({"name": "x"}, FrozenRecord())

    @pytest.mark.parametrize("dst", [None, "text", 5, [1], UserRecord])
    def test_invalid_destination(self, dst: object) -> None:
        with pytest.raises(BindMismatchError):
            bind_safe_data({"name": "x"}, dst)


class TestSessionBinding:
    """Validation.bind_safe_data.
    Validation.bind_safe_data 测试。
    """

    def test_bind_after_validate(self) -> None:
        v = from_map({"name": "tom", "age": "30", "extra": "ignored"})
        v.string_rules({"name": "required", "age": "required|isInt"})
        assert v.validate()
        user = v.bind_safe_data(UserIn)
        assert user.name == "tom"
        assert user.age == 30

    def test_failed_session_binds_nothing(self) -> None:
        v = from_map({"name": ""})
        v.string_rule("name", "required")
        assert not v.validate()
        record = UserRecord(name="old")
        v.bind_safe_data(record)
        assert record.name == "old"
