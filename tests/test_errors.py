"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_errors.py
@DateTime: 2026-02-08
@Docs: Tests for errors.py module.
errors.py 模块测试。
"""

import json

from fastapi_data_validate.errors import Errors
from fastapi_data_validate.exceptions import ValidationError


class TestErrors:
    """Tests for the Errors collection.
    Errors 集合测试。
    """

    def test_empty(self) -> None:
        errs = Errors()
        assert errs.empty()
        assert errs.one() == ""
        assert errs.to_error() is None

    def test_insertion_order(self) -> None:
        """one() returns the first added message / one() 返回最先添加的消息。"""
        errs = Errors()
        errs.add("name", "required", "name is required")
        errs.add("age", "min", "age too small")
        errs.add("name", "minLength", "name too short")
        assert errs.one() == "name is required"
        assert errs.field("name") == {"required": "name is required", "minLength": "name too short"}
        assert errs.field_one("age") == "age too small"
        assert errs.messages() == ["name is required", "name too short", "age too small"]

    def test_same_validator_overwrites(self) -> None:
        errs = Errors()
        errs.add("a", "min", "first")
        errs.add("a", "min", "second")
        assert errs.field("a") == {"min": "second"}

    def test_serialization(self) -> None:
        errs = Errors()
        errs.add("名字", "required", "必填")
        assert json.loads(errs.to_json()) == {"名字": {"required": "必填"}}
        assert "必填" in errs.to_json()
        assert str(errs) == "名字:\n required: 必填"

    def test_to_error(self) -> None:
        errs = Errors()
        errs.add("age", "min", "age min value is 1")
        exc = errs.to_error()
        assert isinstance(exc, ValidationError)
        assert exc.message == "age min value is 1"
        assert exc.status_code == 422
        assert exc.details == {"age": {"min": "age min value is 1"}}
