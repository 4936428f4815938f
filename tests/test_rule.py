"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_rule.py
@DateTime: 2026-02-08
@Docs: Tests for rule.py module.
rule.py 模块测试。
"""

import pytest

from fastapi_data_validate.exceptions import RuleConfigError
from fastapi_data_validate.messages import Translator
from fastapi_data_validate.rule import FilterRule, Rule, parse_args, parse_rule_string, split_fields


class TestParsing:
    """Tests for rule string parsing.
    规则字符串解析测试。
    """

    def test_split_fields(self) -> None:
        assert split_fields("name, age,,") == ["name", "age"]
        assert split_fields(["a", " b "]) == ["a", "b"]

    def test_parse_args(self) -> None:
        assert parse_args("1, 2") == ["1", "2"]
        assert parse_args(",") == [","]

    def test_parse_rule_string(self) -> None:
        assert parse_rule_string("required|min:1|between:1,10") == [
            ("required", []),
            ("min", ["1"]),
            ("between", ["1", "10"]),
        ]

    def test_list_argument_validators(self) -> None:
        """enum receives one list argument / enum 接收一个列表参数。"""
        assert parse_rule_string("in:a,b,c") == [("in", [["a", "b", "c"]])]

    def test_whole_argument_validators(self) -> None:
        """regexp keeps commas and colons / regexp 保留逗号与冒号。"""
        assert parse_rule_string(r"regexp:^\d{1,3}:x$") == [("regexp", [r"^\d{1,3}:x$"])]
        assert parse_rule_string("message:a, b") == [("message", ["a, b"])]

    def test_edges(self) -> None:
        assert parse_rule_string("") == []
        assert parse_rule_string("|required||") == [("required", [])]
        with pytest.raises(RuleConfigError):
            parse_rule_string("required|:1")


class TestRule:
    """Tests for Rule.
    Rule 测试。
    """

    def test_new_and_fluent(self) -> None:
        rule = Rule.new("name, email", "required").set_scene("add").set_optional().set_default("x")
        assert rule.fields == ["name", "email"]
        assert rule.scene == "add"
        assert rule.optional
        assert rule.default_value == "x"

    def test_new_requires_field_and_validator(self) -> None:
        with pytest.raises(RuleConfigError):
            Rule.new("", "required")
        with pytest.raises(RuleConfigError):
            Rule.new("name", " ")

    def test_validator_names(self) -> None:
        assert Rule.new("a", "required| email").validator_names() == ["required", "email"]

    def test_check_meta_cached(self) -> None:
        rule = Rule.new("a", "isTom").set_check_func(lambda v: v == "tom")
        assert rule.check_meta("isTom") is rule.check_meta("isTom")
        with pytest.raises(RuleConfigError):
            Rule.new("a", "x").check_meta("x")

    def test_error_message_precedence(self) -> None:
        """Field message, then validator message, then rule message / 字段消息、校验器消息、规则消息依次优先。"""
        t = Translator()
        rule = Rule.new("age", "gte", 18)
        assert rule.error_message("gte", "age", t) == "age min value is 18"
        rule.set_message("{field} is invalid")
        assert rule.error_message("gte", "age", t) == "age is invalid"
        rule.set_messages({"min": "at least %v"})
        assert rule.error_message("gte", "age", t) == "at least 18"
        rule.set_messages({"gte": "gte %v"})
        assert rule.error_message("gte", "age", t) == "gte 18"
        rule.set_messages({"age.gte": "age.gte %v"})
        assert rule.error_message("gte", "age", t) == "age.gte 18"


class TestFilterRule:
    """Tests for FilterRule.
    FilterRule 测试。
    """

    def test_chain(self) -> None:
        fr = FilterRule.new("name", "trim|substr:0,3")
        assert fr.chain() == [("trim", []), ("substr", ["0", "3"])]

    def test_add_filters(self) -> None:
        fr = FilterRule.new("a").add_filters("lower", " upper ")
        assert list(fr.filters) == ["lower", "upper"]

    def test_requires_field(self) -> None:
        with pytest.raises(RuleConfigError):
            FilterRule.new(" ,")
