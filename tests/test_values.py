"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_values.py
@DateTime: 2026-02-08
@Docs: Tests for values.py module.
values.py 模块测试。
"""

from decimal import Decimal
from typing import Any, Optional

import pytest

from fastapi_data_validate.values import (
    Kind,
    compare,
    contains,
    convert_to_kind,
    format_value,
    is_empty,
    kind_from_annotation,
    kind_of,
    parse_bool,
    to_int,
    to_number,
    value_length,
    values_equal,
)


class TestKinds:
    """Tests for kind detection.
    值类别识别测试。
    """

    def test_kind_of_bool_before_int(self) -> None:
        """bool is not reported as int / bool 不会被识别为 int。"""
        assert kind_of(True) is Kind.BOOL
        assert kind_of(1) is Kind.INT

    def test_kind_of_containers(self) -> None:
        assert kind_of({"a": 1}) is Kind.MAP
        assert kind_of([1]) is Kind.LIST
        assert kind_of((1,)) is Kind.LIST
        assert kind_of(None) is Kind.NONE
        assert kind_of(Decimal("1.5")) is Kind.FLOAT

    def test_kind_from_annotation(self) -> None:
        """Optional unwraps, unions and Any resolve to ANY / Optional 解包，联合与 Any 解析为 ANY。"""
        assert kind_from_annotation(int) is Kind.INT
        assert kind_from_annotation(Optional[str]) is Kind.STRING
        assert kind_from_annotation(int | str) is Kind.ANY
        assert kind_from_annotation(Any) is Kind.ANY
        assert kind_from_annotation(list[int]) is Kind.LIST
        assert kind_from_annotation(dict[str, Any]) is Kind.MAP


class TestEmptiness:
    """Tests for is_empty.
    is_empty 测试。
    """

    @pytest.mark.parametrize("value", [None, "", [], {}, 0, 0.0, False])
    def test_empty_values(self, value: Any) -> None:
        assert is_empty(value)

    @pytest.mark.parametrize("value", ["a", [0], {"a": None}, 1, -1, True, object()])
    def test_non_empty_values(self, value: Any) -> None:
        assert not is_empty(value)


class TestConversion:
    """Tests for scalar conversion helpers.
    标量转换助手测试。
    """

    def test_to_int_strips_whitespace(self) -> None:
        """'50 ' converts to 50 / '50 ' 转换为 50。"""
        assert to_int("50 ") == 50

    def test_to_int_rejects_bool_and_fraction(self) -> None:
        with pytest.raises(ValueError):
            to_int(True)
        with pytest.raises(ValueError):
            to_int(1.5)

    def test_parse_bool_forms(self) -> None:
        assert parse_bool("on") is True
        assert parse_bool("No") is False
        with pytest.raises(ValueError):
            parse_bool("maybe")

    def test_to_number_prefers_int(self) -> None:
        assert to_number("12") == 12
        assert isinstance(to_number("12"), int)
        assert to_number("1.5") == 1.5

    def test_convert_to_kind(self) -> None:
        """Convert between scalar kinds, fail across incompatible kinds / 标量间转换，不兼容类别失败。"""
        assert convert_to_kind("23", Kind.INT) == 23
        assert convert_to_kind(5, Kind.STRING) == "5"
        assert convert_to_kind("yes", Kind.BOOL) is True
        assert convert_to_kind([1], Kind.ANY) == [1]
        with pytest.raises(ValueError):
            convert_to_kind({"a": 1}, Kind.INT)
        with pytest.raises(TypeError):
            convert_to_kind({"a": 1}, Kind.LIST)
        with pytest.raises(ValueError):
            convert_to_kind("abc", Kind.INT)
        with pytest.raises(TypeError):
            convert_to_kind(None, Kind.STRING)


class TestComparison:
    """Tests for compare / values_equal / contains.
    compare / values_equal / contains 测试。
    """

    def test_numeric_strings_compare_numerically(self) -> None:
        assert compare("10", 9, "gt")
        assert compare(45, "1", "gte")

    def test_non_numeric_string_uses_length(self) -> None:
        assert compare("abc", 3, "eq")
        assert compare([1, 2], 3, "lt")

    def test_string_against_string(self) -> None:
        assert compare("b", "a", "gt")

    def test_not_comparable(self) -> None:
        assert not compare(object(), 1, "gt")

    def test_values_equal_crossover(self) -> None:
        assert values_equal(1, "1")
        assert values_equal(1, 1.0)
        assert values_equal(True, "true")
        assert not values_equal(None, 0)

    def test_contains(self) -> None:
        assert contains("hello", "ell")
        assert contains([1, 2, 3], "2")
        assert contains({"a": 1}, "a")
        assert not contains(5, 5)


class TestFormatting:
    """Tests for value_length / format_value.
    value_length / format_value 测试。
    """

    def test_value_length(self) -> None:
        assert value_length("abc") == 3
        assert value_length([1]) == 1
        assert value_length(10) == -1

    def test_format_value(self) -> None:
        assert format_value([1, "a"]) == "[1,a]"
        assert format_value(None) == "<nil>"
        assert format_value(False) == "false"
