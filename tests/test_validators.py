"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_validators.py
@DateTime: 2026-02-08
@Docs: Tests for validators.py module.
validators.py 模块测试。
"""

from datetime import date

import pytest

from fastapi_data_validate.validators import (
    BUILTIN_VALIDATORS,
    after_date,
    before_or_equal_date,
    between,
    enum,
    in_integers,
    is_base64,
    is_bool,
    is_cidr_v4,
    is_cn_mobile,
    is_date,
    is_email,
    is_full_url,
    is_int,
    is_ip,
    is_isbn10,
    is_isbn13,
    is_json,
    is_number,
    is_rgb_color,
    is_string,
    is_url,
    is_uuid4,
    min_length,
    not_in,
    regexp,
    string_length,
)


class TestTypeValidators:
    """Tests for type validators.
    类型校验器测试。
    """

    def test_is_int(self) -> None:
        assert is_int(5)
        assert is_int("-12")
        assert not is_int(True)
        assert not is_int("1.5")
        assert is_int("5", 1, 9)
        assert not is_int(10, 1, 9)

    def test_is_string(self) -> None:
        assert is_string("abc", 2)
        assert not is_string("abc", 4)
        assert not is_string(3)

    def test_is_number_is_non_negative(self) -> None:
        assert is_number("123")
        assert not is_number(-1)
        assert not is_number("1.5")

    def test_is_bool(self) -> None:
        assert is_bool("off")
        assert not is_bool(1)

    def test_is_json(self) -> None:
        assert is_json('{"a": 1}')
        assert not is_json("{a}")
        assert not is_json("")


class TestCompareValidators:
    """Tests for value and length comparison.
    值与长度比较测试。
    """

    def test_enum_and_not_in(self) -> None:
        """Enum compares across int and string / 枚举跨 int 与字符串比较。"""
        assert enum(2, ["1", "2"])
        assert not_in("c", ["a", "b"])
        assert in_integers("3", ["1", "3"])

    def test_between(self) -> None:
        assert between("5", 1, 10)
        assert not between("abc", 1, 10)

    def test_length(self) -> None:
        assert min_length("abcdef", 6)
        assert not min_length("ab", 6)
        assert not min_length(12345678, 2)
        assert string_length("abc", 1, 3)
        assert not string_length("abcd", 1, 3)
        assert not string_length("abc")


class TestFormatValidators:
    """Tests for string format validators.
    字符串格式校验器测试。
    """

    @pytest.mark.parametrize("value", ["a@b.co", "first.last+tag@example.com"])
    def test_valid_email(self, value: str) -> None:
        assert is_email(value)

    @pytest.mark.parametrize("value", ["a@", "@b.com", "a b@c.com", "a@b"])
    def test_invalid_email(self, value: str) -> None:
        assert not is_email(value)

    def test_urls(self) -> None:
        assert is_url("example.com/path")
        assert is_url("http://localhost:8000")
        assert not is_url("not a url")
        assert is_full_url("https://example.com")
        assert not is_full_url("example.com")

    def test_network(self) -> None:
        assert is_ip("::1")
        assert not is_ip("256.0.0.1")
        assert is_cidr_v4("10.0.0.0/8")
        assert not is_cidr_v4("10.0.0.1")

    def test_identifiers(self) -> None:
        assert is_uuid4("9b2e0c7c-1f4e-4d3a-8f55-6a2b4c8d9e10")
        assert not is_uuid4("not-a-uuid")
        assert is_isbn10("0-306-40615-2")
        assert is_isbn13("978-3-16-148410-0")
        assert is_cn_mobile("13800138000")
        assert not is_cn_mobile("2380013800")

    def test_encodings(self) -> None:
        assert is_base64("aGVsbG8=")
        assert not is_base64("hello!")
        assert is_rgb_color("rgb(0, 128, 255)")
        assert not is_rgb_color("rgb(300,0,0)")

    def test_regexp_invalid_pattern(self) -> None:
        """Bad patterns fail instead of raising / 非法正则返回 False 而非抛出。"""
        assert regexp("abc", r"^a\w+$")
        assert not regexp("abc", "(")


class TestDateValidators:
    """Tests for date validators.
    日期校验器测试。
    """

    def test_is_date(self) -> None:
        assert is_date("2024-01-31")
        assert is_date(date(2024, 1, 31))
        assert not is_date("31st Jan")

    def test_date_comparison(self) -> None:
        assert after_date("2024-02-01", "2024-01-31")
        assert before_or_equal_date("2024-01-31", "2024-01-31")
        assert not after_date("bad", "2024-01-31")


class TestBuiltinTable:
    """Tests for the builtin validator table.
    内置校验器表测试。
    """

    def test_names(self) -> None:
        for name in ("required", "isFile", "eqField"):
            assert name not in BUILTIN_VALIDATORS
        for name in ("minLength", "isEmail", "enum", "afterDate"):
            assert name in BUILTIN_VALIDATORS
