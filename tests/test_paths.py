"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_paths.py
@DateTime: 2026-02-08
@Docs: Tests for paths.py module.
paths.py 模块测试。
"""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel

from fastapi_data_validate.paths import (
    expand_path,
    find_attr_name,
    flatten,
    get_by_path,
    set_by_path,
    wildcard_depth,
)


class Address(BaseModel):
    city: str = ""


class Person(BaseModel):
    Name: str = ""
    address: Address = Address()


@dataclass
class Item:
    sku: str
    tags: list[str] = field(default_factory=list)


class TestGetByPath:
    """Tests for get_by_path.
    get_by_path 测试。
    """

    def test_plain_and_dotted_keys(self) -> None:
        data = {"a": {"b": {"c": 1}}, "x.y": 2}
        assert get_by_path(data, "a.b.c") == (1, True)
        assert get_by_path(data, "x.y") == (2, True)

    def test_list_index(self) -> None:
        assert get_by_path({"items": [10, 20]}, "items.1") == (20, True)
        assert get_by_path({"items": [10, 20]}, "items.5") == (None, False)

    def test_missing_never_raises(self) -> None:
        """Missing segments return (None, False) / 缺失路径段返回 (None, False)。"""
        assert get_by_path({"a": 1}, "a.b") == (None, False)
        assert get_by_path({}, "") == (None, False)
        assert get_by_path(None, "a") == (None, False)

    def test_model_attributes_case_insensitive(self) -> None:
        p = Person(Name="tom", address=Address(city="Paris"))
        assert get_by_path(p, "name") == ("tom", True)
        assert get_by_path(p, "address.city") == ("Paris", True)

    def test_wildcard_over_list(self) -> None:
        data = {"names": ["John", "Jane"]}
        assert get_by_path(data, "names.*") == (["John", "Jane"], True)

    def test_nested_wildcards_keep_levels(self) -> None:
        """Each wildcard level yields one list level / 每个通配符层级产生一层列表。"""
        data = {"groups": [{"users": [{"n": 1}, {"n": 2}]}, {"users": [{"n": 3}]}]}
        val, ok = get_by_path(data, "groups.*.users.*.n")
        assert ok
        assert val == [[1, 2], [3]]
        assert flatten(val, wildcard_depth("groups.*.users.*.n") - 1) == [1, 2, 3]

    def test_wildcard_missing_branch_fails(self) -> None:
        data = {"items": [{"sku": "a"}, {"name": "b"}]}
        assert get_by_path(data, "items.*.sku") == (None, False)

    def test_wildcard_over_dataclasses(self) -> None:
        data = {"items": [Item(sku="a"), Item(sku="b")]}
        assert get_by_path(data, "items.*.sku") == (["a", "b"], True)


class TestSetByPath:
    """Tests for set_by_path.
    set_by_path 测试。
    """

    def test_creates_intermediate_maps(self) -> None:
        data: dict = {}
        set_by_path(data, "a.b", 1)
        assert data == {"a": {"b": 1}}

    def test_wildcard_writes_every_branch(self) -> None:
        data = {"items": [{"n": 1}, {"n": 2}]}
        set_by_path(data, "items.*.n", 0)
        assert data == {"items": [{"n": 0}, {"n": 0}]}

    def test_object_attribute(self) -> None:
        p = Person()
        set_by_path(p, "address.city", "Rome")
        assert p.address.city == "Rome"

    def test_unknown_attribute_raises(self) -> None:
        with pytest.raises(AttributeError):
            set_by_path(Person(), "missing", 1)

    def test_immutable_container_raises(self) -> None:
        with pytest.raises(TypeError):
            set_by_path({"t": (1, 2)}, "t.0", 5)


class TestHelpers:
    """Tests for expand_path / flatten / find_attr_name.
    expand_path / flatten / find_attr_name 测试。
    """

    def test_expand_path(self) -> None:
        data = {"items": [{"sku": "a"}, {"sku": "b"}]}
        assert expand_path(data, "items.*.sku") == ["items.0.sku", "items.1.sku"]
        assert expand_path(data, "plain") == ["plain"]
        assert expand_path({"items": 5}, "items.*") == []

    def test_flatten_depth(self) -> None:
        assert flatten([[1, [2]], [3]]) == [1, 2, 3]
        assert flatten([[1, [2]], [3]], 1) == [1, [2], 3]
        assert flatten([[1], [2]], 0) == [[1], [2]]
        assert flatten(5) == [5]

    def test_find_attr_name(self) -> None:
        assert find_attr_name(Person(), "NAME") == "Name"
        assert find_attr_name(Person(), "nope") is None
        assert find_attr_name({"a": 1}, "a") is None
