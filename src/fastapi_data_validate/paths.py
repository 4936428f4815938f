"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: paths.py
@DateTime: 2026-02-08
@Docs: Dotted and wildcard path traversal over nested data.
嵌套数据上的点号路径与通配符路径遍历。

Paths are dot separated: `user.name`, `items.0.price`, `items.*.price`.
A `*` segment iterates the elements of a list or the values of a mapping.
路径以点号分隔：`user.name`、`items.0.price`、`items.*.price`。
`*` 段遍历列表元素或映射的值。
"""

import dataclasses
from collections.abc import Mapping, MutableMapping, Set
from typing import Any

from pydantic import BaseModel

WILDCARD = "*"
SEPARATOR = "."


def split_path(path: str) -> list[str]:
    return path.split(SEPARATOR) if path else []


def has_wildcard(path: str) -> bool:
    return WILDCARD in split_path(path)


def wildcard_depth(path: str) -> int:
    """
    Count wildcard segments in a path.
    统计路径中的通配符段数量。
    """
    return sum(1 for seg in split_path(path) if seg == WILDCARD)


# ---------------------------------------------------------------------------
# Attribute helpers / 属性助手
# ---------------------------------------------------------------------------


def field_names(obj: Any) -> list[str] | None:
    """
    Public field names of a model, dataclass or plain object.
    模型、数据类或普通对象的公开字段名。

    Args:
        obj: Object instance.
            对象实例。

    Returns:
        list[str] | None: Field names, None for non-struct values.
        list[str] | None: 字段名列表，非结构体值返回 None。
    """
    if isinstance(obj, BaseModel):
        return list(type(obj).model_fields)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [f.name for f in dataclasses.fields(obj)]
    if isinstance(obj, (str, bytes, bytearray, int, float, bool, Mapping, list, tuple, Set)) or obj is None:
        return None
    names: list[str] = []
    if hasattr(obj, "__dict__"):
        names.extend(k for k in vars(obj) if not k.startswith("_"))
    for slot in getattr(type(obj), "__slots__", ()):
        if not slot.startswith("_") and slot not in names:
            names.append(slot)
    return names


def find_attr_name(obj: Any, name: str) -> str | None:
    """
    Resolve a field name on an object, falling back to a case-insensitive match.
    在对象上解析字段名，失败时回退到大小写不敏感匹配。
    """
    names = field_names(obj)
    if not names:
        return None
    if name in names:
        return name
    lowered = name.lower()
    for n in names:
        if n.lower() == lowered:
            return n
    return None


def get_child(container: Any, key: str) -> tuple[Any, bool]:
    """
    Read one path segment from a container.
    从容器中读取一个路径段。

    Args:
        container: Mapping, list/tuple or object.
            映射、列表/元组或对象。
        key: Segment (map key, list index or attribute name).
            路径段（映射键、列表索引或属性名）。

    Returns:
        tuple[Any, bool]: Value and found flag.
        tuple[Any, bool]: 值与是否找到的标记。
    """
    if isinstance(container, Mapping):
        if key in container:
            return container[key], True
        return None, False
    if isinstance(container, (list, tuple)):
        try:
            idx = int(key)
        except ValueError:
            return None, False
        if 0 <= idx < len(container):
            return container[idx], True
        return None, False
    attr = find_attr_name(container, key)
    if attr is None:
        return None, False
    try:
        return getattr(container, attr), True
    except AttributeError:
        return None, False


def _iter_items(container: Any) -> list[Any] | None:
    if isinstance(container, Mapping):
        return list(container.values())
    if isinstance(container, (list, tuple, Set)):
        return list(container)
    return None


# ---------------------------------------------------------------------------
# Public API / 公开 API
# ---------------------------------------------------------------------------


def get_by_path(data: Any, path: str) -> tuple[Any, bool]:
    """
    Resolve a dotted/wildcard path.
    解析点号/通配符路径。

    Each wildcard level yields one list level in the result, so `a.*.b.*.c`
    returns a list of lists; use `flatten()` to collapse it. Any branch that
    fails to resolve makes the whole lookup fail.
    每个通配符层级在结果中产生一层列表，因此 `a.*.b.*.c` 返回列表的列表，
    可用 `flatten()` 展开。任一分支解析失败则整体查找失败。

    Args:
        data: Root container.
            根容器。
        path: Field path.
            字段路径。

    Returns:
        tuple[Any, bool]: Value and found flag; never raises.
        tuple[Any, bool]: 值与是否找到的标记；不会抛出异常。
    """
    if not path:
        return None, False
    # Literal key wins over path splitting / 字面量键优先于路径拆分
    if isinstance(data, Mapping) and path in data:
        return data[path], True
    return _resolve(data, split_path(path))


def _resolve(current: Any, segments: list[str]) -> tuple[Any, bool]:
    for i, seg in enumerate(segments):
        if seg == WILDCARD:
            items = _iter_items(current)
            if items is None:
                return None, False
            rest = segments[i + 1 :]
            if not rest:
                return items, True
            results = []
            for item in items:
                val, ok = _resolve(item, rest)
                if not ok:
                    return None, False
                results.append(val)
            return results, True
        current, ok = get_child(current, seg)
        if not ok:
            return None, False
    return current, True


def expand_path(data: Any, path: str) -> list[str]:
    """
    Expand wildcard segments into the concrete paths present in data.
    将通配符段展开为数据中实际存在的具体路径。

    `items.*.name` over two items yields `["items.0.name", "items.1.name"]`.
    Paths without wildcards are returned as-is; branches that do not resolve
    are dropped.
    对两个元素执行 `items.*.name` 得到 `["items.0.name", "items.1.name"]`。
    不含通配符的路径原样返回；无法解析的分支会被丢弃。

    Args:
        data: Root container.
            根容器。
        path: Field path.
            字段路径。

    Returns:
        list[str]: Concrete paths.
        list[str]: 具体路径列表。
    """
    if not has_wildcard(path):
        return [path]
    return [SEPARATOR.join(parts) for parts in _expand(data, split_path(path), [])]


def _expand(current: Any, segments: list[str], prefix: list[str]) -> list[list[str]]:
    if not segments:
        return [prefix]
    head, rest = segments[0], segments[1:]
    if head != WILDCARD:
        child, ok = get_child(current, head)
        return _expand(child, rest, [*prefix, head]) if ok else []
    if isinstance(current, Mapping):
        keys: list[str] = [str(k) for k in current]
    elif isinstance(current, (list, tuple)):
        keys = [str(i) for i in range(len(current))]
    else:
        return []
    out: list[list[str]] = []
    for key in keys:
        child, _ = get_child(current, key)
        out.extend(_expand(child, rest, [*prefix, key]))
    return out


def set_by_path(data: Any, path: str, value: Any) -> None:
    """
    Write a value at a dotted/wildcard path.
    在点号/通配符路径上写入值。

    Missing intermediate mapping keys are created; a wildcard writes every
    branch.
    缺失的中间映射键会被创建；通配符会写入每个分支。

    Args:
        data: Root container.
            根容器。
        path: Field path.
            字段路径。
        value: Value to store.
            要写入的值。

    Raises:
        KeyError: Path cannot be created.
        KeyError: 路径无法创建。
        IndexError: List index out of range.
        IndexError: 列表索引越界。
        TypeError: Container is immutable.
        TypeError: 容器不可变。
        AttributeError: Object has no such field.
        AttributeError: 对象不存在该字段。
    """
    segments = split_path(path)
    if not segments:
        raise KeyError(path)
    if isinstance(data, MutableMapping) and path in data:
        data[path] = value
        return
    _assign(data, segments, value, path)


def _assign(current: Any, segments: list[str], value: Any, path: str) -> None:
    head, rest = segments[0], segments[1:]
    if head == WILDCARD:
        if isinstance(current, list):
            keys: list[Any] = list(range(len(current)))
        elif isinstance(current, MutableMapping):
            keys = list(current)
        else:
            raise TypeError(f"cannot iterate {type(current).__name__} at '{path}'")
        for k in keys:
            if rest:
                _assign(current[k], rest, value, path)
            else:
                current[k] = value
        return
    if not rest:
        _set_child(current, head, value)
        return
    child, ok = get_child(current, head)
    if not ok or child is None:
        if not isinstance(current, MutableMapping):
            raise KeyError(path)
        child = {}
        current[head] = child
    _assign(child, rest, value, path)


def _set_child(container: Any, key: str, value: Any) -> None:
    if isinstance(container, MutableMapping):
        container[key] = value
        return
    if isinstance(container, list):
        idx = int(key)
        if idx == len(container):
            container.append(value)
        else:
            container[idx] = value
        return
    if isinstance(container, (Mapping, tuple, str, bytes, Set)) or container is None:
        raise TypeError(f"cannot set '{key}' on {type(container).__name__}")
    attr = find_attr_name(container, key)
    if attr is None:
        raise AttributeError(key)
    setattr(container, attr, value)


def flatten(values: Any, depth: int | None = None) -> list[Any]:
    """
    Flatten nested lists up to `depth` levels (None = fully).
    将嵌套列表展开至多 `depth` 层（None 表示完全展开）。

    Args:
        values: List (possibly nested).
            （可能嵌套的）列表。
        depth: Levels to collapse.
            要展开的层数。

    Returns:
        list[Any]: Flattened list.
        list[Any]: 展开后的列表。
    """
    if not isinstance(values, list):
        return [values]
    out: list[Any] = []
    for v in values:
        if isinstance(v, list) and (depth is None or depth > 0):
            out.extend(flatten(v, None if depth is None else depth - 1))
        else:
            out.append(v)
    return out
