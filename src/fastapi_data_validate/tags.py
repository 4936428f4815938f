"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: tags.py
@DateTime: 2026-02-08
@Docs: Rule extraction from pydantic models and dataclasses.
从 pydantic 模型与数据类中提取规则。

Rules live in field metadata, keyed by the configured tag names:
规则保存在字段元数据中，键名由配置的标签名决定：

    class User(BaseModel):
        name: str = Field("", json_schema_extra={"validate": "required|minLen:2", "filter": "trim"})

    @dataclass
    class User:
        name: str = field(default="", metadata={"validate": "required", "label": "User Name"})

Nested models contribute dotted rules (`address.city`); lists of models
contribute wildcard rules (`items.*.sku`).
嵌套模型生成点号路径规则（`address.city`）；模型列表生成通配符规则（`items.*.sku`）。
"""

import dataclasses
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from fastapi_data_validate.config import ValidateConfig, get_global_config
from fastapi_data_validate.messages import DEFAULT_MESSAGE_KEY
from fastapi_data_validate.typing import annotations_of, unwrap_optional

_MAX_DEPTH = 8


@dataclass(slots=True)
class StructRules:
    """
    Rules and display metadata collected from a struct.
    从结构体收集的规则与显示元数据。

    Attributes:
        rules: Field path to validate rule string.
            字段路径到校验规则字符串。
        filters: Field path to filter rule string.
            字段路径到过滤规则字符串。
        labels: Field path to display label.
            字段路径到显示名称。
        messages: Message key to template.
            消息键到模板。
        field_map: Field path to output name.
            字段路径到输出名称。
    """

    rules: dict[str, str] = field(default_factory=dict)
    filters: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    messages: dict[str, str] = field(default_factory=dict)
    field_map: dict[str, str] = field(default_factory=dict)


def _is_struct_class(tp: Any) -> bool:
    return isinstance(tp, type) and (issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp))


def _field_entries(cls: type) -> list[tuple[str, Any, Mapping[str, Any], str | None]]:
    if issubclass(cls, BaseModel):
        entries = []
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else {}
            entries.append((name, info.annotation, extra, info.alias))
        return entries
    if dataclasses.is_dataclass(cls):
        hints = annotations_of(cls)
        return [(f.name, hints.get(f.name, f.type), f.metadata, None) for f in dataclasses.fields(cls)]
    return []


def _nested_target(annotation: Any) -> tuple[type | None, bool]:
    ann = unwrap_optional(annotation)
    if _is_struct_class(ann):
        return ann, False
    if typing.get_origin(ann) in (list, tuple, set, frozenset):
        args = typing.get_args(ann)
        elem = unwrap_optional(args[0]) if args else None
        if _is_struct_class(elem):
            return elem, True
    return None, False


def parse_message_tag(field_path: str, value: Any) -> dict[str, str]:
    """
    Parse a message tag into translator message keys.
    将消息标签解析为翻译器消息键。

    `"required:name is required|minLen:too short"` yields per-validator keys;
    a plain text applies to every validator of the field.
    `"required:name is required|minLen:too short"` 生成按校验器区分的键；
    普通文本适用于该字段的全部校验器。

    Args:
        field_path: Field path.
            字段路径。
        value: Tag value (text or mapping).
            标签值（文本或映射）。

    Returns:
        dict[str, str]: Message key to template.
        dict[str, str]: 消息键到模板的映射。
    """
    if isinstance(value, Mapping):
        return {f"{field_path}.{k}": str(v) for k, v in value.items()}
    text = str(value).strip() if value is not None else ""
    if not text:
        return {}
    out: dict[str, str] = {}
    for part in text.split("|"):
        name, sep, msg = part.partition(":")
        if sep and name.strip().isidentifier():
            out[f"{field_path}.{name.strip()}"] = msg.strip()
        else:
            out[f"{field_path}.{DEFAULT_MESSAGE_KEY}"] = part.strip()
    return out


def collect_struct_rules(target: Any, config: ValidateConfig | None = None) -> StructRules:
    """
    Collect rules from a model/dataclass instance or class.
    从模型/数据类实例或类中收集规则。

    Args:
        target: Instance or class.
            实例或类。
        config: Tag names and nesting options.
            标签名与嵌套选项。

    Returns:
        StructRules: Collected rules.
        StructRules: 收集到的规则。
    """
    cls = target if isinstance(target, type) else type(target)
    out = StructRules()
    if _is_struct_class(cls):
        _collect(cls, "", out, config or get_global_config(), 0)
    return out


def _collect(cls: type, prefix: str, out: StructRules, cfg: ValidateConfig, depth: int) -> None:
    if depth > _MAX_DEPTH:
        return
    for name, annotation, meta, alias in _field_entries(cls):
        path = f"{prefix}{name}"
        rule = meta.get(cfg.validate_tag)
        if rule:
            out.rules[path] = str(rule)
        filter_rule = meta.get(cfg.filter_tag)
        if filter_rule:
            out.filters[path] = str(filter_rule)
        label = meta.get(cfg.label_tag)
        if label:
            out.labels[path] = str(label)
        if cfg.message_tag in meta:
            out.messages.update(parse_message_tag(path, meta[cfg.message_tag]))
        output = meta.get(cfg.field_tag) or alias
        if output:
            out.field_map[path] = str(output)

        nested, is_list = _nested_target(annotation)
        if nested is None or (cfg.check_sub_on_parent_marked and not rule):
            continue
        _collect(nested, f"{path}.*." if is_list else f"{path}.", out, cfg, depth + 1)
