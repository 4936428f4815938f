"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: easy.py
@DateTime: 2026-02-09
@Docs: Easy-layer API for data validation.
易用层 API：从常见输入直接创建校验会话。
"""

import json
import logging
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any
from urllib.parse import parse_qs

from fastapi import Request
from starlette.datastructures import UploadFile as StarletteUploadFile

from fastapi_data_validate.config import ValidateConfig, get_global_config
from fastapi_data_validate.exceptions import InvalidDataSourceError, ValidationError
from fastapi_data_validate.sources import DataSource, FormSource, MapSource, StructSource
from fastapi_data_validate.validation import Validation

logger = logging.getLogger(__name__)

DEFAULT_FIELD_NAME = "input"

_QUERY_ONLY_METHODS = frozenset({"GET", "HEAD", "DELETE"})


def _multi_items(values: Any) -> list[tuple[str, Any]]:
    if hasattr(values, "multi_items"):
        return list(values.multi_items())
    if isinstance(values, Mapping):
        items: list[tuple[str, Any]] = []
        for key, value in values.items():
            if isinstance(value, (list, tuple)):
                items.extend((key, v) for v in value)
            else:
                items.append((key, value))
        return items
    raise InvalidDataSourceError(details={"type": type(values).__name__})


def new(data: Any, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    """Create a validation session for any supported input.
    为任意受支持的输入创建校验会话。

    Args:
        data: Mapping, data source, pydantic model, dataclass or plain object.
            映射、数据源、pydantic 模型、数据类或普通对象。
        scene: Active scene name.
            当前场景名。
        config: Session config.
            会话配置。
    Returns:
        Validation: New session.
            新的校验会话。
    Raises:
        InvalidDataSourceError: None or an unsupported value.
            None 或不受支持的值。
    """
    if data is None:
        raise InvalidDataSourceError()
    if isinstance(data, DataSource):
        return data.create(scene, config=config)
    if isinstance(data, Mapping):
        return from_map(data, scene, config=config)
    return from_struct(data, scene, config=config)


def from_map(
    data: Mapping[str, Any], scene: str | None = None, *, config: ValidateConfig | None = None
) -> Validation:
    """Create a session over a mapping (the mapping itself is updated in place).
    基于映射创建会话（映射本身会被原地更新）。
    """
    source = MapSource(data if isinstance(data, MutableMapping) else dict(data))
    return source.create(scene, config=config)


def from_struct(obj: Any, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    """Create a session over a model/dataclass instance, loading its declared rules.
    基于模型/数据类实例创建会话，并加载其声明的规则。

    Raises:
        InvalidDataSourceError: Not an object instance.
            不是对象实例。
    """
    return StructSource(obj, config=config).create(scene, config=config)


def from_url_values(
    values: Mapping[str, str | Sequence[str]] | Any, scene: str | None = None, *, config: ValidateConfig | None = None
) -> Validation:
    """Create a session over form values (`{"tags": ["a", "b"]}` or a multi-dict).
    基于表单值创建会话（`{"tags": ["a", "b"]}` 或多值字典）。
    """
    source = FormSource()
    for key, value in _multi_items(values):
        source.add(key, value)
    return source.create(scene, config=config)


def from_query(query: str | Any, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    """Create a session over a query string or query params.
    基于查询字符串或查询参数创建会话。
    """
    if isinstance(query, str):
        query = parse_qs(query.lstrip("?"), keep_blank_values=True)
    return from_url_values(query, scene, config=config)


def from_json(text: str | bytes, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    """Create a session over a JSON object.
    基于 JSON 对象创建会话。

    Raises:
        InvalidDataSourceError: Not valid JSON or not an object.
            不是合法 JSON 或不是对象。
    """
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    try:
        data = json.loads(raw) if raw.strip() else {}
    except ValueError as exc:
        raise InvalidDataSourceError(message=f"invalid JSON body: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidDataSourceError(message="JSON body must be an object", details={"type": type(data).__name__})
    return MapSource(data, body_json=raw).create(scene, config=config)


def from_json_bytes(body: bytes, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    return from_json(body, scene, config=config)


async def from_request(
    request: Request, scene: str | None = None, *, config: ValidateConfig | None = None
) -> Validation:
    """Create a session from a FastAPI request.
    从 FastAPI 请求创建会话。

    GET/HEAD/DELETE use the query string only; multipart and urlencoded bodies are
    merged with the query string; JSON bodies become a map source.
    GET/HEAD/DELETE 仅使用查询字符串；multipart 与 urlencoded 请求体会与查询字符串合并；
    JSON 请求体生成映射数据源。

    Args:
        request: Incoming request.
            传入请求。
        scene: Active scene name.
            当前场景名。
        config: Session config (multipart limits are read from it).
            会话配置（multipart 限制从中读取）。
    Returns:
        Validation: New session.
            新的校验会话。
    Raises:
        InvalidDataSourceError: Unsupported content type or malformed body.
            不支持的内容类型或请求体格式错误。
    """
    cfg = config or get_global_config()
    if request.method.upper() in _QUERY_ONLY_METHODS:
        return from_url_values(request.query_params, scene, config=cfg)

    ctype = request.headers.get("content-type", "").split(";")[0].strip().lower()
    logger.debug("decode %s request body: content_type=%r", request.method, ctype)
    if ctype in ("multipart/form-data", "application/x-www-form-urlencoded"):
        form = await request.form(max_files=cfg.max_files, max_fields=cfg.max_fields)
        source = FormSource()
        for key, value in form.multi_items():
            if isinstance(value, StarletteUploadFile):
                source.add_file(key, value)
            else:
                source.add(key, value)
        for key, value in request.query_params.multi_items():
            if not source.has_field(key):
                source.add(key, value)
        return source.create(scene, config=cfg)
    if ctype == "application/json" or ctype.endswith("+json"):
        return from_json(await request.body(), scene, config=cfg)
    raise InvalidDataSourceError(
        message=f"unsupported content type '{ctype or 'none'}'", details={"content_type": ctype}
    )


def validate_map(
    data: Mapping[str, Any], rules: Mapping[str, str], scene: str | None = None, *, config: ValidateConfig | None = None
) -> Validation:
    """Validate a mapping against field rule strings and return the finished session.
    按字段规则字符串校验映射，并返回已执行的会话。
    """
    v = from_map(data, scene, config=config).string_rules(rules)
    v.validate()
    return v


def validate_struct(obj: Any, scene: str | None = None, *, config: ValidateConfig | None = None) -> Validation:
    """Validate an object using its declared rules and return the finished session.
    使用对象声明的规则进行校验，并返回已执行的会话。
    """
    v = from_struct(obj, scene, config=config)
    v.validate()
    return v


async def validate_request(
    request: Request,
    rules: Mapping[str, str],
    scene: str | None = None,
    *,
    config: ValidateConfig | None = None,
) -> Validation:
    """Validate a request against field rule strings and return the finished session.
    按字段规则字符串校验请求，并返回已执行的会话。
    """
    v = (await from_request(request, scene, config=config)).string_rules(rules)
    v.validate()
    return v


def validate_value(value: Any, rule: str, *, config: ValidateConfig | None = None) -> ValidationError | None:
    """Check a single value with a rule string.
    使用规则字符串检查单个值。

    Args:
        value: Value to check (reported under the field name `input`).
            待检查的值（以字段名 `input` 报告）。
        rule: Rule string, e.g. `"required|email"`.
            规则字符串，例如 `"required|email"`。
    Returns:
        ValidationError | None: Error object on failure (not raised), None on success.
            失败时返回错误对象（不抛出），成功时返回 None。
    """
    v = from_map({DEFAULT_FIELD_NAME: value}, config=config).string_rule(DEFAULT_FIELD_NAME, rule)
    return v.validate_err()
