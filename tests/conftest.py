"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-02-08
@Docs: Shared test fixtures for the fastapi-data-validate test suite.
测试套件的公共 fixtures。
"""

import io
from collections.abc import Callable, Iterator

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from fastapi_data_validate.config import get_global_config, set_global_config
from fastapi_data_validate.messages import restore_global_messages, snapshot_global_messages
from fastapi_data_validate.registry import restore_registries, snapshot_registries


@pytest.fixture(autouse=True)
def isolated_globals() -> Iterator[None]:
    """Restore registries, global messages and global config after each test.
    每个测试结束后恢复注册表、全局消息与全局配置。
    """
    registries = snapshot_registries()
    messages = snapshot_global_messages()
    config = get_global_config()
    yield
    restore_registries(registries)
    restore_global_messages(messages)
    set_global_config(config)


def make_upload_file(filename: str, content: bytes, content_type: str = "text/plain") -> UploadFile:
    """Create an UploadFile from bytes.
    从字节内容创建 UploadFile。

    Args:
        filename: File name / 文件名。
        content: File content bytes / 文件内容字节。
        content_type: MIME type / MIME 类型。

    Returns:
        UploadFile: Upload file / 上传文件。
    """
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def upload_file() -> Callable[..., UploadFile]:
    """Factory fixture for UploadFile objects.
    UploadFile 对象的工厂 fixture。
    """
    return make_upload_file


@pytest.fixture
def png_bytes() -> bytes:
    """Minimal PNG signature bytes.
    最小 PNG 签名字节。
    """
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
