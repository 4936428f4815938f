"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_e2e.py
@DateTime: 2026-02-08
@Docs: End-to-end tests for the signup example app.
注册示例应用的端到端测试。
"""

import pytest
from httpx import AsyncClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

VALID_USER = {
    "name": "  Alice ",
    "email": " Alice@Example.COM ",
    "age": 30,
    "password": "s3cretpass",
    "confirm": "s3cretpass",
    "tags": ["go", "py"],
}


@pytest.mark.asyncio
class TestSignupE2E:
    """Signup end-to-end validation tests.
    注册端到端校验测试。
    """

    async def test_create_json(self, client: AsyncClient) -> None:
        """Valid JSON -> 200 with filtered values / 合法 JSON -> 200 且值已过滤。"""
        resp = await client.post("/users", json=VALID_USER)
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"] == {"name": "Alice", "email": "alice@example.com", "age": 30}
        assert data["filtered"] == {"name": "Alice", "email": "alice@example.com"}

    async def test_create_form(self, client: AsyncClient) -> None:
        """Form values are strings; binding converts age / 表单值为字符串，绑定时转换 age。"""
        form = {**VALID_USER, "age": "42", "tags": ["go", "py"]}
        resp = await client.post("/users", data=form)
        assert resp.status_code == 200
        assert resp.json()["user"]["age"] == 42

    async def test_labels_in_messages(self, client: AsyncClient) -> None:
        """Labels replace field names in messages / 消息中使用字段标签。"""
        resp = await client.post("/users", json={**VALID_USER, "name": " "})
        assert resp.status_code == 422
        body = resp.json()
        assert body["error_code"] == "validation_failed"
        assert body["message"] == "Username is required to not be empty"
        assert body["details"] == {"name": {"required": "Username is required to not be empty"}}

    async def test_custom_validator_message(self, client: AsyncClient) -> None:
        resp = await client.post("/users", json={**VALID_USER, "password": "short", "confirm": "short"})
        assert resp.status_code == 422
        assert resp.json()["message"] == "password needs 8+ characters and a digit"

    async def test_field_message_override(self, client: AsyncClient) -> None:
        resp = await client.post("/users", json={**VALID_USER, "confirm": "other1234"})
        assert resp.json()["details"] == {"confirm": {"eqField": "passwords do not match"}}

    async def test_wildcard_items(self, client: AsyncClient) -> None:
        """Every list item is checked / 每个列表元素都会被校验。"""
        resp = await client.post("/users", json={**VALID_USER, "tags": ["go", "x"]})
        assert resp.status_code == 422
        assert list(resp.json()["details"]) == ["tags.*"]

    async def test_update_scene(self, client: AsyncClient) -> None:
        """Update scene ignores password fields / update 场景忽略密码字段。"""
        resp = await client.patch("/users/7", json={"name": "Bob", "age": 20})
        assert resp.status_code == 200
        assert resp.json() == {"id": 7, "changes": {"name": "Bob", "age": 20}}

    async def test_update_scene_errors(self, client: AsyncClient) -> None:
        resp = await client.patch("/users/7", json={"name": "Bob", "age": 12})
        assert resp.status_code == 422
        assert resp.json()["message"] == "age value must be in the range 18 - 120"

    async def test_unsupported_body(self, client: AsyncClient) -> None:
        resp = await client.post("/users", content=b"name=x", headers={"content-type": "text/plain"})
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "invalid_data_source"

    async def test_avatar_upload(self, client: AsyncClient) -> None:
        resp = await client.post("/avatar", files={"avatar": ("me.png", PNG_BYTES, "image/png")})
        assert resp.status_code == 200
        assert resp.json() == {"filename": "me.png", "content_type": "image/png"}

    async def test_avatar_rejects_text(self, client: AsyncClient) -> None:
        resp = await client.post("/avatar", files={"avatar": ("me.txt", b"hello", "text/plain")})
        assert resp.status_code == 422
        assert list(resp.json()["details"]["avatar"]) == ["isImage"]
