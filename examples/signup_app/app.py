"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: app.py
@DateTime: 2026-02-08
@Docs: FastAPI app validating signup requests.
校验注册请求的 FastAPI 示例应用。
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fastapi_data_validate import ValidateError, from_request, validate_request
from fastapi_data_validate.config import ValidateConfig

from .handlers import SignupIn, prepare


def create_app(config: ValidateConfig | None = None) -> FastAPI:
    """Create the signup example app.
    创建注册示例应用。

    Args:
        config: Override validation config / 覆盖校验配置。

    Returns:
        FastAPI app instance / FastAPI 应用实例。
    """
    app = FastAPI(title="Signup Validation Example")

    @app.exception_handler(ValidateError)
    async def _validate_error_handler(request: Any, exc: ValidateError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error_code": exc.error_code, "details": exc.details},
        )

    @app.post("/users")
    async def create_user(request: Request) -> dict[str, Any]:
        """Validate a signup form or JSON body / 校验注册表单或 JSON 请求体。"""
        v = prepare(await from_request(request, config=config), "create")
        if not v.validate():
            raise v.errors.to_error()
        user = v.bind_safe_data(SignupIn)
        return {"user": user.model_dump(exclude={"password", "confirm"}), "filtered": v.filtered_data()}

    @app.patch("/users/{user_id}")
    async def update_user(user_id: int, request: Request) -> dict[str, Any]:
        """Only the update scene fields are checked / 仅校验 update 场景字段。"""
        v = prepare(await from_request(request, config=config), "update")
        err = v.validate_err()
        if err is not None:
            raise err
        return {"id": user_id, "changes": v.safe_data()}

    @app.post("/avatar")
    async def upload_avatar(request: Request) -> dict[str, Any]:
        """Upload an avatar image / 上传头像图片。"""
        v = await validate_request(request, {"avatar": "required|isImage:png,jpg,jpeg"}, config=config)
        if v.is_fail():
            raise v.errors.to_error()
        avatar, _ = v.safe("avatar")
        return {"filename": avatar.filename, "content_type": avatar.content_type}

    return app
