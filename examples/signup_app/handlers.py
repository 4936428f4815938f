"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: handlers.py
@DateTime: 2026-02-08
@Docs: Rules, messages and output models for the signup example.
注册示例的规则、消息与输出模型。
"""

from pydantic import BaseModel

from fastapi_data_validate import Validation

USER_RULES = {
    "name": "required|minLen:2|maxLen:20",
    "email": "required|email",
    "age": "required|isInt|between:18,120",
    "password": "required|strongPassword",
    "confirm": "required|eqField:password",
    "tags.*": "minLen:2",
}

USER_FILTERS = {
    "name": "trim",
    "email": "trim|lower",
}

USER_SCENES = {
    "create": ["name", "email", "age", "password", "confirm", "tags"],
    "update": ["name", "age"],
}

USER_LABELS = {
    "name": "Username",
    "confirm": "Password confirmation",
}

USER_MESSAGES = {
    "strongPassword": "{field} needs 8+ characters and a digit",
    "confirm.eqField": "passwords do not match",
}


class SignupIn(BaseModel):
    name: str
    email: str = ""
    age: int
    password: str = ""
    confirm: str = ""


def strong_password(value: str) -> bool:
    return len(value) >= 8 and any(ch.isdigit() for ch in value)


def prepare(v: Validation, scene: str) -> Validation:
    """Attach the user rules to a request session.
    为请求会话挂载用户规则。
    """
    return (
        v.add_validator("strongPassword", strong_password)
        .filter_rules(USER_FILTERS)
        .string_rules(USER_RULES)
        .with_scenes(USER_SCENES)
        .add_translates(USER_LABELS)
        .add_messages(USER_MESSAGES)
        .set_scene(scene)
    )
