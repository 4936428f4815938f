"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_config.py
@DateTime: 2026-02-08
@Docs: Tests for config.py module.
config.py 模块测试。
"""

import os
from unittest.mock import patch

import pytest

from fastapi_data_validate.config import (
    DEFAULT_MAX_FILES,
    ValidateConfig,
    _env_get,
    _parse_bool,
    _parse_int,
    configure,
    get_global_config,
    reset_global_config,
    resolve_config,
)


class TestEnvGet:
    """Tests for _env_get helper.
    _env_get 辅助函数测试。
    """

    def test_returns_first_nonempty(self) -> None:
        """Return first non-empty env var / 返回第一个非空环境变量。"""
        with patch.dict(os.environ, {"A": "", "B": "hello"}):
            assert _env_get("A", "B") == "hello"

    def test_returns_none_when_all_empty(self) -> None:
        """Return None when all candidates are empty / 所有候选为空时返回 None。"""
        with patch.dict(os.environ, {}, clear=True):
            assert _env_get("NONEXISTENT_1", "NONEXISTENT_2") is None

    def test_strips_whitespace(self) -> None:
        with patch.dict(os.environ, {"X": "  val  "}):
            assert _env_get("X") == "val"


class TestParsers:
    """Tests for text switch parsers.
    文本开关解析器测试。
    """

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("YES", True), ("off", False), ("maybe", None)])
    def test_parse_bool(self, raw: str, expected: bool | None) -> None:
        assert _parse_bool(raw) is expected

    def test_parse_int(self) -> None:
        assert _parse_int("20") == 20
        assert _parse_int("0") is None
        assert _parse_int("x") is None
        assert _parse_int(None) is None


class TestResolveConfig:
    """Tests for resolve_config.
    resolve_config 测试。
    """

    def test_defaults(self) -> None:
        """Defaults apply without env / 无环境变量时使用默认值。"""
        with patch.dict(os.environ, {}, clear=True):
            cfg = resolve_config()
        assert cfg == ValidateConfig()
        assert cfg.stop_on_error is True
        assert cfg.skip_on_empty is True
        assert cfg.update_source is True
        assert cfg.check_default is False
        assert cfg.max_files == DEFAULT_MAX_FILES

    def test_env_overrides(self) -> None:
        env = {
            "DATA_VALIDATE_STOP_ON_ERROR": "false",
            "DATA_VALIDATE_CHECK_DEFAULT": "1",
            "DATA_VALIDATE_VALIDATE_TAG": "v",
            "DATA_VALIDATE_MAX_FIELDS": "50",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = resolve_config()
        assert cfg.stop_on_error is False
        assert cfg.check_default is True
        assert cfg.validate_tag == "v"
        assert cfg.max_fields == 50

    def test_params_beat_env(self) -> None:
        """Parameters take priority over env / 参数优先于环境变量。"""
        with patch.dict(os.environ, {"DATA_VALIDATE_STOP_ON_ERROR": "false"}):
            assert resolve_config(stop_on_error=True).stop_on_error is True

    def test_invalid_env_falls_back(self) -> None:
        with patch.dict(os.environ, {"DATA_VALIDATE_SKIP_ON_EMPTY": "maybe", "DATA_VALIDATE_MAX_FILES": "-3"}):
            cfg = resolve_config()
        assert cfg.skip_on_empty is True
        assert cfg.max_files == DEFAULT_MAX_FILES

    def test_custom_prefix(self) -> None:
        with patch.dict(os.environ, {"APP_UPDATE_SOURCE": "no"}):
            assert resolve_config(env_prefix="APP").update_source is False


class TestGlobalConfig:
    """Tests for the process-wide default config.
    进程级默认配置测试。
    """

    def test_configure_updates_fields(self) -> None:
        cfg = configure(stop_on_error=False, wildcard_flatten_depth=1)
        assert cfg is get_global_config()
        assert cfg.stop_on_error is False
        assert cfg.wildcard_flatten_depth == 1
        assert cfg.skip_on_empty is True

    def test_configure_rejects_unknown_field(self) -> None:
        with pytest.raises(TypeError):
            configure(no_such_option=True)

    def test_reset(self) -> None:
        configure(check_default=True)
        reset_global_config()
        assert get_global_config() == ValidateConfig()

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            get_global_config().stop_on_error = False  # type: ignore[misc]
