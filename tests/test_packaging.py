"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_packaging.py
@DateTime: 2026-02-08
@Docs: Tests for packaging, __all__ exports, and pip-readiness.
打包、__all__ 导出与 pip 就绪性测试。
"""

import importlib
import tomllib
from pathlib import Path


class TestAllExports:
    """Tests for __all__ exports.
    __all__ 导出测试。
    """

    def test_every_name_importable(self) -> None:
        """Every name in __all__ can be successfully imported / __all__ 中每个名字都能成功导入。"""
        import fastapi_data_validate

        for name in fastapi_data_validate.__all__:
            obj = getattr(fastapi_data_validate, name, None)
            assert obj is not None, f"{name} is in __all__ but not importable / {name} 在 __all__ 中但无法导入"

    def test_import_does_not_error(self) -> None:
        """Importing the package doesn't raise / 导入包不报错。"""
        mod = importlib.import_module("fastapi_data_validate")
        assert mod is not None


class TestPyTyped:
    """Tests for py.typed marker.
    py.typed 标记文件测试。
    """

    def test_py_typed_exists(self) -> None:
        """py.typed marker file exists / py.typed 标记文件存在。"""
        pkg_dir = Path(__file__).parent.parent / "src" / "fastapi_data_validate"
        assert (pkg_dir / "py.typed").exists()


class TestExtrasKeys:
    """Tests for pyproject.toml extras.
    pyproject.toml extras 测试。
    """

    def test_extras_keys_present(self) -> None:
        """All expected extras keys exist / 所有预期的 extras 键存在。"""
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        extras = data.get("project", {}).get("optional-dependencies", {})
        assert "test" in extras, "extras key 'test' missing / extras 键 'test' 缺失"
