from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _requirement_names(requirements):
    return {requirement.split(">")[0].split("=")[0].split("<")[0].strip() for requirement in requirements}


def test_directly_imported_libraries_are_declared():
    project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]

    assert {"fastapi", "pydantic", "mangum", "starlette", "python-multipart"} <= _requirement_names(
        project["dependencies"]
    )
    assert "httpx" in _requirement_names(project["optional-dependencies"]["smoke"])
