"""Shared test fixtures for gen-mode."""

import importlib.util
import json
import uuid

import pytest
from gen_mode.config import reset_settings


@pytest.fixture(autouse=True)
def _reset_environment(monkeypatch):
    """Reset global settings and clear variables read by generator and generated code."""
    for name in (
        "MODE",
        "GEN_MODE_PACKAGE",
        "GEN_MODE_TARGET",
        "GEN_MODE_ENV_VAR",
        "GEN_MODE_LOG_LEVEL",
        "GEN_MODE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def write_descriptor(tmp_path):
    """Return a helper writing a descriptor document and returning its path."""

    def _write(document, name="modes.json"):
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document)
        else:
            path.write_text(json.dumps(document))
        return path

    return _write


@pytest.fixture
def dev_prod():
    """The dev/prod descriptor with dev as the default."""
    return {"data": [{"value": "dev", "default": True}, {"value": "prod"}]}


@pytest.fixture
def load_generated():
    """Return a helper importing a generated Python file under a unique name."""

    def _load(path):
        spec = importlib.util.spec_from_file_location(f"generated_{uuid.uuid4().hex}", path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    return _load


@pytest.fixture
def hooks_module(tmp_path, monkeypatch):
    """Create an importable hooks module recording every call.

    Returns the module name; the module exposes ``CALLS`` and ``enter``.
    """
    name = f"mode_hooks_{uuid.uuid4().hex[:8]}"
    (tmp_path / f"{name}.py").write_text(
        "CALLS = []\n\n\ndef enter(value):\n    CALLS.append(value)\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    return name
