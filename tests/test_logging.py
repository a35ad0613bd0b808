from __future__ import annotations

import logging

import pytest

import prephub.main  # noqa: F401  設定過一次 root logger
from prephub.logging_config import HANDLER_PREFIX, _resolve_level, setup_logging


def _ours():
    return [h for h in logging.getLogger().handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]


@pytest.fixture()
def restore_level():
    root = logging.getLogger()
    before = root.level
    yield
    setup_logging(level=logging.getLevelName(before))


def test_level_comes_from_argument(restore_level, tmp_path):
    setup_logging(str(tmp_path), "debug")

    assert logging.getLogger().level == logging.DEBUG
    assert {h.level for h in _ours()} == {logging.DEBUG}


def test_repeated_setup_does_not_duplicate_handlers(restore_level, tmp_path):
    setup_logging(str(tmp_path), "INFO")
    setup_logging(str(tmp_path), "WARNING")

    assert len(_ours()) == 2


def test_level_falls_back_to_env_then_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert _resolve_level(None) == logging.ERROR

    monkeypatch.delenv("LOG_LEVEL")
    assert _resolve_level(None) == logging.INFO
    assert _resolve_level("nonsense") == logging.INFO
