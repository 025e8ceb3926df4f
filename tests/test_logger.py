# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

import logging
import os
import subprocess
import sys

import pytest

from dmquery.utils import get_logger
from dmquery.utils import logger as logger_module


@pytest.fixture
def fresh_root(monkeypatch):
    """Let the package logger be configured again, then restore it."""
    root = logging.getLogger("dmquery")
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(logger_module, "_configured", False)
    root.handlers = []
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_loggers_live_under_package_namespace():
    assert get_logger("dmquery.resources.sync").name == "dmquery.resources.sync"
    assert get_logger("custom").name == "dmquery.custom"


def test_package_logger_has_a_handler():
    get_logger("anything")
    assert logging.getLogger("dmquery").handlers


@pytest.mark.parametrize(
    "value, expected",
    [("debug", logging.DEBUG), ("INFO", logging.INFO), ("10", 10), (" warning ", logging.WARNING)],
)
def test_resolve_level(value, expected):
    assert logger_module.resolve_level(value) == expected


def test_resolve_level_unknown():
    assert logger_module.resolve_level("verbose") is None


@pytest.mark.parametrize("value, expected", [("debug", logging.DEBUG), ("10", 10), ("verbose", logging.WARNING)])
def test_env_level_never_breaks_configuration(fresh_root, monkeypatch, value, expected):
    monkeypatch.setenv("DMQUERY_LOG_LEVEL", value)
    get_logger("anything")
    assert fresh_root.level == expected
    assert any(isinstance(h, logging.StreamHandler) for h in fresh_root.handlers)


def test_no_env_level_installs_null_handler(fresh_root, monkeypatch):
    monkeypatch.delenv("DMQUERY_LOG_LEVEL", raising=False)
    get_logger("anything")
    assert [type(h) for h in fresh_root.handlers] == [logging.NullHandler]


@pytest.mark.parametrize("value", ["verbose", "10"])
def test_import_succeeds_with_odd_env_level(value):
    env = dict(os.environ, DMQUERY_LOG_LEVEL=value)
    result = subprocess.run(
        [sys.executable, "-c", "import dmquery"], env=env, capture_output=True, text=True
    )
    assert result.returncode == 0, result.stderr
