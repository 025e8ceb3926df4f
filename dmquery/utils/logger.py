# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Logger helpers."""

import logging
import os
from typing import Optional

_ROOT_LOGGER_NAME = "dmquery"
_configured = False


def resolve_level(value: str) -> Optional[int]:
    """Map a level name (``debug``) or number (``10``) to a logging level.

    Returns ``None`` for anything logging does not know.
    """
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else None


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    _configured = True
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    # Library default: stay silent unless the application configures logging
    # or DMQUERY_LOG_LEVEL is set.
    value = os.environ.get("DMQUERY_LOG_LEVEL")
    if not value:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    level = resolve_level(value)
    if level is None:
        root.setLevel(logging.WARNING)
        root.warning("Unknown DMQUERY_LOG_LEVEL %r, using WARNING", value)
    else:
        root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    _configure_root()
    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
