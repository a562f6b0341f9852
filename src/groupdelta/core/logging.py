# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Log output setup for processes embedding groupdelta.

Library modules only log through ``logging.getLogger(__name__)``. This
module installs the root handlers and renders the structured
``extra_data`` that :func:`groupdelta.groups.reconstruct` attaches to its
summary line (``from_revision``, ``to_revision``, ``changed_fields``).

Usage:
    from groupdelta.core.logging import configure_logging
    configure_logging("DEBUG", json_format=True)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .exceptions import ValidationException

# Attribute name used with ``logger.debug(..., extra={"extra_data": {...}})``
EXTRA_ATTR = "extra_data"


def _extra_of(record: logging.LogRecord) -> dict[str, Any] | None:
    data = getattr(record, EXTRA_ATTR, None)
    return data if isinstance(data, dict) and data else None


def _render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value) or "-"
    return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers.

    The record's ``extra_data`` mapping is nested under ``"extra"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = _extra_of(record)
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line human-readable output.

    ``extra_data`` is appended as ``key=value`` pairs, with sequences joined
    by commas, e.g.::

        2026-10-19 12:00:00 DEBUG groupdelta.groups.reconcile: Reconstructed ...
        [from_revision=7 to_revision=8 changed_fields=new_title,new_members]
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:  # noqa: N802
        text = super().formatMessage(record)
        extra = _extra_of(record)
        if extra:
            pairs = " ".join(f"{key}={_render_value(value)}" for key, value in extra.items())
            text = f"{text} [{pairs}]"
        return text


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValidationException(f"Unknown log level: {level}", field="log_level", value=level)
    return resolved


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Install groupdelta's handlers on the root logger.

    Arguments left as ``None`` fall back to the settings from
    :func:`groupdelta.core.config.get_config`. Existing root handlers are
    replaced. A log file, when given, always receives JSON.

    Args:
        level: Level name or number. Defaults to ``GROUPDELTA_LOG_LEVEL``.
        json_format: Console output as JSON. Defaults to
            ``GROUPDELTA_LOG_FORMAT``, or JSON when stderr is not a terminal.
        log_file: Extra JSON log file. Defaults to ``GROUPDELTA_LOG_FILE``.

    Raises:
        ValidationException: If the level name is not a logging level.
    """
    from .config import get_config

    config = get_config()

    numeric_level = _resolve_level(config.log_level if level is None else level)

    if json_format is None:
        fmt = config.log_format.lower()
        json_format = fmt == "json" if fmt in ("json", "text") else not sys.stderr.isatty()

    if log_file is None:
        log_file = config.log_file

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JSONFormatter() if json_format else TextFormatter())
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)
