# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Mapping
from datetime import datetime
import inspect
import logging
import logging.handlers
import os
from pathlib import Path
import sys
import tempfile
from typing import Any

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

from rrtplan.constants import ENV_PREFIX, RRTPLAN_LOG_DIR, RRTPLAN_PROJECT_ROOT

_LOG_FILE_PATH: Path | None = None

_CONSOLE_PATH_WIDTH = 30

# Keys added by structlog/stdlib plumbing that are noise on the console
_CONSOLE_HIDDEN_KEYS = (
    "func_name",
    "lineno",
    "exception",
    "exc_info",
    "_record",
    "_from_structlog",
)


def _get_log_directory() -> Path:
    if (RRTPLAN_PROJECT_ROOT / ".git").exists():
        log_dir = RRTPLAN_LOG_DIR
    else:
        xdg_state_home = os.getenv("XDG_STATE_HOME")
        if xdg_state_home:
            log_dir = Path(xdg_state_home) / "rrtplan" / "logs"
        else:
            log_dir = Path.home() / ".local" / "state" / "rrtplan" / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except (PermissionError, OSError):
        log_dir = Path(tempfile.gettempdir()) / "rrtplan" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

    return log_dir


def _file_logging_enabled() -> bool:
    return os.getenv(f"{ENV_PREFIX}LOG_TO_FILE", "1").lower() not in ("0", "false", "no")


def _configure_structlog() -> Path:
    global _LOG_FILE_PATH

    if _LOG_FILE_PATH:
        return _LOG_FILE_PATH

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    _LOG_FILE_PATH = _get_log_directory() / f"rrtplan_{timestamp}_{os.getpid()}.jsonl"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return _LOG_FILE_PATH


def _compact_console_processor(logger: Any, method_name: str, event_dict: Mapping[str, Any]) -> str:
    """Format log lines as: HH:MM:SS.mmm [lvl][module.py          ] Event key=value ..."""
    event_dict = dict(event_dict)

    timestamp = event_dict.pop("timestamp", "")
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00")) if timestamp else None
        dt = dt or datetime.now()
        time_str = dt.strftime("%H:%M:%S") + f".{dt.microsecond // 1000:03d}"
    except (ValueError, AttributeError):
        time_str = str(timestamp)[:12]

    level_short = event_dict.pop("level", "???")[:3].lower()

    file_path = event_dict.pop("logger", "")
    if len(file_path) > _CONSOLE_PATH_WIDTH:
        file_path = file_path[-_CONSOLE_PATH_WIDTH:]

    event = event_dict.pop("event", "")
    for key in _CONSOLE_HIDDEN_KEYS:
        event_dict.pop(key, None)

    line = f"{time_str} [{level_short}][{file_path:<{_CONSOLE_PATH_WIDTH}s}] {event}"
    if event_dict:
        line += " " + " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()))
    return line


def setup_logger(*, level: int | None = None) -> Any:
    """Set up a structured logger named after the calling module.

    Console output uses a compact single-line format; unless
    ``RRTPLAN_LOG_TO_FILE=0`` is set, the same records are also written as
    JSON lines to a rotating file in the log directory.

    Args:
        level: The logging level. Defaults to ``RRTPLAN_LOG_LEVEL`` (INFO).

    Returns:
        A configured structlog logger instance.
    """
    name = inspect.stack()[1].filename
    try:
        name = str(Path(name).relative_to(RRTPLAN_PROJECT_ROOT))
    except (ValueError, TypeError):
        pass

    log_file_path = _configure_structlog()

    if level is None:
        level_name = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)

    stdlib_logger = logging.getLogger(name)
    if stdlib_logger.hasHandlers():
        stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_compact_console_processor)
    )
    stdlib_logger.addHandler(console_handler)

    if _file_logging_enabled():
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            mode="a",
            maxBytes=10 * 1024 * 1024,  # 10MiB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
        )
        stdlib_logger.addHandler(file_handler)

    return structlog.get_logger(name)
