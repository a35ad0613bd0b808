import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 標記自己加的 handler，重複呼叫時只調整等級
HANDLER_PREFIX = "prephub."


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(log_dir: str = "logs", level: Optional[str] = None) -> None:
    """
    Console + rotating file ({log_dir}/app.log, 5 MB x 5).
    level: Settings.LOG_LEVEL, else the LOG_LEVEL env var, else INFO.
    """
    lvl = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(lvl)

    ours = [h for h in root.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]
    if ours:
        for h in ours:
            h.setLevel(lvl)
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.set_name(HANDLER_PREFIX + "console")

    file_handler = RotatingFileHandler(
        path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.set_name(HANDLER_PREFIX + "file")

    for h in (console, file_handler):
        h.setLevel(lvl)
        h.setFormatter(formatter)
        root.addHandler(h)
