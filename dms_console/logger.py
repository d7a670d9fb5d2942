from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from dms_console.app_paths import get_app_data_dir

LOG_DIR = get_app_data_dir() / "logs"

_file_sink_id: Optional[int] = None


def configure_logging(level: str = "DEBUG", log_dir: Optional[Path] = None) -> int:
    """(Re)install the console's daily log file sink at ``level``.

    Only the sink added here is replaced; handlers added elsewhere are left alone.
    """
    global _file_sink_id
    target = Path(log_dir) if log_dir is not None else LOG_DIR
    target.mkdir(parents=True, exist_ok=True)
    if _file_sink_id is not None:
        logger.remove(_file_sink_id)
    _file_sink_id = logger.add(
        target / "{time:YYYY-MM-DD}.log",
        rotation="12:00",
        retention="7 days",
        enqueue=True,
        level=level.upper(),
    )
    return _file_sink_id


configure_logging()
