import os
import sys
from pathlib import Path

APP_NAME = "dms-console"


def get_app_data_dir() -> Path:
    """
    Returns the application data directory for the current operating system.
    Creates the directory if it doesn't exist.
    """
    if sys.platform == "win32":
        path = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    elif sys.platform == "darwin":
        path = Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        # Linux and other Unix-like systems
        path = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")) / APP_NAME

    path.mkdir(parents=True, exist_ok=True)
    return path
