"""
Here we put util functions related to config and logging for the a2ui_surface commands.
"""

from pathlib import Path
import importlib.resources as importlib_resources


def get_package_root():
    """
    Determines the root path of the 'a2ui_surface' project (the directory holding 'configs/').
    """
    package_path = Path(importlib_resources.files("a2ui_surface"))
    package_root = package_path.parents[1]
    return package_root.resolve()


def get_log_dir():
    """
    Determines a suitable path for the log file.
    Logs are stored in the user's home directory under '.a2ui_surface/logs/'.
    """
    home_dir = Path.home()
    log_dir = home_dir / '.a2ui_surface' / 'logs'  # Log saved to `~/.a2ui_surface/logs/`
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
