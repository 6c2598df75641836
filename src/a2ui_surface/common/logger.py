# logger.py
import logging
import logging.config
from collections.abc import Mapping
from copy import deepcopy

from a2ui_surface.util.file_utils import ensure_dir, from_json_or_yaml

PACKAGE_LOGGER = "a2ui_surface"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    config_file_path=None,
    log_file_path=None,
    verbose=False,
):
    """
    Configure logging for the a2ui_surface package and its commands.

    'config_file_path' may be a YAML/JSON file or an already loaded dictConfig
    mapping. When 'log_file_path' is given it replaces the filename of the
    'file_handler' entry, and its directory is created. Without a config,
    a single stderr handler at WARNING level is installed.
    'verbose' raises the root logger to DEBUG.
    """
    if config_file_path is None:
        logging.basicConfig(level=logging.WARNING, format=DEFAULT_FORMAT)
    else:
        if isinstance(config_file_path, Mapping):
            config = deepcopy(dict(config_file_path))
        else:
            config = from_json_or_yaml(config_file_path)

        file_handler = config.get("handlers", {}).get("file_handler")
        if log_file_path and file_handler is not None:
            file_handler["filename"] = str(log_file_path)
        if file_handler is not None and file_handler.get("filename"):
            ensure_dir(file_handler["filename"])

        logging.config.dictConfig(config)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    return logging.getLogger(PACKAGE_LOGGER)
