import json
import os
from pathlib import Path

import yaml


def ensure_dir(file_path):
    """
    Check if a directory of the given file path exists, if not, create it.

    Args:
    file_path (str): The path of the file.

    Returns:
    dir_path (str): The directory path.
    """
    dir_path = os.path.dirname(str(file_path))
    if dir_path and not os.path.exists(dir_path):
        os.makedirs(dir_path)
    return dir_path


def from_json_or_yaml(filepath):
    """
    Load configuration from a JSON or YAML file based on the file extension.

    Args:
        filepath (str): The path to the configuration file.

    Returns:
        dict: The configuration dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is not supported.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix == ".json":
            return json.load(f)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(f) or {}
    raise ValueError(f"Unsupported configuration file format: {suffix}")


def load_messages(filepath):
    """
    Read protocol messages from a JSON array, a single JSON object or JSON Lines.

    Blank lines are skipped; a JSON Lines file must hold one message per line.
    """
    text = Path(filepath).read_text(encoding="utf-8")
    stripped = text.strip()
    if not stripped:
        return []
    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError:
        return [json.loads(line) for line in stripped.splitlines() if line.strip()]
    if isinstance(payload, list):
        return payload
    return [payload]
