"""Auto-detect the format of a request file."""

import json
from pathlib import Path

import yaml


def _is_postman(data) -> bool:
    if not isinstance(data, dict):
        return False
    info = data.get("info", {})
    if not isinstance(info, dict):
        return False
    return "_postman_id" in info or "getpostman.com" in str(info.get("schema", ""))


def detect_format(file_path: Path) -> str:
    """Detect the format of a request file.

    Returns: 'postman' or 'request'.
    """
    text = file_path.read_text(encoding="utf-8")

    try:
        if _is_postman(yaml.safe_load(text)):
            return "postman"
    except yaml.YAMLError:
        pass

    # JSON that YAML rejects (tabs, some escapes)
    try:
        if _is_postman(json.loads(text)):
            return "postman"
    except ValueError:
        pass

    return "request"
