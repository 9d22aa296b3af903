"""
PURPOSE: Manage version information for Signal Sync.

This module reads version data from version.json and exposes it through
a get_version() function. Version data is cached after the first read
to minimize file I/O operations.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

_version_cache: Optional[Dict[str, Any]] = None


def get_version() -> Dict[str, Any]:
    """
    PURPOSE: Retrieve version information for Signal Sync.

    Reads version.json from the repository root and caches the result
    in a module-level variable. Falls back to {"version": "unknown"} when
    the file is not shipped (e.g. a non-editable install).

    Returns:
        Dict[str, Any]: Version information including version string and codename.
    """
    global _version_cache

    if _version_cache is not None:
        return _version_cache

    version_file: Path = Path(__file__).parent.parent.parent / "version.json"

    try:
        with open(version_file, "r") as f:
            _version_cache = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        _version_cache = {"version": "unknown"}

    return _version_cache
