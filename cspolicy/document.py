"""Load a directive mapping from a JSON/YAML file or a raw JSON string."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class PolicyDocumentError(ValueError):
    """Raised when a parsed document is not a directive -> value object."""


def load_document(source: str | os.PathLike) -> dict[str, Any]:
    """Parse ``source`` into a directive mapping.

    A string whose first non-blank character is ``{`` is parsed as JSON;
    anything else is treated as a file path. ``.yaml``/``.yml`` files are read
    with ``yaml.safe_load``, all other files as JSON. I/O and parser errors
    propagate unchanged.
    """
    if isinstance(source, str) and source.lstrip().startswith("{"):
        origin = "<string>"
        data = json.loads(source)
    else:
        path = Path(source)
        origin = str(path)
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in _YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

    if not isinstance(data, dict):
        raise PolicyDocumentError(
            f"Policy document must be an object, got {type(data).__name__}"
        )
    logger.debug("policy_document_loaded", source=origin, directives=len(data))
    return data
