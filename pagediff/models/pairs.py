"""URL pair input records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError


class UrlPair(BaseModel):
    """One live/dev comparison unit."""

    model_config = ConfigDict(frozen=True)

    live: str
    dev: str
    dev_browser: Optional[str] = None


def load_pairs(path: str | Path) -> list[UrlPair]:
    """Read the ordered list of URL pairs from a JSON array file.

    Raises FileNotFoundError when the file is missing and ValueError when the
    document is not valid JSON, is not an array, or holds a malformed entry.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"URLs file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of URL pairs in {path}")

    pairs = []
    for i, entry in enumerate(data):
        try:
            pairs.append(UrlPair.model_validate(entry))
        except ValidationError as e:
            raise ValueError(f"Invalid URL pair at position {i} in {path}: {e}") from e
    return pairs
