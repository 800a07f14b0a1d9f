"""Persists padded renders and diff images for differing pairs."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactPaths:
    dev: str
    live: str
    diff: str


class ArtifactStore:
    """Writes per-pair images under the artifact directory.

    Names embed the 1-based pair number, so concurrent pairs never write the
    same file. The directory is only created once something is saved.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def save(self, number: int, dev: Image.Image, live: Image.Image,
             diff: Image.Image) -> ArtifactPaths:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        dev_path = self.output_dir / f"dev-{number}.png"
        live_path = self.output_dir / f"live-{number}.png"
        diff_path = self.output_dir / f"diff-{number}-{int(time.time() * 1000)}.png"

        dev.save(dev_path, format="PNG")
        live.save(live_path, format="PNG")
        diff.save(diff_path, format="PNG")
        logger.debug("  Saved artifacts: %s, %s, %s", dev_path, live_path, diff_path)
        return ArtifactPaths(dev=str(dev_path), live=str(live_path), diff=str(diff_path))
