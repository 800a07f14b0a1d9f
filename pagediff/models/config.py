"""Configuration models for the visual comparison run."""

from __future__ import annotations

import base64
import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "password"


class ViewportConfig(BaseModel):
    width: int = 1280
    height: int = 720


class BasicAuthConfig(BaseModel):
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD

    @classmethod
    def from_env(cls) -> "BasicAuthConfig":
        """Read BASIC_AUTH_USERNAME / BASIC_AUTH_PASSWORD, falling back to defaults."""
        return cls(
            username=os.environ.get("BASIC_AUTH_USERNAME") or DEFAULT_USERNAME,
            password=os.environ.get("BASIC_AUTH_PASSWORD") or DEFAULT_PASSWORD,
        )

    def header_value(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8"))
        return f"Basic {token.decode('ascii')}"


class CompareConfig(BaseModel):
    # Browser
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    auth: BasicAuthConfig = Field(default_factory=BasicAuthConfig.from_env)
    headless: bool = True
    navigation_timeout_ms: int = 30000

    # Animation freezing
    settle_delay_ms: int = 1000
    placeholder_url: str = "https://placehold.co/{width}x{height}"

    # Execution limits
    chunk_size: int = Field(default=10, ge=1)
    isolate_failures: bool = True

    # Comparison
    threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    diff_color: tuple[int, int, int] = (255, 0, 0)
    pad_fill: Literal["black", "transparent"] = "black"

    # Output
    output_dir: str = "diffs"

    @field_validator("diff_color")
    @classmethod
    def check_diff_color(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(c < 0 or c > 255 for c in v):
            raise ValueError(f"diff_color channels must be 0-255, got {v}")
        return v

    @property
    def pad_rgba(self) -> tuple[int, int, int, int]:
        return (0, 0, 0, 255) if self.pad_fill == "black" else (0, 0, 0, 0)

    @classmethod
    def load(cls, path: str | Path) -> "CompareConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
