"""
Runtime settings for the mind map tool.

Defaults can be overridden with MINDMAP_* environment variables, and the
CLI flags override both.
"""

import logging
import os

from pydantic import BaseModel, field_validator

from .core.mindmap import DEFAULT_ROOT_TEXT


class Settings(BaseModel):
    """Settings shared by the command shell and the HTTP server."""
    root_text: str = DEFAULT_ROOT_TEXT
    svg_path: str = "mindmap.svg"
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Normalize to an upper-case level name logging knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Build settings from MINDMAP_* environment variables.

        Keyword overrides that are not None take precedence.
        """
        values = {
            "root_text": os.environ.get("MINDMAP_ROOT_TEXT"),
            "svg_path": os.environ.get("MINDMAP_SVG_PATH"),
            "host": os.environ.get("MINDMAP_HOST"),
            "port": os.environ.get("MINDMAP_PORT"),
            "log_level": os.environ.get("MINDMAP_LOG_LEVEL"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        # pydantic coerces the port string to int
        return cls(**{k: v for k, v in values.items() if v is not None})
