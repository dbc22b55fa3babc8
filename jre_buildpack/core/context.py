"""
Staging context — what the platform hands to a JRE component.

One context per staging run.  The component appends to ``java_opts`` and
``java_home`` in place; it never rebinds them, so the caller keeps seeing
the same list it passed in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class StagingContext:
    """Application directory, launch options, configuration and JAVA_HOME slot."""

    app_dir: Path
    java_opts: list[str] = field(default_factory=list)
    configuration: dict[str, Any] = field(default_factory=dict)
    java_home: str = ""

    def __post_init__(self) -> None:
        if not str(self.app_dir) or Path(self.app_dir) == Path(""):
            raise ValueError("app_dir must not be empty")
        self.app_dir = Path(self.app_dir)
