"""
JRE configuration model — the shape of ``ibmjdk.yml``.

Validated with Pydantic; callers receive the plain mapping back via
``model_dump()`` so that collaborators keep working with a dict.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JreConfiguration(BaseModel):
    """Configuration for the IBM JRE.

    ``version`` may carry a wildcard (``1.7.+``).  ``repository_root`` is
    the base URI of a repository holding an ``index.yml``.
    """

    model_config = ConfigDict(extra="allow")

    version: str = "+"
    repository_root: str
    memory_heuristics: dict[str, Any] = Field(default_factory=dict)
    memory_sizes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_string(cls, value: Any) -> Any:
        # YAML reads ``version: 1.10`` as the float 1.1
        if isinstance(value, float):
            raise ValueError(
                f"version {value!r} was read as a number; quote it, e.g. version: '1.10'"
            )
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("repository_root")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("repository_root must not be empty")
        return value.rstrip("/")
