"""
Compile receipt — proof that ``compile`` finished.

``release`` references the killjava script by relative path, so it takes a
receipt instead of trusting call order.  Receipts are produced by
``IBMJdk.compile()`` or rebuilt from disk by ``IBMJdk.receipt()``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class CompileReceipt(BaseModel):
    """Result of a successful ``compile`` phase."""

    version: str
    java_home: str
    killjava_path: str
    uri: str = ""

    completed_at: str = Field(default_factory=_now_iso)
    download_seconds: float = 0.0
    expand_seconds: float = 0.0
