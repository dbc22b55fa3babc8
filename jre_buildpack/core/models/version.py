"""
Tokenized version — dotted JRE version identifiers with an optional qualifier.

Grammar::

    major[.minor[.micro]][_qualifier]

Any numeric token may be the wildcard ``+`` when it is the last token, so
``1.7.+`` or ``+`` select "the highest available".  Qualifiers sort using
the collating sequence ``- . 0-9 A-Z _ a-z``; a missing qualifier sorts
before any present one.
"""

from __future__ import annotations

import functools
import re
import string

from jre_buildpack.core.errors import VersionError

WILDCARD = "+"

_COLLATING_SEQUENCE = "-." + string.digits + string.ascii_uppercase + "_" + string.ascii_lowercase

_QUALIFIER_RE = re.compile(r"^[-.a-zA-Z\d]*$")


@functools.total_ordering
class TokenizedVersion:
    """A parsed version: ``major``, ``minor``, ``micro`` and ``qualifier`` tokens.

    Missing tokens are ``None``.  ``str()`` returns the original text.
    """

    __slots__ = ("_text", "major", "minor", "micro", "qualifier")

    def __init__(self, version: str | None, allow_wildcards: bool = True) -> None:
        if version is None and allow_wildcards:
            version = WILDCARD
        if not isinstance(version, str) or not version:
            raise VersionError(f"Invalid version '{version}': must not be empty")

        self._text = version
        self.major, tail = self._major_or_minor_and_tail(version)
        self.minor, tail = self._major_or_minor_and_tail(tail)
        self.micro, self.qualifier = self._micro_and_qualifier(tail)
        self._validate(allow_wildcards)

    # ── parsing ─────────────────────────────────────────────────

    def _major_or_minor_and_tail(self, text: str | None) -> tuple[str | None, str | None]:
        if text is None:
            return None, None
        if text.endswith("."):
            raise VersionError(f"Invalid version '{self._text}': must not end in '.'")
        head, sep, tail = text.partition(".")
        if not head:
            raise VersionError(f"Invalid version '{self._text}': empty component")
        return head, (tail if sep else None)

    def _micro_and_qualifier(self, text: str | None) -> tuple[str | None, str | None]:
        if text is None:
            return None, None
        if text.endswith("_"):
            raise VersionError(f"Invalid version '{self._text}': qualifier must not be empty")
        head, sep, tail = text.partition("_")
        if not head:
            raise VersionError(f"Invalid version '{self._text}': empty component")
        return head, (tail if sep else None)

    def _validate(self, allow_wildcards: bool) -> None:
        tokens = self.tokens()
        wildcards = [i for i, t in enumerate(tokens) if t == WILDCARD]

        if wildcards and not allow_wildcards:
            raise VersionError(f"Invalid version '{self._text}': wildcards are not allowed in this context")
        if len(wildcards) > 1:
            raise VersionError(f"Invalid version '{self._text}': must not contain more than one wildcard")
        if wildcards:
            last = max(i for i, t in enumerate(tokens) if t is not None)
            if wildcards[0] != last:
                raise VersionError(f"Invalid version '{self._text}': a wildcard must be the last token")

        for name, token in (("major", self.major), ("minor", self.minor), ("micro", self.micro)):
            if token is not None and token != WILDCARD and not token.isdigit():
                raise VersionError(f"Invalid version '{self._text}': {name} version must be numeric")

        if self.qualifier is not None and self.qualifier != WILDCARD:
            if not _QUALIFIER_RE.match(self.qualifier):
                raise VersionError(
                    f"Invalid version '{self._text}': qualifier must be composed of "
                    "alphanumerics, '.' and '-'"
                )

    # ── accessors ───────────────────────────────────────────────

    def tokens(self) -> tuple[str | None, str | None, str | None, str | None]:
        return (self.major, self.minor, self.micro, self.qualifier)

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.tokens()

    # ── ordering ────────────────────────────────────────────────

    def _sort_key(self) -> tuple:
        if self.has_wildcard:
            raise VersionError(f"Cannot compare wildcard version '{self._text}'")
        numeric = tuple(int(t) if t is not None else -1 for t in (self.major, self.minor, self.micro))
        qualifier = tuple(_COLLATING_SEQUENCE.index(c) for c in (self.qualifier or ""))
        return numeric + (qualifier,)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenizedVersion):
            return NotImplemented
        return self.tokens() == other.tokens()

    def __lt__(self, other: TokenizedVersion) -> bool:
        if not isinstance(other, TokenizedVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self.tokens())

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"TokenizedVersion({self._text!r})"
