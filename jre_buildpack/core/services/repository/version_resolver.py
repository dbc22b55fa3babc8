"""
Version resolution (pure).

Picks the highest available version that matches a candidate which may
contain a wildcard.  No I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from jre_buildpack.core.models.version import WILDCARD, TokenizedVersion


def _matches(candidate: TokenizedVersion, version: TokenizedVersion) -> bool:
    for wanted, actual in zip(candidate.tokens(), version.tokens()):
        if wanted == WILDCARD:
            return True
        if wanted != actual:
            return False
    return True


def resolve_version(
    candidate: str | TokenizedVersion | None,
    versions: Iterable[str],
) -> TokenizedVersion | None:
    """Return the highest of ``versions`` matching ``candidate``.

    ``None`` as the candidate means "any version".  Returns None when
    nothing matches.

    Examples::

        resolve_version("1.7.+", ["1.6.0", "1.7.0", "1.7.1"])   -> 1.7.1
        resolve_version("1.7.0", ["1.7.0", "1.7.1"])            -> 1.7.0
    """
    if not isinstance(candidate, TokenizedVersion):
        candidate = TokenizedVersion(candidate)

    matching = [
        v for v in (TokenizedVersion(str(raw), allow_wildcards=False) for raw in versions)
        if _matches(candidate, v)
    ]
    return max(matching) if matching else None
