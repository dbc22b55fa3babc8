"""
Archive expansion — unpack a JRE tarball into a directory.

Equivalent to ``tar xzf ARCHIVE -C DEST --strip-components N`` but done
with ``tarfile`` directly, so no paths are ever interpolated into a shell
command.  Entries that would land outside ``dest`` are rejected.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path, PurePosixPath

from jre_buildpack.core.errors import FilesystemError

logger = logging.getLogger(__name__)


def _strip(name: str, components: int) -> str | None:
    """Drop the first ``components`` path parts, or None if nothing remains.

    As with GNU tar, a ``.`` part counts as a component: ``./top/bin/java``
    stripped by one is ``top/bin/java``.  Empty parts from doubled or
    leading slashes do not count.
    """
    parts = [p for p in name.split("/") if p]
    if len(parts) <= components:
        return None
    return "/".join(parts[components:])


def _check_member_path(name: str, archive: Path) -> None:
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts:
        raise FilesystemError(
            f"Refusing to extract unsafe entry '{name}' from {archive}",
            path=str(archive),
        )


def expand_tarball(archive: Path, dest: Path, strip_components: int = 1) -> int:
    """Expand a (possibly compressed) tarball into ``dest``.

    Args:
        archive: Path to the tarball. Compression is auto-detected.
        dest: Target directory. Must already exist.
        strip_components: Leading path components to drop from each entry.

    Returns:
        Number of entries extracted.

    Raises:
        FilesystemError: If the archive is unreadable, contains unsafe
            paths, or extraction fails.
    """
    try:
        with tarfile.open(archive, "r:*") as tar:
            selected: list[tarfile.TarInfo] = []
            for member in tar.getmembers():
                stripped = _strip(member.name, strip_components)
                if stripped is None:
                    continue
                _check_member_path(stripped, archive)
                member.name = stripped

                if member.islnk():
                    target = _strip(member.linkname, strip_components)
                    if target is None:
                        raise FilesystemError(
                            f"Hard link '{member.name}' points outside the archive root",
                            path=str(archive),
                        )
                    _check_member_path(target, archive)
                    member.linkname = target

                selected.append(member)

            tar.extractall(path=dest, members=selected, filter="tar")
    except tarfile.TarError as e:
        raise FilesystemError(f"Cannot expand {archive}: {e}", path=str(archive)) from e
    except OSError as e:
        raise FilesystemError(f"Cannot expand {archive} into {dest}: {e}", path=str(dest)) from e

    logger.debug("Expanded %d entries from %s into %s", len(selected), archive, dest)
    return len(selected)
