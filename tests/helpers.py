"""
Test helpers — build JRE-shaped tarballs.
"""

import io
import tarfile
from pathlib import Path

JRE_TOP_DIR = "ibm-java-x86_64-71"


def build_jre_tarball(path: Path, files: dict[str, str], top_dir: str = JRE_TOP_DIR) -> Path:
    """Write a .tgz whose entries all live under ``top_dir/``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        dir_info = tarfile.TarInfo(name=top_dir)
        dir_info.type = tarfile.DIRTYPE
        dir_info.mode = 0o755
        tar.addfile(dir_info)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name=f"{top_dir}/{name}")
            info.size = len(data)
            info.mode = 0o755 if name.startswith("bin/") else 0o644
            tar.addfile(info, io.BytesIO(data))
    return path
