"""
Shared test fixtures and configuration.

JRE artifacts are real tarballs built under ``tmp_path`` and served through
``file://`` URIs, so no test touches the network.
"""

from pathlib import Path

import pytest
import yaml

from jre_buildpack.core.context import StagingContext
from jre_buildpack.core.services.application_cache import ApplicationCache
from tests.helpers import build_jre_tarball


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """An application directory with one unrelated application file."""
    app = tmp_path / "app"
    app.mkdir()
    (app / "server.xml").write_text("<server/>")
    return app


@pytest.fixture
def cache(tmp_path: Path) -> ApplicationCache:
    return ApplicationCache(tmp_path / "cache")


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """A file:// repository with two JRE versions and an index.yml."""
    repo = tmp_path / "repo"
    old = build_jre_tarball(
        repo / "ibm-java-jre-7.0.tgz",
        {"bin/java": "#!/bin/sh\necho 1.7.0\n", "lib/rt.jar": "old", "lib/legacy.jar": "legacy"},
        top_dir="ibm-java-x86_64-70",
    )
    new = build_jre_tarball(
        repo / "ibm-java-jre-7.1.tgz",
        {"bin/java": "#!/bin/sh\necho 1.7.1\n", "lib/rt.jar": "new"},
    )
    index = {"1.7.0": old.as_uri(), "1.7.1": new.as_uri()}
    (repo / "index.yml").write_text(yaml.safe_dump(index))
    return repo


@pytest.fixture
def configuration(repository: Path) -> dict:
    return {
        "version": "1.7.+",
        "repository_root": repository.as_uri(),
        "memory_heuristics": {},
        "memory_sizes": {},
    }


@pytest.fixture
def context(app_dir: Path, configuration: dict) -> StagingContext:
    return StagingContext(app_dir=app_dir, java_opts=["-Dexisting=true"], configuration=configuration)
