"""
Tests for CLI commands — detect, compile, release and global options.
"""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from jre_buildpack.main import cli


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("MEMORY_LIMIT", "JBP_CONFIG_IBMJDK", "BP_LOG_LEVEL", "BP_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path, configuration: dict) -> Path:
    path = tmp_path / "ibmjdk.yml"
    path.write_text(yaml.safe_dump(configuration))
    return path


def _invoke(config_file: Path, tmp_path: Path, *args: str, env: dict | None = None):
    runner = CliRunner()
    base = ["--config", str(config_file), "--cache-dir", str(tmp_path / "cache")]
    return runner.invoke(cli, [*base, *args], env=env)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "IBM JRE buildpack" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestDetectCommand:
    def test_prints_identifier(self, config_file: Path, tmp_path: Path, app_dir: Path):
        result = _invoke(config_file, tmp_path, "detect", str(app_dir))
        assert result.exit_code == 0
        assert result.output.strip() == "ibmjdk-1.7.1"

    def test_current_directory(
        self, config_file: Path, tmp_path: Path, app_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.chdir(app_dir)
        result = _invoke(config_file, tmp_path, "detect", ".")
        assert result.exit_code == 0
        assert result.output.strip() == "ibmjdk-1.7.1"

    def test_unresolvable_version(self, tmp_path: Path, app_dir: Path, configuration: dict):
        configuration["version"] = "9.+"
        path = tmp_path / "bad.yml"
        path.write_text(yaml.safe_dump(configuration))
        result = _invoke(path, tmp_path, "detect", str(app_dir))
        assert result.exit_code == 1
        assert "IBM JRE error" in result.output

    def test_missing_config(self, tmp_path: Path, app_dir: Path):
        result = _invoke(tmp_path / "missing.yml", tmp_path, "detect", str(app_dir))
        assert result.exit_code == 1
        assert "not found" in result.output


class TestCompileAndRelease:
    def test_round_trip(self, config_file: Path, tmp_path: Path, app_dir: Path):
        result = _invoke(config_file, tmp_path, "compile", str(app_dir))
        assert result.exit_code == 0, result.output
        assert "Downloading IBM 1.7.1 JRE" in result.output
        assert (app_dir / ".java" / "bin" / "java").is_file()

        result = _invoke(config_file, tmp_path, "release", str(app_dir), env={"MEMORY_LIMIT": "1G"})
        assert result.exit_code == 0, result.output
        released = yaml.safe_load(result.output)
        assert released["java_home"] == ".java"
        assert released["java_opts"] == [
            "-XX:OnOutOfMemoryError=./.buildpack-diagnostics/killjava",
            "-Xtune:virtualized",
            "-Xmx768M",
        ]

    def test_release_json(self, config_file: Path, tmp_path: Path, app_dir: Path):
        _invoke(config_file, tmp_path, "compile", str(app_dir))
        result = _invoke(config_file, tmp_path, "release", "--json", str(app_dir))
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["java_opts"][-2:] == ["-Xnocompressedrefs", "-Xtune:virtualized"]

    def test_release_before_compile(self, config_file: Path, tmp_path: Path, app_dir: Path):
        result = _invoke(config_file, tmp_path, "release", str(app_dir))
        assert result.exit_code == 1
        assert "has not been compiled" in result.output

    def test_release_bad_memory_limit(self, config_file: Path, tmp_path: Path, app_dir: Path):
        _invoke(config_file, tmp_path, "compile", str(app_dir))
        result = _invoke(config_file, tmp_path, "release", str(app_dir), env={"MEMORY_LIMIT": "-1G"})
        assert result.exit_code == 1

    def test_quiet_compile(self, config_file: Path, tmp_path: Path, app_dir: Path):
        result = _invoke(config_file, tmp_path, "--quiet", "compile", str(app_dir))
        assert result.exit_code == 0
        assert result.output == ""
