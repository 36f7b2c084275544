"""Tests for src.backup.config covering CLI parsing and settings resolution.

Run with coverage:
    pytest tests/test_backup_config.py --maxfail=1 -v --cov=src.backup.config --cov-report=term-missing
"""

from pathlib import Path

from src.backup import config
from src.backup.config import SyncMode


def test_defaults_when_no_arguments():
    args = config.parse_args([])
    assert args.mirror is False
    assert args.backup_dir == config.DEFAULT_BACKUP_DIR
    assert args.username == config.DEFAULT_USER


def test_mirror_flag_before_positionals(tmp_path):
    args = config.parse_args(["--mirror", str(tmp_path), "octocat"])
    settings = config.resolve_settings(args)
    assert settings.mode is SyncMode.MIRROR
    assert settings.backup_dir == tmp_path.resolve()
    assert settings.username == "octocat"


def test_regular_mode_and_home_expansion(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = config.resolve_settings(config.parse_args(["~/backups"]))
    assert settings.mode is SyncMode.REGULAR
    assert settings.backup_dir == (tmp_path / "backups").resolve()
    assert settings.username == config.DEFAULT_USER


def test_token_comes_from_discovery_config(monkeypatch):
    monkeypatch.setattr(config, "GITHUB_TOKEN", "t0ken")
    settings = config.resolve_settings(config.parse_args(["/tmp/x", "someone"]))
    assert settings.token == "t0ken"
    assert settings.backup_dir == Path("/tmp/x").resolve()
