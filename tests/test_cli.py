"""Tests for the command line front end."""

import io

import pytest
from rich.console import Console
from rich.progress import Progress

from conftest import LINUX_X64, install_fake_version
from nodeman.cli.main import DownloadProgress, build_parser, run


@pytest.fixture(autouse=True)
def linux(monkeypatch):
    monkeypatch.setattr("nodeman.versions.manager.detect_platform", lambda: LINUX_X64)


def test_no_command_prints_help(config, capsys):
    assert run([], config=config, configure_logging=False) == 2
    assert "install" in capsys.readouterr().out


def test_install_requires_version_or_lts():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["install"])
    with pytest.raises(SystemExit):
        build_parser().parse_args(["install", "20.0.0", "--lts"])


def test_list_marks_active(config, capsys):
    install_fake_version(config, "9.0.0")
    install_fake_version(config, "18.0.0")
    config.marker_path.write_text("18.0.0")

    assert run(["list"], config=config, configure_logging=False) == 0
    assert capsys.readouterr().out.splitlines() == ["* 18.0.0", "  9.0.0"]


def test_install_and_use(config, dist, monkeypatch, capsys):
    monkeypatch.setenv("PATH", "/usr/bin")
    dist.add_release("21.0.0")
    dist.add_release("20.11.0", lts="Iron")

    assert run(["install", "--lts"], config=config, configure_logging=False) == 0
    assert run(["use", "20.11.0"], config=config, configure_logging=False) == 0
    assert run(["current"], config=config, configure_logging=False) == 0
    assert capsys.readouterr().out.strip() == "20.11.0"


def test_ls_remote(config, dist, capsys):
    dist.add_release("20.11.0", lts="Iron")
    assert run(["ls-remote"], config=config, configure_logging=False) == 0
    assert capsys.readouterr().out.split() == ["20.11.0", "2024-01-09", "Iron"]


def test_ls_remote_failure(config, dist):
    dist.index_override = b"not json"
    assert run(["ls-remote"], config=config, configure_logging=False) == 1


def test_uninstall_missing_fails(config):
    assert run(["uninstall", "18.0.0"], config=config, configure_logging=False) == 1


@pytest.mark.asyncio
async def test_download_progress_tracks_each_file():
    progress = Progress(console=Console(file=io.StringIO()))
    reporter = DownloadProgress(progress)

    await reporter("node.tar.gz", 100, 400)
    await reporter("node.tar.gz", 400, 400)
    await reporter("SHASUMS256.txt", 50, 0)

    first, second = progress.tasks
    assert (first.description, first.completed, first.total) == ("node.tar.gz", 400, 400)
    assert (second.description, second.completed, second.total) == ("SHASUMS256.txt", 50, None)
