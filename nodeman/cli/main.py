"""Command line front end for the version manager."""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn, DownloadColumn, Progress, TaskID, TextColumn, TransferSpeedColumn,
)

from ..config import ManagerConfig
from ..runtime.environment import binary_dir
from ..utils import setup_logging
from ..versions import OperationResult, VersionManager
from ..versions.models import version_key

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nodeman", description="Manage installed Node.js versions.")
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    commands.add_parser("list", help="List installed versions")
    commands.add_parser("ls-remote", help="List versions available for download")
    commands.add_parser("current", help="Show the active version")

    install = commands.add_parser("install", help="Install a version")
    target = install.add_mutually_exclusive_group(required=True)
    target.add_argument("version", nargs="?", help="Version to install, e.g. 20.11.0")
    target.add_argument("--lts", action="store_true", help="Install the latest LTS release")

    use = commands.add_parser("use", help="Activate an installed version")
    use.add_argument("version")

    uninstall = commands.add_parser("uninstall", help="Remove an installed version")
    uninstall.add_argument("version")
    return parser


class DownloadProgress:
    """Feeds download callbacks into a rich progress bar, one task per file."""

    def __init__(self, progress: Progress):
        self.progress = progress
        self.tasks: Dict[str, TaskID] = {}

    async def __call__(self, name: str, downloaded: int, total: int):
        if name not in self.tasks:
            self.tasks[name] = self.progress.add_task(name, total=total or None)
        self.progress.update(self.tasks[name], completed=downloaded, total=total or None)


def download_progress() -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        BarColumn(bar_width=None),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=Console(stderr=True),
        transient=True,
    )


def _exit_code(result: OperationResult) -> int:
    return 0 if result.ok else 1


async def dispatch(args: argparse.Namespace, manager: VersionManager) -> int:
    if args.command == "list":
        active = manager.current()
        for version in sorted(manager.list_installed(), key=version_key, reverse=True):
            marker = "*" if version == active else " "
            print(f"{marker} {version}")
        return 0

    if args.command == "ls-remote":
        releases = await manager.list_remote()
        if not releases:
            logger.error("Could not determine available versions")
            return 1
        for release in releases:
            date = release.date.isoformat() if release.date else ""
            print(f"{release.version:<12} {date:<11} {release.lts or ''}".rstrip())
        return 0

    if args.command == "current":
        active = manager.current()
        if active is None:
            logger.info("No active version")
            return 1
        print(active)
        return 0

    if args.command == "install":
        with download_progress() as progress:
            result = await manager.install(args.version, use_lts=args.lts,
                                           progress_callback=DownloadProgress(progress))
        return _exit_code(result)

    if args.command == "use":
        result = manager.use(args.version)
        if result.ok:
            bin_dir = binary_dir(manager.store.version_dir(result.version), manager.platform)
            logger.info("Add %s to PATH in your shell to use it outside nodeman", bin_dir)
        return _exit_code(result)

    if args.command == "uninstall":
        return _exit_code(manager.uninstall(args.version))

    raise ValueError(f"Unknown command {args.command!r}")


def run(argv: Optional[List[str]] = None, config: Optional[ManagerConfig] = None,
        configure_logging: bool = True) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 2

    if configure_logging:
        setup_logging()
    manager = VersionManager(config or ManagerConfig.from_env())
    return asyncio.run(dispatch(args, manager))


def main():
    sys.exit(run())
