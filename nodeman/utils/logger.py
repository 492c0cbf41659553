"""Logging setup."""

import logging
from pathlib import Path
from typing import Optional

FILE_HANDLER_NAME = "nodeman-file"
CONSOLE_HANDLER_NAME = "nodeman-console"


def setup_logging(log_dir: Optional[Path] = None) -> logging.Logger:
    """Attach the nodeman file and console handlers to the root logger once."""
    root = logging.getLogger()
    installed = {handler.get_name() for handler in root.handlers}
    if FILE_HANDLER_NAME in installed and CONSOLE_HANDLER_NAME in installed:
        return root

    log_dir = log_dir or (Path.home() / ".cache" / "nodeman")
    log_dir.mkdir(parents=True, exist_ok=True)
    root.setLevel(logging.DEBUG)

    if FILE_HANDLER_NAME not in installed:
        file_handler = logging.FileHandler(log_dir / "nodeman.log", encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root.addHandler(file_handler)

    if CONSOLE_HANDLER_NAME not in installed:
        # stdout carries command output, so diagnostics go to stderr
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        root.addHandler(console_handler)

    return root
