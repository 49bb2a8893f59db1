import logging
import os
from typing import override

from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger


class LastRebaseService(Service):
    """Writes the script replaying the most recent rebase."""

    def __init__(self, release_image_amd64: str, release_image_arm64: str, script_path: str, entry_point: str):
        self.release_image_amd64: str = release_image_amd64
        self.release_image_arm64: str = release_image_arm64
        self.script_path: str = script_path
        self.entry_point: str = entry_point
        self.logger: logging.Logger = setup_logger("LastRebaseService")

    @override
    def run(self) -> None:
        with open(self.script_path, "w") as f:
            f.write("#!/bin/bash -x\n")
            f.write(f'{self.entry_point} to "{self.release_image_amd64}" "{self.release_image_arm64}"\n')
        os.chmod(self.script_path, 0o755)
        self.logger.info(f"Updated {self.script_path}")
