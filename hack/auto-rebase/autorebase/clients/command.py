import logging
import subprocess
from pathlib import Path

from autorebase.errors import CollaboratorError

logger = logging.getLogger(__name__)


def run_command(cmd: list[str], cwd: str | Path | None = None) -> str:
    result = subprocess.run(cmd, cwd=cwd, check=False, capture_output=True, text=True)
    if result.returncode != 0:
        logger.error(f"{' '.join(cmd)} failed with code {result.returncode}: {result.stderr.strip()}")
        raise CollaboratorError(f"{cmd[0]} {cmd[1]} failed with code {result.returncode}")
    return result.stdout
