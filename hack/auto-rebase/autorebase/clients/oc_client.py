import json
import logging
from pathlib import Path
from typing import Any

from autorebase.clients.command import run_command
from autorebase.errors import CollaboratorError

logger = logging.getLogger(__name__)


class OcClient:
    def release_info(self, release_image: str, pull_secret: str | Path | None = None) -> dict[str, Any]:
        cmd = ["oc", "adm", "release", "info"]
        if pull_secret:
            cmd += ["-a", str(pull_secret)]
        cmd += [release_image, "-o", "json"]
        logger.info(f"Fetching release info for {release_image}")
        output = run_command(cmd)
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"Invalid release info for {release_image}: {e}") from e
