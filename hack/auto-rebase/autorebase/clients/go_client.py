import json
import logging
from pathlib import Path
from typing import Any

from autorebase.clients.command import run_command
from autorebase.errors import CollaboratorError

logger = logging.getLogger(__name__)


class GoClient:
    def mod_edit(self, gomod: str | Path, *flags: str) -> None:
        run_command(["go", "mod", "edit", *flags, str(gomod)])

    def mod_print(self, gomod: str | Path) -> str:
        return run_command(["go", "mod", "edit", "-print", str(gomod)])

    def mod_json(self, gomod: str | Path) -> dict[str, Any]:
        output = run_command(["go", "mod", "edit", "-json", str(gomod)])
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"Invalid go mod edit -json output for {gomod}: {e}") from e

    def mod_tidy(self, module_dir: str | Path) -> None:
        logger.info(f"go mod tidy in {module_dir}")
        run_command(["go", "mod", "tidy"], cwd=module_dir)
