import re
from pathlib import Path
from typing import override

from autorebase.clients.go_client import GoClient
from autorebase.errors import CollaboratorError
from autorebase.repositories.manifest import Manifest
from autorebase.utils.directives import strip_comment


def replace_directive_rx(module_path: str) -> re.Pattern[str]:
    # old path, optionally followed by its version, then the arrow
    return re.compile(rf"(^|\s){re.escape(module_path)}\s[A-Za-z0-9 \t.+-]*=>")


class GoModRepository(Manifest):
    def __init__(self, file_path: str | Path, go: GoClient | None = None):
        self.file_path: Path = Path(file_path)
        self.go: GoClient = go or GoClient()

    @override
    def read_directive(self, module_path: str) -> str | None:
        rx = replace_directive_rx(module_path)
        for line in self.go.mod_print(self.file_path).splitlines():
            if rx.search(line):
                return line.strip().removeprefix("replace ").strip()
        return None

    @override
    def set_require(self, module_path: str, version: str) -> None:
        self.go.mod_edit(self.file_path, f"-require={module_path}@{version}")

    @override
    def set_replace(self, module_path: str, new_module_path: str, version: str) -> None:
        self.go.mod_edit(self.file_path, f"-replace={module_path}={new_module_path}@{version}")

    @override
    def set_comment(self, module_path: str, comment: str) -> None:
        rx = replace_directive_rx(module_path)
        lines = self.file_path.read_text().splitlines(keepends=True)
        for i, line in enumerate(lines):
            if rx.search(line):
                directive = line.rstrip("\n")
                ending = line[len(directive):]
                lines[i] = f"{strip_comment(directive)} // {comment}{ending}"
                self.file_path.write_text("".join(lines))
                return
        raise CollaboratorError(f"No replace directive for {module_path} in {self.file_path}")

    @override
    def replaced_module_paths(self) -> list[str]:
        data = self.go.mod_json(self.file_path)
        return [r["Old"]["Path"] for r in data.get("Replace") or []]

    @override
    def normalize(self) -> None:
        self.go.mod_tidy(self.file_path.parent)
