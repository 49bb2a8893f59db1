import os

from autorebase.models import SourceCommit


class CommitsRepository:
    """Commit records, one '<repository> <purpose> <commit>' per line."""

    def __init__(self, file_path: str):
        self.file_path: str = file_path

    def find_all(self) -> list[SourceCommit]:
        if not os.path.isfile(self.file_path):
            return []
        commits = []
        with open(self.file_path, "r") as f:
            for number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                fields = line.split()
                if len(fields) != 3:
                    raise ValueError(f"Invalid commits file {self.file_path} at line {number}: {line.strip()}")
                commits.append(SourceCommit(repository=fields[0], purpose=fields[1], commit=fields[2]))
        return commits

    def find(self, repository: str, purpose: str) -> SourceCommit | None:
        return next(
            (c for c in self.find_all() if c.repository == repository and c.purpose == purpose),
            None,
        )

    def save(self, commits: list[SourceCommit]) -> None:
        with open(self.file_path, "w") as f:
            for c in commits:
                f.write(f"{c.repository} {c.purpose} {c.commit}\n")
