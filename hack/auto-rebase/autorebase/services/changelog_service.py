import logging
from pathlib import Path
from typing import override

from autorebase.clients.git_client import GitClient
from autorebase.errors import CollaboratorError
from autorebase.models import SourceCommit
from autorebase.repositories import CommitsRepository
from autorebase.services.release_download_service import EMBEDDED_COMPONENT_PURPOSE, NEW_COMMITS_FILE
from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger


class ChangelogService(Service):
    def __init__(self, staging_dir: str, commits_file_path: str, changelog_file_path: str):
        self.staging_dir: Path = Path(staging_dir)
        self.new_commits_repo: CommitsRepository = CommitsRepository(str(self.staging_dir / NEW_COMMITS_FILE))
        self.old_commits_repo: CommitsRepository = CommitsRepository(commits_file_path)
        self.changelog_file_path: str = changelog_file_path
        self.git: GitClient = GitClient()
        self.logger: logging.Logger = setup_logger("ChangelogService")

    @override
    def run(self) -> None:
        new_commits = self.new_commits_repo.find_all()
        entries = [entry for entry in (self.describe(c) for c in new_commits) if entry is not None]

        with open(self.changelog_file_path, "w") as f:
            f.writelines(entries)
        self.old_commits_repo.save(new_commits)
        self.logger.info(f"Changelog written to {self.changelog_file_path}")

    def describe(self, new: SourceCommit) -> str | None:
        name = new.repository_name
        # repositories are matched on the full URL, some names are substrings of others
        old = self.old_commits_repo.find(new.repository, new.purpose)
        if old is None:
            return f"# {name} is a new {new.purpose} dependency\n\n"
        if old.commit == new.commit:
            self.logger.info(f"{name} {new.purpose} no change")
            return None

        repo_dir = self.checkout_dir(new)
        if repo_dir is None:
            return f'Unknown commit purpose "{new.purpose}" for {new.repository}\n'

        try:
            changes = self.git.log(repo_dir, old.commit, new.commit).rstrip("\n")
        except CollaboratorError as e:
            self.logger.warning(f"Could not list changes of {name}: {e}")
            changes = "There was an error determining the changes"
        return f"# {name} {new.purpose} {old.commit} to {new.commit}\n{changes}\n"

    def checkout_dir(self, commit: SourceCommit) -> Path | None:
        if commit.purpose == EMBEDDED_COMPONENT_PURPOSE:
            return self.staging_dir / commit.repository_name
        if commit.purpose.startswith("image-"):
            arch = commit.purpose.removeprefix("image-")
            return self.staging_dir / arch / commit.repository_name
        return None
