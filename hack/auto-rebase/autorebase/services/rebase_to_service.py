import json
import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import override

from autorebase.clients.git_client import GitClient
from autorebase.errors import CollaboratorError, ConfigurationError
from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger

# <stream>-<yyyy-mm-dd-hhmmss>, the tag of a nightly release image
RELEASE_TAG_RX = re.compile(r"(.+)-([0-9]{4}-[0-9]{2}-[0-9]{2}-[0-9]{6})")


@dataclass
class RebaseStep:
    name: str
    service: Service
    paths: list[str]
    message: str


class RebaseToService(Service):
    """Rebases onto a release pair in one go.

    The release is downloaded first, then every step runs in order on a
    `rebase-<stream>_amd64-<date>_arm64-<date>` branch. The files a step
    touched are committed with the step's message, and a step leaving its
    files unchanged is not committed. The staging directory is removed once
    all steps have run.
    """

    def __init__(
        self,
        release_image_amd64: str,
        release_image_arm64: str,
        repo_dir: str,
        staging_dir: str,
        download: Service,
        steps: list[RebaseStep],
    ):
        self.release_image_amd64: str = release_image_amd64
        self.release_image_arm64: str = release_image_arm64
        self.repo_dir: Path = Path(repo_dir)
        self.staging_dir: Path = Path(staging_dir)
        self.download: Service = download
        self.steps: list[RebaseStep] = steps
        self.git: GitClient = GitClient()
        self.logger: logging.Logger = setup_logger("RebaseToService")

    @override
    def run(self) -> None:
        self.logger.info(f"Rebasing to {self.release_image_amd64} and {self.release_image_arm64}")
        self.download.run()

        branch = self.rebase_branch()
        try:
            self.git.delete_branch(self.repo_dir, branch)
        except CollaboratorError:
            self.logger.info(f"No previous branch {branch}")
        self.git.checkout_new_branch(self.repo_dir, branch)

        for step in self.steps:
            self.logger.info(f"Running {step.name}")
            step.service.run()
            self.commit_step(step)

        self.logger.info(f"Removing {self.staging_dir}")
        shutil.rmtree(self.staging_dir, ignore_errors=True)

    def commit_step(self, step: RebaseStep) -> bool:
        if not self.git.status(self.repo_dir, step.paths).strip():
            self.logger.info(f"No changes in {step.name}")
            return False
        self.logger.info(f"Committing changes to {step.name}")
        self.git.add(self.repo_dir, step.paths)
        self.git.commit(self.repo_dir, step.message)
        return True

    def rebase_branch(self) -> str:
        amd64_match = RELEASE_TAG_RX.search(image_tag(self.release_image_amd64))
        if amd64_match:
            stream, amd64_date = amd64_match.group(1), amd64_match.group(2)
        else:
            self.logger.info("Failed to match the amd64 image tag, using the release file")
            release_info = self.load_release_info("amd64")
            stream = release_info["config"]["config"]["Labels"]["io.openshift.release"]
            amd64_date = created_date(release_info)

        arm64_match = RELEASE_TAG_RX.search(image_tag(self.release_image_arm64))
        if arm64_match:
            arm64_date = arm64_match.group(2)
        else:
            self.logger.info("Failed to match the arm64 image tag, using the release file")
            arm64_date = created_date(self.load_release_info("arm64"))

        return f"rebase-{stream}_amd64-{amd64_date}_arm64-{arm64_date}"

    def load_release_info(self, goarch: str) -> dict:
        path = self.staging_dir / f"release_{goarch}.json"
        try:
            with open(path, "r") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read release info {path}: {e}") from e


def image_tag(release_image: str) -> str:
    return release_image.split(":", 1)[-1]


def created_date(release_info: dict) -> str:
    return release_info["config"]["created"].split("T", 1)[0]
