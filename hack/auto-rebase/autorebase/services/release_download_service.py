import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, override

from autorebase.clients.git_client import GitClient
from autorebase.clients.oc_client import OcClient
from autorebase.models import SourceCommit, source_tags
from autorebase.repositories import CommitsRepository, ComponentRepository
from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger

NEW_COMMITS_FILE = "new-commits.txt"
EMBEDDED_COMPONENT_PURPOSE = "embedded-component"


class ReleaseDownloadService(Service):
    """Checks out the components of a release pair into the staging directory.

    The amd64 release decides the commit of every registered component. Each
    architecture's release then decides the commits of the repositories that
    build the distribution's own images, which are cloned per architecture in
    case the two payloads differ.
    """

    def __init__(
        self,
        release_image_amd64: str,
        release_image_arm64: str,
        staging_dir: str,
        components_file_path: str,
        release_images_file_path: str,
        pull_secret_file_path: str,
    ):
        self.releases: dict[str, str] = {"amd64": release_image_amd64, "arm64": release_image_arm64}
        self.staging_dir: Path = Path(staging_dir)
        self.release_images_file_path: str = release_images_file_path
        self.pull_secret_file_path: str = pull_secret_file_path
        self.oc: OcClient = OcClient()
        self.git: GitClient = GitClient()
        self.components_repository: ComponentRepository = ComponentRepository(components_file_path)
        self.logger: logging.Logger = setup_logger("ReleaseDownloadService")

    @override
    def run(self) -> None:
        shutil.rmtree(self.staging_dir, ignore_errors=True)
        self.staging_dir.mkdir(parents=True)

        pull_secret = self.get_pull_secret()
        release_infos: dict[str, dict[str, Any]] = {}
        for arch, release_image in self.releases.items():
            info = self.oc.release_info(release_image, pull_secret)
            with open(self.staging_dir / f"release_{arch}.json", "w") as f:
                json.dump(info, f, indent=2)
            release_infos[arch] = info

        commits = self.clone_components(release_infos["amd64"])
        for arch, info in release_infos.items():
            commits += self.clone_image_repositories(arch, info)

        unique_commits = list(dict.fromkeys(commits))
        CommitsRepository(str(self.staging_dir / NEW_COMMITS_FILE)).save(unique_commits)
        self.logger.info(f"Recorded {len(unique_commits)} commits in {self.staging_dir / NEW_COMMITS_FILE}")

    def get_pull_secret(self) -> str | None:
        if os.path.isfile(self.pull_secret_file_path):
            return self.pull_secret_file_path
        self.logger.warning(f"No pull secret found at {self.pull_secret_file_path}")
        return None

    def clone_components(self, release_info: dict[str, Any]) -> list[SourceCommit]:
        registry = self.components_repository.registry()
        commits = []
        for tag in source_tags(release_info):
            if registry.get(tag.name) is None:
                continue
            self.git.clone_at(tag.repository, tag.commit, self.staging_dir)
            commits.append(SourceCommit(repository=tag.repository, purpose=EMBEDDED_COMPONENT_PURPOSE, commit=tag.commit))
        return commits

    def clone_image_repositories(self, arch: str, release_info: dict[str, Any]) -> list[SourceCommit]:
        tags = {tag.name: tag for tag in source_tags(release_info)}
        commits = []
        for image in self.get_distribution_images():
            tag = tags.get(image)
            if tag is None:
                # some images do not come from the release payload
                self.logger.info(f"{image} not from release payload, skipping")
                continue
            self.git.clone_at(tag.repository, tag.commit, self.staging_dir / arch)
            commits.append(SourceCommit(repository=tag.repository, purpose=f"image-{arch}", commit=tag.commit))
        return commits

    def get_distribution_images(self) -> list[str]:
        with open(self.release_images_file_path, "r") as f:
            return sorted(json.load(f).get("images", {}))
