import json
import logging
import re
from pathlib import Path
from typing import Any, override

from autorebase.errors import ConfigurationError
from autorebase.models import image_pullspecs
from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger

GOARCH_TO_UNAME = {"amd64": "x86_64", "arm64": "aarch64"}
PAUSE_IMAGE_TAG = "pod"
PAUSE_IMAGE_RX = re.compile(r"pause_image =.*")


class ImagesUpdateService(Service):
    """Points the distribution's images at the pullspecs of the downloaded release.

    For each architecture the release file `release-<uname arch>.json` gets the
    release version as its base, and every image it lists that the payload
    also ships is set to the payload's pullspec. The crio pause image follows
    the payload's `pod` image.
    """

    def __init__(self, staging_dir: str, release_dir: str, crio_conf_dir: str):
        self.staging_dir: Path = Path(staging_dir)
        self.release_dir: Path = Path(release_dir)
        self.crio_conf_dir: Path = Path(crio_conf_dir)
        self.logger: logging.Logger = setup_logger("ImagesUpdateService")

    @override
    def run(self) -> None:
        release_infos = {goarch: self.load_release_info(goarch) for goarch in GOARCH_TO_UNAME}
        for goarch, release_info in release_infos.items():
            self.update_release_file(GOARCH_TO_UNAME[goarch], release_info)
            self.update_pause_image(goarch, release_info)

    def load_release_info(self, goarch: str) -> dict[str, Any]:
        path = self.staging_dir / f"release_{goarch}.json"
        if not path.is_file():
            raise ConfigurationError(f"No release found in {self.staging_dir}, you need to download one first")
        with open(path, "r") as f:
            return json.load(f)

    def update_release_file(self, arch: str, release_info: dict[str, Any]) -> None:
        path = self.release_dir / f"release-{arch}.json"
        with open(path, "r") as f:
            release = json.load(f)

        base = release_info["metadata"]["version"]
        release.setdefault("release", {})["base"] = base
        pullspecs = image_pullspecs(release_info)
        images = release.setdefault("images", {})
        for name in images:
            if name in pullspecs:
                images[name] = pullspecs[name]

        with open(path, "w") as f:
            json.dump(release, f, indent=2)
            f.write("\n")
        self.logger.info(f"Rebased {path.name} onto {base}")

    def update_pause_image(self, goarch: str, release_info: dict[str, Any]) -> None:
        pullspec = image_pullspecs(release_info).get(PAUSE_IMAGE_TAG)
        if pullspec is None:
            self.logger.warning(f"Release for {goarch} has no {PAUSE_IMAGE_TAG} image, keeping the pause image")
            return

        path = self.crio_conf_dir / f"microshift_{goarch}.conf"
        if not path.is_file():
            raise ConfigurationError(f"No crio configuration found at {path}")
        content = path.read_text()
        path.write_text(PAUSE_IMAGE_RX.sub(lambda _: f'pause_image = "{pullspec}"', content))
