import os
import shutil
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from autorebase.models import ComponentRegistry
from autorebase.repositories import CheckoutRepository, ComponentRepository, Manifest
from autorebase.services.rebase_context import RebaseContext
from autorebase.utils.pseudoversion import is_commit

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "assets")

COMMITS = {
    "kubernetes": "1b2c3d4e5f60718293a4b5c6d7e8f90123456789",
    "etcd": "e7cd1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b",
    "cluster-policy-controller": "0c1d2e3f405162738495a6b7c8d9e0f1a2b3c4d5",
    "route-controller-manager": "9f8e7d6c5b4a39281706f5e4d3c2b1a098765432",
}
ORIGINS = {
    "kubernetes": "https://github.com/openshift/kubernetes",
    "etcd": "https://github.com/openshift/etcd",
    "cluster-policy-controller": "https://github.com/openshift/cluster-policy-controller",
    "route-controller-manager": "https://github.com/openshift/route-controller-manager",
}
STAGING_SUBMODULES = ["api", "apimachinery", "client-go"]


def fake_pseudoversion(commit: str) -> str:
    return f"v0.0.0-20240102030405-{commit[:12]}"


class FakeManifest(Manifest):
    """In-memory go.mod whose normalization rewrites commits into pseudoversions."""

    def __init__(self, replaces: dict[str, tuple[str, str, str]] | None = None):
        # module path -> (new module path, version, comment)
        self.replaces: dict[str, tuple[str, str, str]] = dict(replaces or {})
        self.requires: dict[str, str] = {}
        self.normalizations: int = 0

    def read_directive(self, module_path: str) -> str | None:
        if module_path not in self.replaces:
            return None
        new_module_path, version, comment = self.replaces[module_path]
        line = f"{module_path} => {new_module_path} {version}".rstrip()
        return f"{line} // {comment}" if comment else line

    def set_require(self, module_path: str, version: str) -> None:
        self.requires[module_path] = version

    def set_replace(self, module_path: str, new_module_path: str, version: str) -> None:
        comment = self.replaces.get(module_path, ("", "", ""))[2]
        self.replaces[module_path] = (new_module_path, version, comment)

    def set_comment(self, module_path: str, comment: str) -> None:
        new_module_path, version, _ = self.replaces[module_path]
        self.replaces[module_path] = (new_module_path, version, comment)

    def replaced_module_paths(self) -> list[str]:
        return list(self.replaces)

    def normalize(self) -> None:
        self.normalizations += 1
        for module_path, (new_module_path, version, comment) in self.replaces.items():
            if is_commit(version):
                self.replaces[module_path] = (new_module_path, fake_pseudoversion(version), comment)
        for module_path, version in self.requires.items():
            if is_commit(version):
                self.requires[module_path] = fake_pseudoversion(version)

    def snapshot(self) -> tuple[dict, dict]:
        return dict(self.replaces), dict(self.requires)


@pytest.fixture
def components_file(tmp_path):
    dest_file = tmp_path / "components.yaml"
    shutil.copy(os.path.join(ASSETS_DIR, "components.yaml"), dest_file)
    return dest_file


@pytest.fixture
def registry(components_file) -> ComponentRegistry:
    return ComponentRepository(str(components_file)).registry()


@pytest.fixture
def staging_dir(tmp_path) -> Path:
    staging = tmp_path / "staging"
    for component in COMMITS:
        (staging / component).mkdir(parents=True)
    for submodule in STAGING_SUBMODULES:
        (staging / "kubernetes" / "staging" / "src" / "k8s.io" / submodule).mkdir(parents=True)
    return staging


@pytest.fixture
def mock_git():
    git = MagicMock()
    git.rev_parse_head.side_effect = lambda repo_dir: COMMITS[Path(repo_dir).name]
    git.origin_url.side_effect = lambda repo_dir: ORIGINS[Path(repo_dir).name]
    return git


@pytest.fixture
def checkouts(staging_dir, mock_git) -> CheckoutRepository:
    return CheckoutRepository(str(staging_dir), git=mock_git)


@pytest.fixture
def upstream_manifests() -> dict[str, FakeManifest]:
    return {
        "kubernetes": FakeManifest({
            "k8s.io/api": ("./staging/src/k8s.io/api", "", ""),
            "k8s.io/kube-openapi": ("github.com/openshift/kube-openapi", "v0.0.0-20230601164746-807efa3c8e1d", ""),
            "github.com/onsi/ginkgo/v2": ("github.com/openshift/onsi-ginkgo/v2", "v2.6.1-0.20230317131656-c62d9de5a460", ""),
            "sigs.k8s.io/local": ("../local", "", ""),
            "sigs.k8s.io/bad": ("sigs.k8s.io/bad", "latest", ""),
        }),
    }


@pytest.fixture
def manifest() -> FakeManifest:
    return FakeManifest()


@pytest.fixture
def context(manifest, checkouts, registry, upstream_manifests) -> RebaseContext:
    return RebaseContext(
        manifest=manifest,
        checkouts=checkouts,
        registry=registry,
        upstream_manifest=lambda gomod: upstream_manifests[Path(gomod).parent.name],
    )
