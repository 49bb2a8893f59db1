from pathlib import Path

from autorebase.clients.git_client import GitClient
from autorebase.errors import ConfigurationError
from autorebase.models import ComponentCheckout

STAGING_SUBMODULES_DIR = Path("kubernetes", "staging", "src", "k8s.io")


class CheckoutRepository:
    def __init__(self, staging_dir: str, git: GitClient | None = None):
        self.staging_dir: Path = Path(staging_dir)
        self.git: GitClient = git or GitClient()

    def path(self, component: str) -> Path:
        return self.staging_dir / component

    def find(self, component: str) -> ComponentCheckout:
        repo_dir = self.path(component)
        if not repo_dir.is_dir():
            raise ConfigurationError(f"No checkout of {component} in {self.staging_dir}, download a release first")
        return ComponentCheckout(
            name=component,
            path=repo_dir,
            commit=self.git.rev_parse_head(repo_dir),
            origin_url=self.git.origin_url(repo_dir),
        )

    def list_staging_submodules(self) -> list[str]:
        root = self.staging_dir / STAGING_SUBMODULES_DIR
        if not root.is_dir():
            raise ConfigurationError(f"No kubernetes staging tree at {root}")
        return sorted(p.name for p in root.iterdir() if p.is_dir())
