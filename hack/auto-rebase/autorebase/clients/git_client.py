import logging
import os
from pathlib import Path

from autorebase.clients.command import run_command

logger = logging.getLogger(__name__)


class GitClient:
    def clone_at(self, repo: str, commit: str, dest_dir: str | Path) -> Path:
        repo_dir = Path(dest_dir) / repo.rstrip("/").rsplit("/", 1)[-1]
        if repo_dir.is_dir():
            logger.info(f"{repo_dir} already exists, not cloning {repo}")
            return repo_dir

        os.makedirs(dest_dir, exist_ok=True)
        logger.info(f"Cloning {repo} at {commit} into {repo_dir}")
        run_command(["git", "init", "--initial-branch=main", str(repo_dir)])
        run_command(["git", "remote", "add", "origin", repo], cwd=repo_dir)
        run_command(["git", "fetch", "origin", "--filter=tree:0", "--tags", commit], cwd=repo_dir)
        run_command(["git", "-c", "advice.detachedHead=false", "checkout", commit], cwd=repo_dir)
        return repo_dir

    def rev_parse_head(self, repo_dir: str | Path) -> str:
        return run_command(["git", "rev-parse", "HEAD"], cwd=repo_dir).strip()

    def origin_url(self, repo_dir: str | Path) -> str:
        return run_command(["git", "config", "--get", "remote.origin.url"], cwd=repo_dir).strip()

    def log(self, repo_dir: str | Path, old_commit: str, new_commit: str) -> str:
        return run_command(
            [
                "git", "log",
                "--no-merges",
                "--pretty=format:%H %cI %s",
                "--no-decorate",
                f"{old_commit}..{new_commit}",
            ],
            cwd=repo_dir,
        )

    def delete_branch(self, repo_dir: str | Path, branch: str) -> None:
        run_command(["git", "branch", "-D", branch], cwd=repo_dir)

    def checkout_new_branch(self, repo_dir: str | Path, branch: str) -> None:
        logger.info(f"Switching to new branch {branch}")
        run_command(["git", "checkout", "-b", branch], cwd=repo_dir)

    def status(self, repo_dir: str | Path, paths: list[str]) -> str:
        return run_command(["git", "status", "-s", "--", *paths], cwd=repo_dir)

    def add(self, repo_dir: str | Path, paths: list[str]) -> None:
        run_command(["git", "add", "--", *paths], cwd=repo_dir)

    def commit(self, repo_dir: str | Path, message: str) -> None:
        run_command(["git", "commit", "-m", message], cwd=repo_dir)
