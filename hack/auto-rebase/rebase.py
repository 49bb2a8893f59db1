#!/usr/bin/env python3
import argparse
import os
import sys
from autorebase.services.changelog_service import ChangelogService
from autorebase.services.gomod_update_service import GoModUpdateService
from autorebase.services.images_update_service import ImagesUpdateService
from autorebase.services.last_rebase_service import LastRebaseService
from autorebase.services.rebase_to_service import RebaseStep, RebaseToService
from autorebase.services.release_download_service import ReleaseDownloadService
from autorebase.services.service import Service
from autorebase.utils.logging import setup_logger

TOOL_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.dirname(os.path.dirname(TOOL_DIR))


def build_service(args: argparse.Namespace) -> Service:
    staging_dir = os.environ.get("STAGING_DIR", f"{ROOT_DIR}/_output/staging")
    components_file = os.environ.get("COMPONENTS_FILE", f"{TOOL_DIR}/components.yaml")
    commits_file = os.environ.get("COMMITS_FILE", f"{TOOL_DIR}/commits.txt")
    changelog_file = os.environ.get("CHANGELOG_FILE", f"{TOOL_DIR}/changelog.txt")
    gomod_file = os.environ.get("GO_MOD_FILE", f"{ROOT_DIR}/go.mod")
    release_dir = os.environ.get("RELEASE_DIR", f"{ROOT_DIR}/assets/release")
    crio_conf_dir = os.environ.get("CRIO_CONF_DIR", f"{ROOT_DIR}/packaging/crio.conf.d")

    match args.command:
        case "download" | "to":
            download = ReleaseDownloadService(
                args.release_image_amd64,
                args.release_image_arm64,
                staging_dir,
                components_file,
                os.environ.get("RELEASE_IMAGES_FILE", f"{release_dir}/release-x86_64.json"),
                os.environ.get("PULL_SECRET_FILE", os.path.expanduser("~/.pull-secret.json")),
            )
            if args.command == "download":
                return download
            last_rebase_file = os.environ.get("LAST_REBASE_FILE", f"{TOOL_DIR}/last_rebase.sh")
            return RebaseToService(
                args.release_image_amd64,
                args.release_image_arm64,
                ROOT_DIR,
                staging_dir,
                download,
                [
                    RebaseStep(
                        "last_rebase.sh",
                        LastRebaseService(
                            args.release_image_amd64,
                            args.release_image_arm64,
                            last_rebase_file,
                            f"./{os.path.relpath(os.path.abspath(__file__), ROOT_DIR)}",
                        ),
                        [last_rebase_file],
                        "update last_rebase.sh",
                    ),
                    RebaseStep(
                        "changelog",
                        ChangelogService(staging_dir, commits_file, changelog_file),
                        [commits_file, changelog_file],
                        "update changelog",
                    ),
                    RebaseStep(
                        "go.mod",
                        GoModUpdateService(gomod_file, staging_dir, components_file),
                        [gomod_file, f"{os.path.dirname(gomod_file)}/go.sum"],
                        "update go.mod",
                    ),
                    RebaseStep(
                        "component images",
                        ImagesUpdateService(staging_dir, release_dir, crio_conf_dir),
                        [release_dir, crio_conf_dir],
                        "update component images",
                    ),
                ],
            )
        case "changelog":
            return ChangelogService(staging_dir, commits_file, changelog_file)
        case "go.mod":
            return GoModUpdateService(gomod_file, staging_dir, components_file)
        case "images":
            return ImagesUpdateService(staging_dir, release_dir, crio_conf_dir)
    raise ValueError(f"Unknown command {args.command}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rebase onto the components of an upstream release")
    subparsers = parser.add_subparsers(dest="command", required=True)
    to = subparsers.add_parser("to", help="Perform all the steps to rebase to a release pair, committing each step")
    download = subparsers.add_parser("download", help="Download the content of a release pair to the staging directory")
    for release_parser in (to, download):
        release_parser.add_argument("release_image_amd64", help="amd64 release image")
        release_parser.add_argument("release_image_arm64", help="arm64 release image")
    subparsers.add_parser("changelog", help="List the changes of each repository touched by the downloaded release")
    subparsers.add_parser("go.mod", help="Update go.mod to the downloaded release")
    subparsers.add_parser("images", help="Rebase the component images to the downloaded release")
    args = parser.parse_args(argv)

    logger = setup_logger("Rebase")

    try:
        service = build_service(args)
        logger.info(f"Starting {args.command}")
        service.run()
        logger.info(f"{args.command} completed successfully")
        return 0
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
