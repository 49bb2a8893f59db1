import json
import os
import shutil
from unittest.mock import MagicMock, call, patch

import pytest

from autorebase.errors import CollaboratorError
from autorebase.services.rebase_to_service import RebaseStep, RebaseToService

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets")

NIGHTLY_AMD64 = "registry.ci.openshift.org/ocp/release:4.14.0-0.nightly-2023-06-02-005208"
NIGHTLY_ARM64 = "registry.ci.openshift.org/ocp-arm64/release-arm64:4.14.0-0.nightly-arm64-2023-06-03-101010"
BRANCH = "rebase-4.14.0-0.nightly_amd64-2023-06-02-005208_arm64-2023-06-03-101010"


@pytest.fixture
def staging_dir(tmp_path):
    return tmp_path / "staging"


@pytest.fixture
def download(staging_dir):
    download = MagicMock()

    def fake_download():
        staging_dir.mkdir(parents=True)
        for goarch in ["amd64", "arm64"]:
            shutil.copy(os.path.join(ASSETS_DIR, "release_amd64.json"), staging_dir / f"release_{goarch}.json")

    download.run.side_effect = fake_download
    return download


@pytest.fixture
def steps():
    return [
        RebaseStep("changelog", MagicMock(), ["changelog.txt", "commits.txt"], "update changelog"),
        RebaseStep("go.mod", MagicMock(), ["go.mod", "go.sum"], "update go.mod"),
    ]


def make_service(tmp_path, staging_dir, download, steps, amd64=NIGHTLY_AMD64, arm64=NIGHTLY_ARM64):
    with patch("autorebase.services.rebase_to_service.GitClient"):
        svc = RebaseToService(amd64, arm64, str(tmp_path), str(staging_dir), download, steps)
    svc.logger = MagicMock()
    svc.git.status.return_value = " M go.mod\n"
    return svc


@pytest.fixture
def service(tmp_path, staging_dir, download, steps):
    return make_service(tmp_path, staging_dir, download, steps)


def test_steps_run_in_order_on_rebase_branch(service, tmp_path, download, steps):
    order = MagicMock()
    order.attach_mock(download.run, "download")
    order.attach_mock(service.git.checkout_new_branch, "checkout_new_branch")
    order.attach_mock(steps[0].service.run, "changelog")
    order.attach_mock(steps[1].service.run, "go_mod")

    service.run()

    assert order.mock_calls == [
        call.download(),
        call.checkout_new_branch(tmp_path, BRANCH),
        call.changelog(),
        call.go_mod(),
    ]


def test_each_changed_step_is_committed(service, tmp_path):
    service.run()
    assert service.git.add.call_args_list == [
        call(tmp_path, ["changelog.txt", "commits.txt"]),
        call(tmp_path, ["go.mod", "go.sum"]),
    ]
    assert service.git.commit.call_args_list == [
        call(tmp_path, "update changelog"),
        call(tmp_path, "update go.mod"),
    ]


def test_unchanged_step_is_not_committed(service):
    service.git.status.side_effect = lambda repo_dir, paths: "" if "go.mod" in paths else " M changelog.txt\n"
    service.run()
    assert service.git.commit.call_args_list == [call(service.repo_dir, "update changelog")]


def test_previous_branch_is_replaced(service, tmp_path):
    service.run()
    service.git.delete_branch.assert_called_once_with(tmp_path, BRANCH)


def test_missing_previous_branch_is_ignored(service, tmp_path):
    service.git.delete_branch.side_effect = CollaboratorError("git branch failed with code 1")
    service.run()
    service.git.checkout_new_branch.assert_called_once_with(tmp_path, BRANCH)


def test_staging_dir_is_removed(service, staging_dir):
    service.run()
    assert not staging_dir.exists()


def test_failing_step_stops_the_rebase(service, steps):
    steps[0].service.run.side_effect = CollaboratorError("git log failed with code 128")
    with pytest.raises(CollaboratorError):
        service.run()
    steps[1].service.run.assert_not_called()
    service.git.commit.assert_not_called()


def test_branch_from_release_files(tmp_path, staging_dir, download, steps):
    svc = make_service(
        tmp_path, staging_dir, download, steps,
        amd64="quay.io/openshift-release-dev/ocp-release:4.14.0-x86_64",
        arm64="quay.io/openshift-release-dev/ocp-release:4.14.0-aarch64",
    )
    svc.download.run()
    with open(staging_dir / "release_arm64.json") as f:
        release_info = json.load(f)
    release_info["config"]["created"] = "2023-06-05T10:00:00Z"
    with open(staging_dir / "release_arm64.json", "w") as f:
        json.dump(release_info, f)

    assert svc.rebase_branch() == (
        "rebase-4.14.0-0.nightly-2023-06-02-005208_amd64-2023-06-02_arm64-2023-06-05"
    )
