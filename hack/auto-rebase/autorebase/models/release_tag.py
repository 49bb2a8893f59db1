from typing import Any

from pydantic.dataclasses import dataclass

SOURCE_LOCATION_ANNOTATION = "io.openshift.build.source-location"
COMMIT_ANNOTATION = "io.openshift.build.commit.id"


@dataclass(frozen=True)
class ReleaseTag:
    name: str
    repository: str
    commit: str


def source_tags(release_info: dict[str, Any]) -> list[ReleaseTag]:
    """Returns the payload tags built from a known source repository and commit."""
    tags = []
    for tag in release_info.get("references", {}).get("spec", {}).get("tags", []):
        annotations = tag.get("annotations") or {}
        repository = annotations.get(SOURCE_LOCATION_ANNOTATION)
        commit = annotations.get(COMMIT_ANNOTATION)
        if repository and commit:
            tags.append(ReleaseTag(name=tag["name"], repository=repository, commit=commit))
    return tags


def image_pullspecs(release_info: dict[str, Any]) -> dict[str, str]:
    """Maps each payload tag name to the pullspec of its image."""
    pullspecs = {}
    for tag in release_info.get("references", {}).get("spec", {}).get("tags", []):
        pullspec = (tag.get("from") or {}).get("name")
        if pullspec:
            pullspecs[tag["name"]] = pullspec
    return pullspecs
