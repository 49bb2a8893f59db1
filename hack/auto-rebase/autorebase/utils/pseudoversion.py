import re

PSEUDOVERSION_RX = re.compile(
    r"v[0-9]+\.(0\.0-|\d+\.\d+-([^+]*\.)?0\.)\d{14}-[A-Za-z0-9]+(\+[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?"
)
SEMVER_RX = re.compile(
    r"^v(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(-[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?(\+[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?$"
)
COMMIT_RX = re.compile(r"^[0-9a-f]{40}$")


def grep_pseudoversion(line: str) -> str | None:
    match = PSEUDOVERSION_RX.search(line)
    return match.group(0) if match else None


def is_valid_version(version: str) -> bool:
    return SEMVER_RX.match(version) is not None


def is_commit(version: str) -> bool:
    return COMMIT_RX.match(version) is not None
