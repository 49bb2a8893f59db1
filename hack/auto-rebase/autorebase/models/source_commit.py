from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class SourceCommit:
    repository: str
    purpose: str  # embedded-component or image-<arch>
    commit: str

    @property
    def repository_name(self) -> str:
        return self.repository.rstrip("/").rsplit("/", 1)[-1]
