from abc import ABC, abstractmethod

from autorebase.utils.directives import get_comment


class Manifest(ABC):
    """Line-level access to the require and replace directives of a go.mod file."""

    @abstractmethod
    def read_directive(self, module_path: str) -> str | None:
        """Returns the replace directive for module_path, including its trailing comment."""

    @abstractmethod
    def set_require(self, module_path: str, version: str) -> None: ...

    @abstractmethod
    def set_replace(self, module_path: str, new_module_path: str, version: str) -> None: ...

    @abstractmethod
    def set_comment(self, module_path: str, comment: str) -> None: ...

    @abstractmethod
    def replaced_module_paths(self) -> list[str]: ...

    @abstractmethod
    def normalize(self) -> None:
        """Resolves the module graph, rewriting commit versions into pseudoversions."""

    def comment_of(self, module_path: str) -> str:
        return get_comment(self.read_directive(module_path) or "")
