from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedReplacement:
    module_path: str
    new_module_path: str
    version: str


@dataclass(frozen=True)
class SkippedDirective:
    module_path: str
    reason: str
