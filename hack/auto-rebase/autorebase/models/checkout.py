from pathlib import Path

from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class ComponentCheckout:
    name: str
    path: Path
    commit: str
    origin_url: str
