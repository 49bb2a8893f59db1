from pydantic.dataclasses import dataclass

from autorebase.models.component import Component

@dataclass(frozen=True)
class ComponentsFile:
    components: list[Component]
