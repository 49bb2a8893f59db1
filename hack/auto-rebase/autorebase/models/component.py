from typing import Literal

from pydantic.dataclasses import dataclass

# embedded-component: compiled into the binary
# embedded-component-operator: only bindata/config is adopted
# loaded-component: pulled as an image at runtime
Policy = Literal["embedded-component", "embedded-component-operator", "loaded-component"]


@dataclass(frozen=True)
class Component:
    name: str
    policy: Policy
    checkout: str | None = None

    @property
    def checkout_name(self) -> str:
        return self.checkout or self.name
