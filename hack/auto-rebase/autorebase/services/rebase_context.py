from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from autorebase.models import ComponentRegistry
from autorebase.repositories import CheckoutRepository, GoModRepository, Manifest
from autorebase.services.pseudoversion_cache import PseudoversionCache


@dataclass
class RebaseContext:
    manifest: Manifest
    checkouts: CheckoutRepository
    registry: ComponentRegistry
    pseudoversions: PseudoversionCache = field(default_factory=PseudoversionCache)
    # opens the go.mod of a component checkout
    upstream_manifest: Callable[[Path], Manifest] = GoModRepository

    def component_manifest(self, component: str) -> Manifest:
        return self.upstream_manifest(self.checkouts.path(component) / "go.mod")
