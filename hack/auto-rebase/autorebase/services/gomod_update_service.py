import logging
from pathlib import Path
from typing import Callable, override

from autorebase.models import ResolvedReplacement, SkippedDirective
from autorebase.repositories import CheckoutRepository, ComponentRepository, GoModRepository, Manifest
from autorebase.services.module_resolver import ModuleResolver, Resolution
from autorebase.services.rebase_context import RebaseContext
from autorebase.services.service import Service
from autorebase.utils.directives import parse_directive
from autorebase.utils.logging import setup_logger

# modules required directly, without a replace directive of their own
BOOTSTRAP_REQUIREMENTS = [
    ("github.com/openshift/cluster-policy-controller", "cluster-policy-controller"),
    ("github.com/openshift/route-controller-manager", "route-controller-manager"),
]
STAGING_MODULE_PREFIX = "k8s.io"
STAGING_REQUIRE_VERSION = "v0.0.0"
STAGING_COMMENT = "staging kubernetes"


class GoModUpdateService(Service):
    def __init__(self, gomod_file_path: str, staging_dir: str, components_file_path: str):
        self.manifest: Manifest = GoModRepository(gomod_file_path)
        self.checkouts: CheckoutRepository = CheckoutRepository(staging_dir)
        self.components_repository: ComponentRepository = ComponentRepository(components_file_path)
        self.upstream_manifest: Callable[[Path], Manifest] = GoModRepository
        self.logger: logging.Logger = setup_logger("GoModUpdateService")

    @override
    def run(self) -> None:
        resolutions = self.update_go_mod()
        resolved = sum(1 for r in resolutions if isinstance(r, ResolvedReplacement))
        skipped = sum(1 for r in resolutions if isinstance(r, SkippedDirective))
        self.logger.info(f"Updated {resolved} replace directives, skipped {skipped}")

    def update_go_mod(self) -> list[Resolution]:
        context = RebaseContext(
            manifest=self.manifest,
            checkouts=self.checkouts,
            registry=self.components_repository.registry(),
            upstream_manifest=self.upstream_manifest,
        )
        resolver = ModuleResolver(context)
        resolutions: list[Resolution] = []

        self.logger.info("Updating go.mod")
        for module_path, component in BOOTSTRAP_REQUIREMENTS:
            resolver.require_component_commit(module_path, component)

        # every module of the kubernetes staging tree is required at v0.0.0
        # and replaced by its absolute path in the staging tree
        for submodule in self.checkouts.list_staging_submodules():
            module_path = f"{STAGING_MODULE_PREFIX}/{submodule}"
            self.logger.info(f"go mod edit -require {module_path}@{STAGING_REQUIRE_VERSION}")
            self.manifest.set_require(module_path, STAGING_REQUIRE_VERSION)
            resolutions.append(resolver.resolve_staging(module_path))
            if not self.manifest.comment_of(module_path):
                self.manifest.set_comment(module_path, STAGING_COMMENT)

        for module_path in self.manifest.replaced_module_paths():
            directive = parse_directive(self.manifest.read_directive(module_path))
            resolutions.append(resolver.resolve(module_path, directive))

        self.manifest.normalize()
        return resolutions
