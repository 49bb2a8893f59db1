"""Resolution of go.mod replace directives against the checked out release components.

Each replace directive in the distribution's go.mod is annotated with the
command telling where its replacement comes from:

    // from <component>     the replacement used by the go.mod of <component>
    // staging kubernetes   the kubernetes staging tree at the released commit
    // release <component>  the repository of <component> at the released commit
    // override [<reason>]  keep the existing replacement

Replacements pinned to a component commit are written with the commit first
and normalized with `go mod tidy`, which computes the commit's pseudoversion.
The pseudoversion is then cached per component so the round trip through
tidy happens once per component and run.
"""
import logging
from abc import ABC, abstractmethod
from typing import override

from autorebase.errors import CollaboratorError, ConfigurationError
from autorebase.models import (
    Directive,
    From,
    Override,
    Release,
    ResolvedReplacement,
    SkippedDirective,
    Staging,
    Unknown,
)
from autorebase.services.rebase_context import RebaseContext
from autorebase.utils.directives import strip_comment
from autorebase.utils.logging import setup_logger
from autorebase.utils.pseudoversion import grep_pseudoversion, is_valid_version

KUBERNETES = "kubernetes"
ETCD = "etcd"
ETCD_MODULE_PREFIX = "go.etcd.io/etcd"
STAGING_MODULE_ROOT = "github.com/openshift/kubernetes/staging"
STAGING_SRC_ROOT = f"{STAGING_MODULE_ROOT}/src"
LOCAL_STAGING_PREFIX = "./staging/"

Resolution = ResolvedReplacement | SkippedDirective


class ModuleRedirect(ABC):
    """Sends the modules matching a path predicate to a differently addressed source."""

    @abstractmethod
    def matches(self, module_path: str) -> bool:
        pass

    @abstractmethod
    def resolve(self, resolver: "ModuleResolver", module_path: str, component: str) -> ResolvedReplacement:
        pass


class EtcdRedirect(ModuleRedirect):
    # etcd modules come from the fork in the release, not from the component's go.mod
    @override
    def matches(self, module_path: str) -> bool:
        return module_path.startswith(f"{ETCD_MODULE_PREFIX}/")

    @override
    def resolve(self, resolver: "ModuleResolver", module_path: str, component: str) -> ResolvedReplacement:
        return resolver.resolve_release(module_path, component)


def module_path_from_url(url: str) -> str:
    return url.removeprefix("https://").removeprefix("http://").removesuffix(".git")


class ModuleResolver:
    def __init__(self, context: RebaseContext, redirects: list[ModuleRedirect] | None = None):
        self.context: RebaseContext = context
        self.redirects: list[ModuleRedirect] = redirects if redirects is not None else [EtcdRedirect()]
        self.logger: logging.Logger = setup_logger("ModuleResolver")

    def resolve(self, module_path: str, directive: Directive) -> Resolution:
        match directive:
            case From(component=component):
                self.validate_component(component, module_path)
                return self.resolve_from(module_path, component)
            case Staging():
                return self.resolve_staging(module_path)
            case Release(component=component):
                self.validate_component(component, module_path)
                return self.resolve_release(module_path, component)
            case Override(reason=reason):
                self.logger.info(f"skipping modulepath {module_path}: override [{reason}]")
                return SkippedDirective(module_path=module_path, reason=f"override [{reason}]")
            case Unknown(raw=raw):
                self.logger.warning(f"skipping modulepath {module_path}: no or unknown command [{raw}]")
                return SkippedDirective(module_path=module_path, reason=f"no or unknown command [{raw}]")
            case _:
                raise TypeError(f"Unsupported directive {directive!r}")

    def validate_component(self, component: str, module_path: str) -> None:
        allowed = self.context.registry.lookup_components()
        if component not in allowed:
            raise ConfigurationError(
                f"component must be one of [{' '.join(allowed)}], have {component or '<none>'} for {module_path}"
            )

    def resolve_from(self, module_path: str, component: str) -> ResolvedReplacement:
        for redirect in self.redirects:
            if redirect.matches(module_path):
                return redirect.resolve(self, module_path, component)

        upstream = self.context.component_manifest(component)
        replace_directive = upstream.read_directive(module_path)
        if replace_directive is None:
            raise ConfigurationError(f"go.mod of {component} has no replace directive for {module_path}")

        _, arrow, replacement = strip_comment(replace_directive).partition("=>")
        replacement = replacement.strip()
        if not arrow or not replacement:
            raise ConfigurationError(f"Malformed replace directive for {module_path} in {component}: {replace_directive}")

        if replacement.startswith(LOCAL_STAGING_PREFIX):
            new_module_path = f"{STAGING_MODULE_ROOT}/{replacement.removeprefix(LOCAL_STAGING_PREFIX)}"
            return self.replace_using_component_commit(module_path, new_module_path, KUBERNETES)

        new_module_path, _, version = replacement.partition(" ")
        version = version.strip()
        if not is_valid_version(version):
            raise ConfigurationError(
                f"Replacement of {module_path} in {component} is not a versioned module: {replacement}"
            )
        self.logger.info(f"go mod edit -replace {module_path}={new_module_path}@{version}")
        self.context.manifest.set_replace(module_path, new_module_path, version)
        return ResolvedReplacement(module_path=module_path, new_module_path=new_module_path, version=version)

    def resolve_staging(self, module_path: str) -> ResolvedReplacement:
        return self.replace_using_component_commit(module_path, f"{STAGING_SRC_ROOT}/{module_path}", KUBERNETES)

    def resolve_release(self, module_path: str, component: str) -> ResolvedReplacement:
        suffix = ""
        if component == ETCD and module_path.startswith(ETCD_MODULE_PREFIX):
            suffix = module_path.removeprefix(ETCD_MODULE_PREFIX)
        checkout = self.context.checkouts.find(component)
        new_module_path = f"{module_path_from_url(checkout.origin_url)}{suffix}"
        return self.replace_using_component_commit(module_path, new_module_path, component)

    def replace_using_component_commit(
        self, module_path: str, new_module_path: str, component: str
    ) -> ResolvedReplacement:
        manifest = self.context.manifest
        pseudoversion = self.context.pseudoversions.get(component)
        if pseudoversion:
            self.logger.info(f"go mod edit -replace {module_path}={new_module_path}@{pseudoversion}")
            manifest.set_replace(module_path, new_module_path, pseudoversion)
            return ResolvedReplacement(module_path=module_path, new_module_path=new_module_path, version=pseudoversion)

        commit = self.context.checkouts.find(component).commit
        self.logger.info(f"go mod edit -replace {module_path}={new_module_path}@{commit}")
        manifest.set_replace(module_path, new_module_path, commit)
        # tidy turns the commit into a pseudoversion before the next edit
        manifest.normalize()
        # the old module path may carry a stale pseudoversion of its own
        _, _, replacement = strip_comment(manifest.read_directive(module_path) or "").partition("=>")
        pseudoversion = grep_pseudoversion(replacement)
        if not pseudoversion:
            raise CollaboratorError(f"Could not determine the pseudoversion of {component} at {commit}")
        self.context.pseudoversions.put(component, pseudoversion)
        return ResolvedReplacement(module_path=module_path, new_module_path=new_module_path, version=pseudoversion)

    def require_component_commit(self, module_path: str, component: str) -> str:
        commit = self.context.checkouts.find(component).commit
        self.logger.info(f"go mod edit -require {module_path}@{commit}")
        self.context.manifest.set_require(module_path, commit)
        self.context.manifest.normalize()
        return commit
