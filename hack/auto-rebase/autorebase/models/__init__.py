from .checkout import ComponentCheckout
from .component import Component, Policy
from .component_registry import ComponentRegistry
from .directive import Directive, From, Override, Release, Staging, Unknown
from .release_tag import ReleaseTag, image_pullspecs, source_tags
from .replacement import ResolvedReplacement, SkippedDirective
from .source_commit import SourceCommit
from .wrappers import ComponentsFile

__all__ = [
    "Component",
    "ComponentCheckout",
    "ComponentRegistry",
    "ComponentsFile",
    "Directive",
    "From",
    "Override",
    "Policy",
    "Release",
    "ReleaseTag",
    "ResolvedReplacement",
    "SkippedDirective",
    "SourceCommit",
    "Staging",
    "Unknown",
    "image_pullspecs",
    "source_tags",
]
