from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class From:
    component: str


@dataclass(frozen=True)
class Staging:
    pass


@dataclass(frozen=True)
class Release:
    component: str


@dataclass(frozen=True)
class Override:
    reason: str


@dataclass(frozen=True)
class Unknown:
    raw: str  # empty when the directive carries no comment at all


Directive = From | Staging | Release | Override | Unknown
