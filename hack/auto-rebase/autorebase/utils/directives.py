"""Parsing of the resolution commands annotating go.mod replace directives.

A replace directive names where its replacement comes from in a trailing
comment, for example::

    k8s.io/api => github.com/openshift/kubernetes/staging/src/k8s.io/api v0.0.0-... // staging kubernetes

Recognized commands are ``from <component>``, ``staging``,
``release <component>`` and ``override [<reason>]``.
"""
from autorebase.models import Directive, From, Override, Release, Staging, Unknown

COMMENT_DELIMITER = "//"


def get_comment(line: str) -> str:
    """Returns the trimmed text after the last comment delimiter, or ''."""
    _, delimiter, comment = line.rpartition(COMMENT_DELIMITER)
    if not delimiter:
        return ""
    return comment.strip()


def strip_comment(line: str) -> str:
    head, delimiter, _ = line.rpartition(COMMENT_DELIMITER)
    if not delimiter:
        return line.rstrip()
    return head.rstrip()


def parse_comment(comment: str) -> Directive:
    words = comment.split(maxsplit=1)
    command = words[0] if words else ""
    arguments = words[1].strip() if len(words) > 1 else ""
    # a missing component is kept empty and rejected during resolution
    component = arguments.split(maxsplit=1)[0] if arguments else ""
    match command:
        case "from":
            return From(component=component)
        case "staging":
            return Staging()
        case "release":
            return Release(component=component)
        case "override":
            return Override(reason=arguments)
        case _:
            return Unknown(raw=comment.strip())


def parse_directive(line: str | None) -> Directive:
    if not line:
        return Unknown(raw="")
    return parse_comment(get_comment(line))
