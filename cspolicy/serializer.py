"""Pure-function CSP rendering: header value, header pair, meta tag, dict view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import structlog

from cspolicy.directives import CSP_HEADER, CSP_REPORT_ONLY_HEADER, META_EXCLUDED
from cspolicy.normalizer import meta_excluded
from cspolicy.values import DirectiveValue, Flag

if TYPE_CHECKING:
    from cspolicy.policy import Policy

logger = structlog.get_logger()


def render_directive(name: str, value: DirectiveValue) -> str | None:
    """Render one directive, or None when the value is unset."""
    if value.unset:
        return None
    if isinstance(value, Flag):
        return name
    return " ".join((name, *value.tokens))


def render_directives(items: Iterable[tuple[str, DirectiveValue]]) -> list[str]:
    rendered = []
    for name, value in items:
        part = render_directive(name, value)
        if part is not None:
            rendered.append(part)
    return rendered


def build_csp(items: Iterable[tuple[str, DirectiveValue]]) -> str:
    """Build a CSP header value from (name, value) pairs.

    Example:
        >>> build_csp([("default-src", Single("*")), ("upgrade-insecure-requests", Flag(True))])
        "default-src *; upgrade-insecure-requests"
    """
    return "; ".join(render_directives(items))


def parse_csp(csp_string: str) -> dict[str, list[str]]:
    """Parse a CSP string into {directive: [values]} dict.

    Repeated directives keep their first occurrence, as browsers do.

    Example:
        >>> parse_csp("default-src 'self'; script-src 'self' https:")
        {"default-src": ["'self'"], "script-src": ["'self'", "https:"]}
    """
    result: dict[str, list[str]] = {}
    if not csp_string or not csp_string.strip():
        return result
    for part in csp_string.split(";"):
        tokens = part.split()
        if not tokens:
            continue
        directive = tokens[0].lower()
        if directive in result:
            logger.debug("duplicate_directive_ignored", directive=directive)
            continue
        result[directive] = tokens[1:]
    return result


def header_value(policy: Policy) -> str:
    return build_csp(policy.directives())


def header(policy: Policy) -> tuple[str, str]:
    """Return the (header name, header value) pair for ``policy``."""
    name = CSP_REPORT_ONLY_HEADER if policy.report_only else CSP_HEADER
    return name, header_value(policy)


def _escape_attr(value: str) -> str:
    # Single quotes are CSP keyword syntax and the attribute is double-quoted
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def meta(policy: Policy, exclude: Iterable[str] = META_EXCLUDED) -> str:
    """Render ``policy`` as an HTML ``<meta http-equiv>`` element.

    Directives browsers ignore in meta delivery are dropped. There is no
    report-only meta variant, so the enforcing header name is always used.
    """
    exclude = list(exclude)
    if policy.report_only:
        logger.warning("meta_report_only_policy", header=CSP_HEADER)
    content = build_csp(
        (name, value) for name, value in policy.directives() if not meta_excluded(name, exclude)
    )
    return f'<meta http-equiv="{CSP_HEADER}" content="{_escape_attr(content)}">'


def as_dict(policy: Policy) -> dict[str, str]:
    """Return {directive: rendered value} for the set directives.

    Flag directives map to an empty string.
    """
    result: dict[str, str] = {}
    for name, value in policy.directives():
        if value.unset:
            continue
        result[name] = "" if isinstance(value, Flag) else " ".join(value.tokens)
    return result
