"""Key and value normalization applied at every mutation boundary.

Directive keys arrive as identifiers (``img_src``) or header-style strings
(``img-src``) and are folded to the hyphenated lower-case form. Values arrive
as a string, a list/tuple/set of strings, or a boolean and are coerced into
one of the :mod:`cspolicy.values` variants.
"""

from __future__ import annotations

from typing import Any, Iterable

import structlog

from cspolicy.directives import DIRECTIVES, META_EXCLUDED
from cspolicy.values import UNSET, DirectiveValue, Flag, Multi, Single

logger = structlog.get_logger()


class StructuralInputError(TypeError):
    """Raised when a directive value has an unsupported shape."""


def to_directive_name(key: Any) -> str:
    """Return the canonical hyphenated directive name for ``key``."""
    return str(key).strip().lower().replace("_", "-")


def to_prop_name(directive: Any) -> str:
    """Return the identifier form of a directive name (``img-src`` -> ``img_src``)."""
    return str(directive).strip().lower().replace("-", "_")


def resolve_directive(key: Any, fallback: str | None = None) -> str:
    """Return the canonical name if it is a known directive, else ``fallback``.

    ``fallback`` defaults to the hyphenated form of ``key``, so custom
    directives pass through unchanged.
    """
    name = to_directive_name(key)
    if name in DIRECTIVES:
        return name
    logger.debug("custom_directive", directive=name)
    return fallback if fallback is not None else name


def _check_tokens(key: Any, items: Iterable[Any]) -> tuple[str, ...]:
    """Validate tokens and drop blank ones."""
    tokens = []
    for token in items:
        if not isinstance(token, str):
            raise StructuralInputError(
                f"Directive {key!r} tokens must be strings, got {type(token).__name__}"
            )
        if token.strip():
            tokens.append(token.strip())
    return tuple(tokens)


def coerce_value(value: Any, key: Any = None) -> DirectiveValue:
    """Coerce a user-supplied value into a :class:`DirectiveValue`.

    Sets have no inherent order; their tokens are sorted so output is stable.
    """
    if isinstance(value, DirectiveValue):
        return value
    # bool before anything else: it must never be mistaken for a token
    if isinstance(value, bool):
        return Flag(value)
    if isinstance(value, str):
        return Single(value.strip())
    if isinstance(value, (list, tuple)):
        return Multi(_check_tokens(key, value))
    if isinstance(value, (set, frozenset)):
        return Multi(tuple(sorted(_check_tokens(key, value))))
    raise StructuralInputError(
        f"Unsupported value for directive {key!r}: {type(value).__name__}"
    )


def merge_values(base: DirectiveValue, override: DirectiveValue) -> DirectiveValue:
    """Combine two values stored under the same directive.

    - override ``False`` unsets the directive
    - two source lists are concatenated, skipping override tokens already present
    - anything else: override replaces base
    """
    if isinstance(override, Flag) and not override.enabled:
        return UNSET
    if isinstance(base, Multi) and isinstance(override, Multi):
        merged = list(base.tokens)
        existing = set(merged)
        for token in override.tokens:
            if token not in existing:
                merged.append(token)
                existing.add(token)
        return Multi(tuple(merged))
    return override


def meta_excluded(name: Any, exceptions: Iterable[str] = META_EXCLUDED) -> bool:
    """Return True if ``name`` (raw or canonical) is in the exclusion list."""
    exceptions = list(exceptions)
    excluded = {to_directive_name(x) for x in exceptions} | set(exceptions)
    return any(x in excluded for x in (str(name), to_directive_name(name)))
