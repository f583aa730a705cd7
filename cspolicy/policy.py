"""The Policy directive set."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Iterable, Iterator

from cspolicy import serializer
from cspolicy.directives import DEFAULT_POLICY, META_EXCLUDED, REPORT_ONLY_KEY
from cspolicy.document import load_document
from cspolicy.nonce import nonce_source
from cspolicy.normalizer import (
    StructuralInputError,
    coerce_value,
    merge_values,
    resolve_directive,
    to_directive_name,
    to_prop_name,
)
from cspolicy.values import UNSET, DirectiveValue, Flag, Multi


def _expand(pair: Any) -> Iterable[tuple[Any, Any]]:
    """Turn one positional argument into (key, value) pairs."""
    if isinstance(pair, Policy):
        items = list(pair.directives())
        if pair._report_only is not None:
            items.append((REPORT_ONLY_KEY, pair._report_only))
        return items
    if isinstance(pair, Mapping):
        return list(pair.items())
    if isinstance(pair, tuple) and len(pair) == 2:
        return [pair]
    raise StructuralInputError(
        f"Expected a (key, value) pair, mapping, or Policy, got {type(pair).__name__}"
    )


def _report_only_flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise StructuralInputError(
            f"{REPORT_ONLY_KEY} must be a boolean, got {type(value).__name__}"
        )
    return value


class Policy:
    """Ordered set of CSP directives plus the report-only flag.

    Construction applies, in order: the strict default table (``default=True``),
    positional pairs, then keyword directives. A later write to the same
    directive replaces the earlier value. Calling a policy composes it with
    overrides and returns a new instance::

        base = Policy(default_src="'self'", img_src=["'self'"])
        page = base(img_src=["data:"], upgrade_insecure_requests=True)
        page.header_value()
        # "default-src 'self'; img-src 'self' data:; upgrade-insecure-requests"

    Public attribute names that are not methods read as directives, so an
    unset or misspelled name gives None instead of AttributeError and
    ``hasattr`` is always true for them.
    """

    def __init__(
        self,
        *pairs: Any,
        default: bool = False,
        report_only: bool | None = None,
        **directives: Any,
    ) -> None:
        object.__setattr__(self, "_directives", {})
        # None means "never set explicitly"; composition only overrides when set
        object.__setattr__(self, "_report_only", None)
        if default:
            self._apply(DEFAULT_POLICY.items())
        for pair in pairs:
            self._apply(_expand(pair))
        self._apply(directives.items())
        if report_only is not None:
            self._report_only = _report_only_flag(report_only)

    # ── constructors ────────────────────────────────────────────────────

    @classmethod
    def from_document(
        cls,
        source: str | os.PathLike,
        default: bool = False,
        report_only: bool | None = None,
    ) -> Policy:
        """Build a policy from a JSON/YAML file path or a raw JSON string."""
        document = load_document(source)
        return cls(*document.items(), default=default, report_only=report_only)

    @classmethod
    def from_header(cls, value: str, report_only: bool | None = None) -> Policy:
        """Build a policy from an existing header value."""
        pairs = [
            (name, list(tokens) if tokens else True)
            for name, tokens in serializer.parse_csp(value).items()
        ]
        return cls(*pairs, report_only=report_only)

    @classmethod
    def from_preset(cls, name: str) -> Policy:
        from cspolicy.config.presets import get_preset

        return get_preset(name)

    # ── mutation ────────────────────────────────────────────────────────

    def _apply(self, items: Iterable[tuple[Any, Any]], merge: bool = False) -> None:
        for key, value in items:
            if to_directive_name(key) == REPORT_ONLY_KEY:
                self._report_only = _report_only_flag(value)
                continue
            name = resolve_directive(key)
            new = coerce_value(value, key)
            if merge:
                new = merge_values(self._directives.get(name, UNSET), new)
            if new.unset:
                self._directives.pop(name, None)
            else:
                self._directives[name] = new

    @property
    def report_only(self) -> bool:
        return bool(self._report_only)

    @report_only.setter
    def report_only(self, value: bool) -> None:
        self._report_only = _report_only_flag(value)

    def __getitem__(self, key: Any) -> Any:
        """Return the directive's value, or None when it is not set."""
        return self._directives.get(to_directive_name(key), UNSET).value

    def get(self, key: Any, default: Any = None) -> Any:
        value = self[key]
        return default if value is None else value

    def __setitem__(self, key: Any, value: Any) -> None:
        self._apply([(key, value)])

    def __delitem__(self, key: Any) -> None:
        self._directives.pop(to_directive_name(key), None)

    def __contains__(self, key: Any) -> bool:
        return to_directive_name(key) in self._directives

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._directives))

    def __len__(self) -> int:
        return len(self._directives)

    def items(self) -> list[tuple[str, Any]]:
        return [(name, value.value) for name, value in self._directives.items()]

    def directives(self) -> list[tuple[str, DirectiveValue]]:
        """Return (name, normalized value) pairs in stored order."""
        return list(self._directives.items())

    # Attribute access uses identifier-style names: policy.img_src
    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or name == "report_only":
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            del self[name]

    def __dir__(self) -> list[str]:
        return list(super().__dir__()) + [to_prop_name(name) for name in self._directives]

    # ── composition ─────────────────────────────────────────────────────

    def copy(self) -> Policy:
        new = type(self)()
        new._directives = dict(self._directives)
        new._report_only = self._report_only
        return new

    def __call__(self, *pairs: Any, report_only: bool | None = None, **directives: Any) -> Policy:
        """Return a new policy with the overrides merged over this one.

        Source lists are concatenated, ``False`` unsets a directive, any other
        value replaces it. ``report_only`` is taken from the overrides only
        when they set it explicitly.
        """
        new = self.copy()
        for pair in pairs:
            new._apply(_expand(pair), merge=True)
        new._apply(directives.items(), merge=True)
        if report_only is not None:
            new._report_only = _report_only_flag(report_only)
        return new

    def merge(self, other: Policy) -> Policy:
        return self(other)

    def with_nonce(self, nonce: str, directives: Iterable[str] = ("script-src",)) -> Policy:
        """Return a new policy with ``'nonce-<nonce>'`` added to ``directives``."""
        source = nonce_source(nonce)
        new = self.copy()
        for key in directives:
            name = to_directive_name(key)
            current = new._directives.get(name, UNSET)
            tokens = [] if isinstance(current, Flag) else list(current.tokens)
            if source not in tokens:
                tokens.append(source)
            new._directives[name] = Multi(tuple(tokens))
        return new

    # ── rendering ───────────────────────────────────────────────────────

    def header_value(self) -> str:
        return serializer.header_value(self)

    def header(self) -> tuple[str, str]:
        return serializer.header(self)

    def meta(self, exclude: Iterable[str] = META_EXCLUDED) -> str:
        return serializer.meta(self, exclude)

    def as_dict(self) -> dict[str, str]:
        return serializer.as_dict(self)

    def __str__(self) -> str:
        return self.header_value()

    def __repr__(self) -> str:
        return f"<Policy report_only={self.report_only} {self.header_value()!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Policy):
            return NotImplemented
        return (
            list(self._directives.items()) == list(other._directives.items())
            and self.report_only == other.report_only
        )

    __hash__ = None  # type: ignore[assignment]
