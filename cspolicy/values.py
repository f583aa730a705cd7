"""Tagged representation of a normalized directive value."""

from __future__ import annotations

from dataclasses import dataclass


class DirectiveValue:
    """Base for the stored value variants."""

    @property
    def tokens(self) -> tuple[str, ...]:
        return ()

    @property
    def unset(self) -> bool:
        return not self.tokens

    @property
    def value(self):
        """Plain Python view of the value (str, tuple, bool, or None)."""
        return None


@dataclass(frozen=True)
class Unset(DirectiveValue):
    """Directive absent."""


@dataclass(frozen=True)
class Single(DirectiveValue):
    token: str

    @property
    def tokens(self) -> tuple[str, ...]:
        return (self.token,) if self.token.strip() else ()

    @property
    def value(self) -> str:
        return self.token


@dataclass(frozen=True)
class Multi(DirectiveValue):
    """Ordered source list. Duplicates are kept as given."""

    tokens: tuple[str, ...] = ()

    @property
    def value(self) -> tuple[str, ...]:
        return self.tokens


@dataclass(frozen=True)
class Flag(DirectiveValue):
    """Value-less directive such as ``upgrade-insecure-requests``."""

    enabled: bool

    @property
    def unset(self) -> bool:
        return not self.enabled

    @property
    def value(self) -> bool:
        return self.enabled


UNSET = Unset()
