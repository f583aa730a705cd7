"""Nonce token supplier for script/style source lists."""

from __future__ import annotations

import secrets


def generate_nonce(nbytes: int = 16) -> str:
    """Return a fresh URL-safe random nonce."""
    return secrets.token_urlsafe(nbytes)


def nonce_source(nonce: str) -> str:
    """Wrap ``nonce`` as a CSP source expression: ``'nonce-<value>'``."""
    return f"'nonce-{nonce}'"
