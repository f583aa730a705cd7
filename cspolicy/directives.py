"""Known CSP directives, meta-tag exclusions, and the strict default policy."""

from __future__ import annotations

import types

CSP_HEADER = "Content-Security-Policy"
CSP_REPORT_ONLY_HEADER = "Content-Security-Policy-Report-Only"

# Pseudo directive that toggles report-only mode; never stored as a directive
REPORT_ONLY_KEY = "report-only"

DIRECTIVES: frozenset[str] = frozenset({
    # Fetch directives
    "child-src",
    "connect-src",
    "default-src",
    "fenced-frame-src",
    "font-src",
    "frame-src",
    "img-src",
    "manifest-src",
    "media-src",
    "object-src",
    "prefetch-src",
    "script-src",
    "script-src-elem",
    "script-src-attr",
    "style-src",
    "style-src-elem",
    "style-src-attr",
    "worker-src",
    # Document directives
    "base-uri",
    "sandbox",
    # Navigation directives
    "form-action",
    "frame-ancestors",
    "navigate-to",
    # Reporting directives
    "report-uri",
    "report-to",
    # Other directives
    "upgrade-insecure-requests",
    "block-all-mixed-content",
    "require-trusted-types-for",
    "trusted-types",
    "require-sri-for",
    "plugin-types",
    "webrtc",
})

# Ignored by browsers when delivered through <meta http-equiv>
META_EXCLUDED: tuple[str, ...] = (
    "frame-ancestors",
    "report-uri",
    "report-to",
    "report-only",
    "sandbox",
)

DEFAULT_POLICY: types.MappingProxyType = types.MappingProxyType({
    "base-uri": "'none'",
    "default-src": "'self'",
    "frame-ancestors": "'none'",
    "object-src": "'none'",
    "report-to": "default",
    "script-src": "'strict-dynamic'",
})
