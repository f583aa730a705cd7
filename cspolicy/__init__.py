"""
cspolicy - Content-Security-Policy directive sets and header rendering
"""

__version__ = "0.1.0"

from cspolicy.directives import (
    CSP_HEADER,
    CSP_REPORT_ONLY_HEADER,
    DEFAULT_POLICY,
    DIRECTIVES,
    META_EXCLUDED,
)
from cspolicy.document import PolicyDocumentError, load_document
from cspolicy.nonce import generate_nonce, nonce_source
from cspolicy.normalizer import (
    StructuralInputError,
    coerce_value,
    meta_excluded,
    resolve_directive,
    to_directive_name,
    to_prop_name,
)
from cspolicy.policy import Policy
from cspolicy.serializer import as_dict, header, header_value, meta, parse_csp

__all__ = [
    "CSP_HEADER",
    "CSP_REPORT_ONLY_HEADER",
    "DEFAULT_POLICY",
    "DIRECTIVES",
    "META_EXCLUDED",
    "Policy",
    "PolicyDocumentError",
    "StructuralInputError",
    "as_dict",
    "coerce_value",
    "generate_nonce",
    "header",
    "header_value",
    "load_document",
    "meta",
    "meta_excluded",
    "nonce_source",
    "parse_csp",
    "resolve_directive",
    "to_directive_name",
    "to_prop_name",
]
