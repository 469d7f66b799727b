"""Sanitizer — subtree and attribute redaction."""

from edtexport.sanitize.rules import DEFAULT_RULES, AttributeRule, RedactionRules
from edtexport.sanitize.sanitizer import Sanitizer, sanitize_xml

__all__ = [
    "AttributeRule",
    "DEFAULT_RULES",
    "RedactionRules",
    "Sanitizer",
    "sanitize_xml",
]
