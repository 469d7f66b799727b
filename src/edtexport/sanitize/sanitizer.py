"""Redacts personal data from a raw timetable export.

Order matters:
  1. Large subtrees (student and guardian lists) are cut at the text level,
     before parsing, so the parser never sees bulk data bound for deletion.
  2. The remaining document is parsed (defused; upstream XML is untrusted).
  3. Personal attributes are removed from staff elements.
  4. The tree is pretty-printed.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET

import defusedxml.ElementTree as _safe_ET
from defusedxml import DefusedXmlException

from edtexport.errors.exceptions import SanitizeError
from edtexport.sanitize.rules import DEFAULT_RULES, RedactionRules, attribute_matches

logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
_INDENT = "  "


class Sanitizer:
    """Applies a fixed set of redaction rules to export text."""

    def __init__(self, rules: RedactionRules | None = None) -> None:
        self._rules = rules or DEFAULT_RULES
        self._subtree_patterns = [
            (name, _subtree_pattern(name)) for name in self._rules.subtrees
        ]

    @property
    def rules(self) -> RedactionRules:
        return self._rules

    def sanitize(self, raw: str) -> str:
        """Return the redacted, pretty-printed document."""
        text = self.strip_subtrees(raw)
        root = self._parse(text)
        removed = self.strip_attributes(root)
        logger.debug("Removed %d personal attributes", removed)
        return self._format(root)

    def strip_subtrees(self, text: str) -> str:
        for name, pattern in self._subtree_patterns:
            text, count = pattern.subn(f"<{name}/>", text)
            if count:
                logger.debug("Replaced %d <%s> subtree(s)", count, name)
        return text

    def strip_attributes(self, root: ET.Element) -> int:
        """Remove listed attributes in place. Returns how many were removed."""
        removed = 0
        for rule in self._rules.attribute_rules:
            for parent in root.iter(rule.parent):
                for child in parent:
                    if child.tag != rule.child:
                        continue
                    doomed = [
                        name
                        for name in child.attrib
                        if any(attribute_matches(r, name) for r in rule.attributes)
                    ]
                    for name in doomed:
                        del child.attrib[name]
                    removed += len(doomed)
        return removed

    @staticmethod
    def _parse(text: str) -> ET.Element:
        try:
            return _safe_ET.fromstring(text)
        except (ET.ParseError, DefusedXmlException) as e:
            raise SanitizeError(f"Export is not well-formed XML: {e}") from e

    @staticmethod
    def _format(root: ET.Element) -> str:
        ET.indent(root, space=_INDENT)
        return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def sanitize_xml(raw: str, rules: RedactionRules | None = None) -> str:
    """Sanitize export text with the given (or default) rules."""
    return Sanitizer(rules).sanitize(raw)


def _subtree_pattern(name: str) -> re.Pattern[str]:
    """Match ``<name .../>`` or ``<name ...>...</name>``, attributes included."""
    tag = re.escape(name)
    return re.compile(
        rf"<{tag}(?:\s[^>]*?)?(?:/>|>.*?</{tag}\s*>)",
        re.DOTALL,
    )
