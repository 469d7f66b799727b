"""What gets redacted from the timetable export."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Trailing marker on an attribute entry that turns it into a prefix match
PREFIX_MARKER = "X"


class AttributeRule(BaseModel):
    """Attributes to strip from every ``child`` element directly under a ``parent``."""

    parent: str
    child: str
    attributes: list[str] = Field(default_factory=list)


class RedactionRules(BaseModel):
    subtrees: list[str] = Field(default_factory=list)
    attribute_rules: list[AttributeRule] = Field(default_factory=list)


_PERSON_ATTRIBUTES = [
    "DateNaissance",
    "AdresseX",
    "CodePostal",
    "Ville",
    "Pays",
    "Email",
    "TelephoneFixe",
    "TelephonePortable",
    "NumeroINSEE",
]

DEFAULT_RULES = RedactionRules(
    subtrees=["Eleves", "Responsables"],
    attribute_rules=[
        AttributeRule(parent="Professeurs", child="Professeur", attributes=_PERSON_ATTRIBUTES),
        AttributeRule(parent="Personnels", child="Personnel", attributes=_PERSON_ATTRIBUTES),
    ],
)


def attribute_matches(rule_name: str, attribute: str) -> bool:
    """Exact match, except ``AdresseX`` which matches every ``Adresse*`` attribute."""
    if rule_name.endswith(PREFIX_MARKER):
        return attribute.startswith(rule_name[: -len(PREFIX_MARKER)])
    return attribute == rule_name
