"""Tests for attribute matching rules."""

from edtexport.sanitize.rules import DEFAULT_RULES, attribute_matches


class TestAttributeMatches:
    def test_exact_match(self):
        assert attribute_matches("DateNaissance", "DateNaissance")

    def test_exact_rule_does_not_prefix_match(self):
        assert not attribute_matches("Ville", "VilleNaissance")

    def test_marker_rule_matches_prefix(self):
        assert attribute_matches("AdresseX", "Adresse1")
        assert attribute_matches("AdresseX", "AdresseCP")

    def test_marker_rule_matches_base_name(self):
        assert attribute_matches("AdresseX", "Adresse")

    def test_marker_rule_rejects_other_names(self):
        assert not attribute_matches("AdresseX", "Email")

    def test_case_sensitive(self):
        assert not attribute_matches("AdresseX", "adresse1")


class TestDefaultRules:
    def test_subtrees(self):
        assert DEFAULT_RULES.subtrees == ["Eleves", "Responsables"]

    def test_node_pairs(self):
        pairs = [(r.parent, r.child) for r in DEFAULT_RULES.attribute_rules]
        assert pairs == [("Professeurs", "Professeur"), ("Personnels", "Personnel")]

    def test_birth_date_and_address_listed(self):
        for rule in DEFAULT_RULES.attribute_rules:
            assert "DateNaissance" in rule.attributes
            assert "AdresseX" in rule.attributes
