import pytest

from edtexport.config.schema import ExportConfig


@pytest.fixture
def export_config(tmp_path):
    """Config with an isolated cache directory and a placeholder upstream."""
    return ExportConfig(
        url_template="https://edt.test/export.xml?token={token}",
        token="secret-token",
        cache_dir=tmp_path / "cache",
        expiration_seconds=1800,
    )


@pytest.fixture
def raw_export():
    """A small export carrying every kind of personal data that gets redacted."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<EDT Version="2024">
  <Eleves Nombre="2">
    <Eleve Nom="Martin" Prenom="Lea" DateNaissance="2008-03-01"/>
    <Eleve Nom="Durand" Prenom="Hugo" DateNaissance="2008-07-12"/>
  </Eleves>
  <Responsables>
    <Responsable Nom="Martin" Email="parent@example.fr"/>
  </Responsables>
  <Professeurs>
    <Professeur Ident="P1" Nom="Bernard" DateNaissance="1975-02-03"
                Adresse1="1 rue des Lilas" Adresse2="Bat B" AdresseCP="75001"
                CodePostal="75001" Ville="Paris" Email="b@example.fr"/>
    <Professeur Ident="P2" Nom="Petit"/>
  </Professeurs>
  <Personnels>
    <Personnel Ident="S1" Nom="Roux" TelephonePortable="0600000000" NumeroINSEE="1234"/>
  </Personnels>
  <Salles>
    <Salle Nom="B12" Adresse="Batiment B"/>
  </Salles>
</EDT>
"""
