"""Shared fixtures: a source document, its prior revision and a translation."""

from pathlib import Path

import pytest


PRIOR_SOURCE = b"""# document {version="4_18"}

Introduction.

## first heading {#first}

Old explanation.

## second heading {#second}

Unchanged explanation.
"""

FRENCH_SOURCE = """# document {version="4_18"}

Introduction.

## premier titre {#first translated="4_18"}

Ancienne explication.

## deuxième rubrique {#second translated="4_18"}

Explication inchangée.
""".encode("utf-8")

FRENCH_FLAGGED = """# document {version="4_19"}

Introduction.

## premier titre {#first translated="4_18"}

Ancienne explication.

## deuxième rubrique {#second translated="4_19"}

Explication inchangée.
""".encode("utf-8")


@pytest.fixture
def prior_source() -> bytes:
    return PRIOR_SOURCE


@pytest.fixture
def current_source() -> bytes:
    """The prior revision with the first section edited and the version bumped."""
    return PRIOR_SOURCE.replace(b"Old", b"New").replace(b'version="4_18"', b'version="4_19"')


@pytest.fixture
def french_source() -> bytes:
    return FRENCH_SOURCE


@pytest.fixture
def french_flagged() -> bytes:
    return FRENCH_FLAGGED


@pytest.fixture
def docs_tree(tmp_path: Path, prior_source: bytes, current_source: bytes, french_source: bytes):
    """
    A docs directory with the current source, a French translation and the
    prior revision stored elsewhere.

    Returns (document_path, prior_path, french_path).
    """
    docs = tmp_path / "docs"
    docs.mkdir()
    document = docs / "userguide.markdown"
    document.write_bytes(current_source)

    french = docs / "fr" / "userguide.markdown"
    french.parent.mkdir()
    french.write_bytes(french_source)

    prior_dir = tmp_path / "prior"
    prior_dir.mkdir()
    prior = prior_dir / "userguide.markdown"
    prior.write_bytes(prior_source)
    return document, prior, french
