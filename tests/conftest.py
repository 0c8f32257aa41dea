"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

from tests.factories import ProductFactory


# ===================
# CATALOG DATA
# ===================

@pytest.fixture
def sample_products() -> list:
    """
    Small furniture catalog.

    Positions:
        0: Blå stol (1001, Möbler / Stolar)
        1: Röd stol (1002, Möbler / Stolar)
        2: Blå soffa (1010, Möbler / Soffor)
        3: Skrivbord (2001, Kontor / Bord)
        4: Blå lampa (no article number, Belysning / Taklampor)
    """
    return [
        ProductFactory.create(name="Blå stol", identifier="1001",
                              parent_category="Möbler", sub_category="Stolar", color="Blå"),
        ProductFactory.create(name="Röd stol", identifier="1002",
                              parent_category="Möbler", sub_category="Stolar", color="Röd"),
        ProductFactory.create(name="Blå soffa", identifier="1010",
                              parent_category="Möbler", sub_category="Soffor", color="Blå"),
        ProductFactory.create(name="Skrivbord", identifier="2001",
                              parent_category="Kontor", sub_category="Bord"),
        ProductFactory.create(name="Blå lampa", identifier="",
                              parent_category="Belysning", sub_category="Taklampor"),
    ]


@pytest.fixture
def raw_rows() -> list:
    """Raw rows with mixed-case headers and one unknown column."""
    return [
        {"NAMN": "Blå stol", "artikelnummer": "1001", "Färg ": "Blå",
         "Kategori(parent)": "Möbler", "kategori (sub)": "Stolar", "Lagerplats": "A1"},
        {"NAMN": "Röd stol", "artikelnummer": "1002", "Färg ": "Röd",
         "Kategori(parent)": "Möbler", "kategori (sub)": "Stolar", "Lagerplats": "A2"},
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client with an empty session store.

    Usage:
        def test_endpoint(test_client):
            response = test_client.post("/api/catalog/sessions")
            assert response.status_code == 201
    """
    from fastapi.testclient import TestClient
    from main import app
    from services import session_store

    session_store.clear_sessions()
    with TestClient(app) as client:
        yield client
    session_store.clear_sessions()
