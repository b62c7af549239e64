"""
Pytest configuration and fixtures for Feat Explorer tests.
"""

import os
import sys
import json
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from feat_explorer.core.catalog.catalog import Catalog
from feat_explorer.core.config import Settings
from feat_explorer.core.filtering.state import FilterState
from feat_explorer.main import create_app
from feat_explorer.services.feat_service import FeatService


SAMPLE_RECORDS = [
    {"id": 1, "name": "Heavy Blows", "category": "Class", "class": "Fighter", "group": "Feature",
     "feats": [{"tier": "Adventurer", "description": "\"Deal extra damage.\""},
               {"tier": "Champion", "description": "More damage."}]},
    {"id": 2, "name": "Cleave", "category": "Class", "class": "Fighter, Barbarian", "group": "Talent",
     "parentTrait": "Weapon Mastery", "tag": "Melee, Attack",
     "feats": [{"tier": "Epic", "description": "Cleave twice."},
               {"tier": "Adventurer", "description": "Cleave once."}]},
    {"id": 3, "name": "Parry", "category": "Class", "class": ["Fighter"], "group": "Talent",
     "parentTrait": "Weapon Mastery", "feats": [{"tier": "Champion", "description": "Parry."}]},
    {"id": 4, "name": "Riposte", "category": "Class", "class": "Fighter", "group": "Talent",
     "parentTrait": "Weapon Mastery", "feats": [{"tier": "Epic", "description": "Riposte."}]},
    {"id": 5, "name": "Magic Missile", "category": "Class", "class": "Wizard", "group": "Spell",
     "spellLevel": "1st", "feats": [{"tier": "Adventurer", "description": "Missiles."}]},
    {"id": 6, "name": "Fireball", "category": "Class", "class": "Wizard", "group": "Spell",
     "spellLevel": "3rd", "feats": [{"tier": "Champion", "description": "Boom."},
                                    {"tier": "Epic", "description": "Bigger boom."}]},
    {"id": 7, "name": "Stonecunning", "category": "Ancestry", "ancestry": "Dwarf", "group": "Racial Power",
     "feats": [{"tier": "Adventurer", "description": "Stone sense."}]},
    {"id": 8, "name": "Orcish Fury", "category": "Ancestry", "ancestry": "Dwarf, Orc",
     "featureLevel": "5th", "feats": [{"tier": "Champion", "description": "Rage."}]},
    {"id": 9, "name": "Toughness", "category": "General", "tag": "Defense, Hit Points"},
    {"id": 10, "name": "Evasive Step", "category": "Class", "class": "Rogue", "featureLevel": "5th",
     "feats": [{"tier": "Adventurer", "description": "Step aside."}]},
    {"id": 11, "name": "Odd Record", "category": "Class", "class": {"unexpected": "shape"},
     "feats": [{"tier": "Adventurer", "description": "Never matches a class."}]},
]

SCENARIO_RECORDS = [
    {"id": 1, "category": "Class", "class": "Fighter", "tiers": [{"tier": "Epic", "description": "X"}]},
    {"id": 2, "category": "Ancestry", "ancestry": "Dwarf", "tiers": [{"tier": "Adventurer", "description": "Y"}]},
]


@pytest.fixture
def sample_records():
    return json.loads(json.dumps(SAMPLE_RECORDS))


@pytest.fixture
def catalog(sample_records):
    """Fixture for the sample catalog."""
    return Catalog.from_records(sample_records)


@pytest.fixture
def scenario_catalog():
    return Catalog.from_records(json.loads(json.dumps(SCENARIO_RECORDS)))


@pytest.fixture
def state():
    return FilterState()


@pytest.fixture
def test_environment():
    """Fixture for setting up isolated test environment."""
    test_dir = tempfile.mkdtemp(prefix="feat_explorer_test_")
    original_dir = os.getcwd()

    try:
        os.chdir(test_dir)
        yield test_dir
    finally:
        os.chdir(original_dir)
        shutil.rmtree(test_dir, ignore_errors=True)


@pytest.fixture
def catalog_file(test_environment, sample_records):
    """Fixture for a catalog JSON file in the test directory."""
    path = os.path.join(test_environment, "feats.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_records, f)
    return path


@pytest.fixture
def test_settings(test_environment, catalog_file):
    """Fixture for test settings."""
    return Settings(
        environment="testing",
        debug=True,
        catalog_path=catalog_file,
        log_level="DEBUG",
        log_dir=os.path.join(test_environment, "logs"),
    )


@pytest.fixture
def feat_service(test_settings):
    """Fixture for a FeatService with the sample catalog loaded."""
    service = FeatService(test_settings)
    service.load_catalog()
    return service


@pytest.fixture
def test_client(test_settings):
    """Fixture for FastAPI test client; the catalog loads on startup."""
    with TestClient(create_app(test_settings)) as client:
        yield client
