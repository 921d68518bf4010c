"""Shared fixtures. Environment is set before any app module is imported."""

import asyncio
import copy
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="atelie-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["OPENAI_API_KEY"] = ""
os.environ["ALGOLIA_APP_ID"] = "testapp"
os.environ["ALGOLIA_API_KEY"] = "testkey"
os.environ["ALGOLIA_INDEX_NAME"] = "artworks"
os.environ["ANALYSIS_RETRY_DELAY"] = "0"
os.environ["ANALYSIS_MAX_RETRIES"] = "3"

import pytest
from app.database import engine
from app.models import Base


ANALYSIS_PAYLOAD = {
    "basicVisualProperties": {
        "dominantColors": ["red", "orange"],
        "secondaryColors": ["yellow"],
        "colorTemperature": "warm",
        "colorPalette": ["red", "orange", "yellow"],
    },
    "textureAnalysis": {
        "textureType": "impasto",
        "textureDescription": "Thick layered paint",
        "surfaceQuality": "rough",
    },
    "styleAndGenre": {
        "style": "Abstract",
        "genre": "Expressionism",
        "movement": "Abstract Expressionism",
    },
    "subjectMatter": {
        "primarySubject": "color fields",
        "secondarySubjects": ["movement"],
        "themes": ["energy"],
    },
    "mediumAndTechnique": {
        "medium": "oil",
        "technique": "palette knife",
        "materials": ["canvas"],
    },
    "composition": {
        "layout": "diagonal",
        "focalPoint": "center",
        "balance": "asymmetric",
    },
    "spaceAndDisplay": {
        "recommendedRoomTypes": ["living room"],
        "recommendedWallColor": ["white"],
        "lightingRecommendations": ["natural light"],
        "sizeRecommendations": "large",
    },
    "psychologicalImpact": {
        "mood": ["energetic"],
        "energyLevel": "high",
        "emotionalTone": "joyful",
    },
    "marketAnalysis": {
        "targetAudience": ["collectors"],
        "collectibility": "medium",
    },
    "tags": ["abstract", "warm", "bold"],
}

ARTWORK_PAYLOAD = {
    "objectID": "art-1",
    "title": "Sunburst",
    "studioName": "Studio Rojo",
    "imageUrls": ["https://img.example.com/art-1.jpg"],
    "price": 1200.0,
    "currency": "EUR",
    "dimensions": {"widthCm": 200, "heightCm": 150},
    "techniques": ["oil"],
    "year": 2021,
    "status": "available",
}


def build_analysis_payload(**overrides) -> dict:
    """Deep copy of the sample analysis with sub-record fields overridden.

    Keys are sub-record names; values are dicts merged into that sub-record.
    """
    payload = copy.deepcopy(ANALYSIS_PAYLOAD)
    for section, values in overrides.items():
        if isinstance(values, dict):
            payload[section].update(values)
        else:
            payload[section] = values
    return payload


def build_artwork_payload(**overrides) -> dict:
    payload = copy.deepcopy(ARTWORK_PAYLOAD)
    payload.update(overrides)
    return payload


@pytest.fixture
def analysis_payload():
    return build_analysis_payload()


@pytest.fixture
def artwork_payload():
    return build_artwork_payload()


@pytest.fixture
def make_analysis_payload():
    return build_analysis_payload


@pytest.fixture
def make_artwork_payload():
    return build_artwork_payload


@pytest.fixture
def db_tables():
    """Fresh tables for one test."""
    async def reset():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(reset())
    yield
