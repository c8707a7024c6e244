"""Pytest configuration for all tests."""

import logging

import pytest

from save_codec.application.codec_service import SaveCodecService

RPGMV_HEADER = b"RPGMV\x00\x00\x00\x00\x03\x01\x00\x00\x00\x00\x00"


@pytest.fixture
def sample_save():
    """A small RPG-style save document."""
    return {
        "gold": 2500,
        "party": [
            {"id": 1, "name": "Alex", "level": 10, "hp": 150, "alive": True},
            {"id": 2, "name": "Lina", "level": 9, "hp": 120, "alive": False},
        ],
        "flags": {"MET_HARUKA": True, "secret": None},
        "playtime": 3600.5,
        "title": "Café ☕",
    }


@pytest.fixture
def service():
    return SaveCodecService()


@pytest.fixture
def rpgmv_header():
    return RPGMV_HEADER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """CLI runs attach handlers bound to captured streams; drop them between tests."""
    yield
    logger = logging.getLogger("save_codec")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
