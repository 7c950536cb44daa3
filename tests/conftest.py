import os
import sys

import pytest

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import Settings
from encoding import URLCodec
from sites import SiteRegistry


@pytest.fixture
def settings():
    """Settings with the reference KNUE configuration, isolated from any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def registry(settings):
    return SiteRegistry(settings.sites)


@pytest.fixture
def codec(registry, settings):
    return URLCodec(registry, settings)
