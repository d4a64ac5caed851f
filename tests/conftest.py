"""Shared test fixtures for the facetgraph test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from facetgraph.engine import OnboardingEngine
from facetgraph.facets.defaults import default_facet_registry
from facetgraph.facets.registry import FacetRegistry
from facetgraph.missions.catalog import MissionCatalog
from facetgraph.missions.defaults import default_mission_catalog


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "app_name = 'dev'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and TOML source before and after each test.

    This ensures test isolation for configuration tests.
    """
    from facetgraph.config import get_settings
    from facetgraph.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def registry() -> FacetRegistry:
    """Registry for the default facet catalog."""
    return default_facet_registry()


@pytest.fixture
def missions(registry: FacetRegistry) -> MissionCatalog:
    """Catalog of the default missions."""
    return default_mission_catalog(registry)


@pytest.fixture
def engine(registry: FacetRegistry, missions: MissionCatalog) -> OnboardingEngine:
    """Engine over the default catalogs with default configuration."""
    return OnboardingEngine(registry, missions)
