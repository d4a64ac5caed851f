"""Bootstrap module for easy facetgraph setup.

Builds the full onboarding stack from config, primarily for notebooks,
chat adapters and quick testing. Handles:
- Loading configuration from TOML files
- Configuring structured logging
- Building the default facet registry and mission catalog
- Creating the OnboardingEngine and an in-memory OnboardingService

Example usage:

    from facetgraph.bootstrap import bootstrap

    service = bootstrap()

    result = await service.handle_turn(
        "subject-1",
        updates=[FacetUpdate(facet_id="location", raw_value="Seattle, WA")],
    )
"""

from facetgraph.config import Settings, get_settings
from facetgraph.engine import OnboardingEngine
from facetgraph.facets.defaults import default_facet_registry
from facetgraph.missions.defaults import default_mission_catalog
from facetgraph.mutex import SubjectMutex
from facetgraph.observability.logging import get_logger, setup_logging
from facetgraph.profile.store import ProfileStore
from facetgraph.profile.stores import InMemoryProfileStore
from facetgraph.service import OnboardingService

logger = get_logger(__name__)


def build_engine(settings: Settings | None = None) -> OnboardingEngine:
    """Build an OnboardingEngine over the default catalogs.

    Args:
        settings: Settings to use (default: loaded from config)
    """
    settings = settings or get_settings()
    registry = default_facet_registry()
    missions = default_mission_catalog(registry)
    return OnboardingEngine(registry, missions, config=settings.engine)


def bootstrap(
    settings: Settings | None = None,
    store: ProfileStore | None = None,
    log_level: str | None = None,
) -> OnboardingService:
    """Bootstrap a fully-configured OnboardingService.

    Args:
        settings: Settings to use (default: loaded from config)
        store: Profile store (default: in-memory)
        log_level: Override the configured log level

    Returns:
        OnboardingService ready to handle turns
    """
    settings = settings or get_settings()
    logging_config = settings.observability.logging
    setup_logging(
        level=log_level or logging_config.level,
        format=logging_config.format,
        redact_pii=logging_config.redact_pii,
    )

    engine = build_engine(settings)
    service = OnboardingService(
        engine,
        store or InMemoryProfileStore(),
        SubjectMutex(blocking_timeout=settings.service.subject_lock_timeout),
    )

    logger.info(
        "facetgraph_bootstrapped",
        app_name=settings.app_name,
        facet_count=len(engine.registry),
        mission_ids=list(engine.missions.ids),
    )
    return service
