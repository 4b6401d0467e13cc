"""Dependency injection container for the species catalog application."""

from dependency_injector import containers, providers
from fastapi.templating import Jinja2Templates
from jinja2 import StrictUndefined

from speciescatalog.catalog.species import SpeciesService
from speciescatalog.catalog.store import CatalogStore
from speciescatalog.charts.speed_chart import AnimalSpeedChart
from speciescatalog.chat.providers import OpenAICompletionProvider, create_completion_client
from speciescatalog.chat.service import SpeciesChatService
from speciescatalog.comments.manager import SpeciesCommentService
from speciescatalog.database.core import DatabaseService
from speciescatalog.notifications.refresh import RefreshBroadcaster
from speciescatalog.system.path_resolver import PathResolver
from speciescatalog.web.core.config import get_config


def create_jinja2_templates(resolver: PathResolver) -> Jinja2Templates:
    """Create Jinja2Templates with strict undefined handling.

    Undefined variables raise errors instead of rendering as empty strings.
    """
    templates = Jinja2Templates(directory=str(resolver.get_templates_dir()))
    templates.env.undefined = StrictUndefined
    return templates


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Services holding process-wide state (database engine, in-flight comment
    requests, websocket clients) are singletons; everything else is cheap
    to build and shared the same way.
    """

    # Core infrastructure
    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    templates = providers.Singleton(
        create_jinja2_templates,
        resolver=path_resolver,
    )

    database_path = providers.Factory(
        lambda resolver: resolver.get_database_path(),
        resolver=path_resolver,
    )

    core_database = providers.Singleton(
        DatabaseService,
        db_path=database_path,
    )

    # Catalog data
    catalog_store = providers.Singleton(
        CatalogStore,
        database_service=core_database,
    )

    species_service = providers.Singleton(
        SpeciesService,
        store=catalog_store,
    )

    comment_service = providers.Singleton(
        SpeciesCommentService,
        store=catalog_store,
    )

    # Chat assistant
    completion_client = providers.Singleton(create_completion_client)

    completion_provider = providers.Singleton(
        OpenAICompletionProvider,
        client=completion_client,
        config=providers.Factory(lambda c: c.chat, c=config),
    )

    chat_service = providers.Singleton(
        SpeciesChatService,
        provider=completion_provider,
    )

    # Charts
    speed_chart = providers.Singleton(
        AnimalSpeedChart,
        csv_path=providers.Factory(
            lambda resolver: resolver.get_animal_speeds_csv_path(),
            resolver=path_resolver,
        ),
        config=providers.Factory(lambda c: c.chart, c=config),
    )

    # Live refresh of open pages
    refresh_broadcaster = providers.Singleton(
        RefreshBroadcaster,
        active_websockets=providers.Factory(set),
    )
