from dependency_injector import containers, providers

from tokenindexer.config import Settings
from tokenindexer.db.session import build_engine, build_session_factory
from tokenindexer.parser.token.activities import ActivityNormalizer


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["tokenindexer.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    # Stateless; one instance is shared by every request.
    normalizer = providers.Singleton(ActivityNormalizer)
