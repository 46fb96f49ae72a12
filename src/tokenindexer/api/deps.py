from __future__ import annotations

from typing import TYPE_CHECKING, AsyncGenerator

if TYPE_CHECKING:
    from tokenindexer.indexer.processor import TokenActivityProcessor

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tokenindexer.container import Container
from tokenindexer.parser.token.activities import ActivityNormalizer


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_normalizer(
    normalizer: ActivityNormalizer = Depends(Provide[Container.normalizer]),
) -> ActivityNormalizer:
    return normalizer


def build_processor(db: AsyncSession, normalizer: ActivityNormalizer) -> "TokenActivityProcessor":
    from tokenindexer.indexer.processor import TokenActivityProcessor

    return TokenActivityProcessor(db, normalizer)
