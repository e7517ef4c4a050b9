"""Async repository for party ratings and settled matches.

Wrap SQLAlchemy async engine and session management for the betting bot.
Reads degrade to defaults instead of failing, because a missing rating is
indistinguishable from a new contestant. The repository is
database-agnostic: swap SQLite for PostgreSQL by changing the URL.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from betting_tools.apps.salty_bot.exceptions import StoreError
from betting_tools.apps.salty_bot.models import Outcome, Party, Rating
from betting_tools.apps.salty_bot.tables import Base, PartyRow, SettledMatchRow
from betting_tools.core.timestamps import now_ms

logger = logging.getLogger(__name__)


class PartyRepository:
    """Async store for party ratings and the settlement history.

    Args:
        db_url: SQLAlchemy async connection string
            (e.g. ``sqlite+aiosqlite:///salty_bets.db``).

    """

    def __init__(self, db_url: str) -> None:
        """Initialize the repository with an async database engine.

        Args:
            db_url: SQLAlchemy async connection string.

        """
        self._engine: AsyncEngine = create_async_engine(db_url, echo=False)
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )

    async def init_db(self) -> None:
        """Create all tables if they do not already exist.

        Idempotent, safe to call on every startup.
        """
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialised")

    async def get_party(self, name: str) -> Party:
        """Return the stored party, or a new one at the default rating.

        Lookup errors are logged and treated as "not stored".

        Args:
            name: Contestant name (exact, case-sensitive).

        Returns:
            The party with its current rating.

        """
        stmt = select(PartyRow.rating).where(PartyRow.name == name)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rating = result.scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception("Rating lookup failed for %r, using default", name)
            rating = None

        if rating is None:
            return Party(name)
        return Party(name, Rating(rating))

    async def put_party(self, party: Party) -> None:
        """Insert or replace a party's rating.

        Args:
            party: Party to store; the name is the key.

        Raises:
            StoreError: If the write fails.

        """
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(select(PartyRow).where(PartyRow.name == party.name))
                row = result.scalar_one_or_none()
                if row is None:
                    session.add(PartyRow(name=party.name, rating=party.rating.value))
                else:
                    row.rating = party.rating.value
        except SQLAlchemyError as exc:
            raise StoreError("put_party", party.name, str(exc)) from exc
        logger.debug("Stored %s at %d", party.name, party.rating.value)

    async def put_settled_match(self, outcome: Outcome, first_name: str, second_name: str) -> None:
        """Append a settlement record for a finished match.

        If either party has never been stored, nothing is written.

        Args:
            outcome: How the match ended.
            first_name: Name of the first contestant.
            second_name: Name of the second contestant.

        Raises:
            StoreError: If the write fails.

        """
        entity = f"{first_name} vs {second_name}"
        stmt = select(PartyRow.name, PartyRow.id).where(PartyRow.name.in_([first_name, second_name]))
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(stmt)
                ids = {name: party_id for name, party_id in result.all()}
                if first_name not in ids or second_name not in ids:
                    logger.warning("Not recording %s: unknown party", entity)
                    return
                session.add(
                    SettledMatchRow(
                        timestamp=now_ms(),
                        outcome=outcome.value,
                        first_party_id=ids[first_name],
                        second_party_id=ids[second_name],
                    )
                )
        except SQLAlchemyError as exc:
            raise StoreError("put_settled_match", entity, str(exc)) from exc

    async def list_parties(self, limit: int = 20) -> list[Party]:
        """Return the highest-rated parties.

        Args:
            limit: Maximum number of parties to return.

        Returns:
            Parties ordered by rating descending, then name.

        """
        stmt = select(PartyRow).order_by(PartyRow.rating.desc(), PartyRow.name).limit(limit)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [Party(row.name, Rating(row.rating)) for row in result.scalars().all()]

    async def count_settled_matches(self) -> int:
        """Return the number of settlement records.

        Returns:
            Integer count of all rows in the ``settled_matches`` table.

        """
        stmt = select(func.count()).select_from(SettledMatchRow)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def close(self) -> None:
        """Dispose the async engine and release all connections."""
        await self._engine.dispose()
        logger.info("Database engine disposed")
