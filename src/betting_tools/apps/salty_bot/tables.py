"""SQLAlchemy ORM tables for the betting bot database.

Store one row per party with its current rating, and one row per settled
match referencing both parties.
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from betting_tools.apps.salty_bot.models import DEFAULT_RATING


class Base(DeclarativeBase):
    """Declarative base class for all betting bot ORM models."""


class PartyRow(Base):
    """A contestant and its current Elo rating.

    Attributes:
        id: Auto-incrementing primary key.
        name: Contestant name, unique and case-sensitive.
        rating: Current rating.

    """

    __tablename__ = "parties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, unique=True, index=True)
    rating: Mapped[int] = mapped_column(Integer, default=DEFAULT_RATING)


class SettledMatchRow(Base):
    """The outcome of one finished match.

    Attributes:
        id: Auto-incrementing primary key.
        timestamp: Epoch milliseconds when the result was recorded.
        outcome: ``Outcome`` value (``"1"``, ``"2"`` or ``"draw"``).
        first_party_id: Party in the first corner.
        second_party_id: Party in the second corner.

    """

    __tablename__ = "settled_matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, index=True)
    outcome: Mapped[str] = mapped_column(String)
    first_party_id: Mapped[int] = mapped_column(ForeignKey("parties.id"))
    second_party_id: Mapped[int] = mapped_column(ForeignKey("parties.id"))
