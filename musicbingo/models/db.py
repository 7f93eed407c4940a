"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class GameDB(Base):
    """
    A bingo game stored in the database.

    Owns its cards; deleting a game deletes its cards.
    """

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    card_count: Mapped[int] = mapped_column(Integer)
    artists: Mapped[list[str]] = mapped_column(JSON, default=list)
    has_marker: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[str] = mapped_column(String(50), default="created")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    cards: Mapped[list["BingoCardDB"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="BingoCardDB.card_number",
    )

    def __repr__(self) -> str:
        return f"<GameDB(id={self.id}, name={self.name})>"


class BingoCardDB(Base):
    """
    One generated card.

    The grid is stored as clean artist names; the marked cell, if any,
    is recorded by index.
    """

    __tablename__ = "bingo_cards"
    __table_args__ = (UniqueConstraint("game_id", "card_number", name="uq_game_card_number"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id", ondelete="CASCADE"), index=True
    )
    card_number: Mapped[int] = mapped_column(Integer)
    grid: Mapped[list[str]] = mapped_column(JSON, default=list)
    marker_position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    game: Mapped["GameDB"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<BingoCardDB(game_id={self.game_id}, card_number={self.card_number})>"
