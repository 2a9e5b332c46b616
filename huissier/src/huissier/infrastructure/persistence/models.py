"""
SQLAlchemy models for Huissier persistence.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


class IdentityLinkModel(Base):
    """Discord account linked to one or more Solana wallets."""

    __tablename__ = "identity_links"

    discord_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    wallets: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total_balance: Mapped[Decimal] = mapped_column(
        DECIMAL(precision=38, scale=9), nullable=False
    )
    roles: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    verified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
