"""
Identity linkage repository implementation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from huissier.domain.entities.identity_link import IdentityLink
from huissier.domain.exceptions import (
    LedgerError,
    LinkageConflictError,
    ValidationError,
)
from huissier.domain.repositories.i_linkage_repository import ILinkageRepository
from huissier.infrastructure.persistence.database import Database
from huissier.infrastructure.persistence.models import IdentityLinkModel


class LinkageRepository(ILinkageRepository):
    """
    SQLAlchemy implementation of the account ledger.

    Every call runs in its own short transaction so a write either
    commits completely or not at all, even if the request is abandoned.

    Concurrency strategy:
    - create: INSERT, duplicate primary key means another request won
    - replace: UPDATE ... WHERE version = expected, zero rows means
      another request won
    Either case raises LinkageConflictError and the caller re-reads.
    """

    def __init__(self, database: Database):
        """
        Initialize repository with database.

        Args:
            database: Shared database connection manager
        """
        self.database = database

    async def get_linkage(self, discord_id: str) -> Optional[IdentityLink]:
        """
        Get linkage by Discord ID.

        Args:
            discord_id: Discord user ID

        Returns:
            IdentityLink if found, None otherwise

        Raises:
            LedgerError: If the database is unavailable
        """
        try:
            async with self.database.session() as session:
                stmt = select(IdentityLinkModel).where(
                    IdentityLinkModel.discord_id == discord_id
                )
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
                return self._to_entity(model) if model else None

        except (SQLAlchemyError, OSError) as e:
            raise LedgerError("read", str(e)) from e

    async def upsert_linkage(
        self,
        discord_id: str,
        new_wallet: str,
        resolved_wallets: List[str],
        total_balance: Decimal,
        roles: List[str],
        expected_version: Optional[int] = None,
    ) -> IdentityLink:
        """
        Atomically create or replace linkage (compare-and-swap).

        Args:
            discord_id: Discord user ID
            new_wallet: Wallet submitted in this verification
            resolved_wallets: Full wallet list to store
            total_balance: Aggregated balance
            roles: Roles derived from total_balance
            expected_version: Version read before the write, None if absent

        Returns:
            Stored IdentityLink

        Raises:
            ValidationError: If wallet list is inconsistent
            LinkageConflictError: If the linkage changed since it was read
            LedgerError: If the database is unavailable
        """
        if new_wallet not in resolved_wallets:
            raise ValidationError(
                field="resolved_wallets",
                reason="must contain the submitted wallet",
            )
        if len(set(resolved_wallets)) != len(resolved_wallets):
            raise ValidationError(
                field="resolved_wallets",
                reason="must not contain duplicates",
            )

        now = datetime.now(timezone.utc)

        try:
            async with self.database.session() as session:
                if expected_version is None:
                    model = IdentityLinkModel(
                        discord_id=discord_id,
                        wallets=list(resolved_wallets),
                        total_balance=total_balance,
                        roles=list(roles),
                        verified_at=now,
                        version=1,
                        created_at=now,
                    )
                    session.add(model)
                    await session.flush()
                    return self._to_entity(model)

                stmt = (
                    update(IdentityLinkModel)
                    .where(
                        IdentityLinkModel.discord_id == discord_id,
                        IdentityLinkModel.version == expected_version,
                    )
                    .values(
                        wallets=list(resolved_wallets),
                        total_balance=total_balance,
                        roles=list(roles),
                        verified_at=now,
                        version=expected_version + 1,
                    )
                    .execution_options(synchronize_session=False)
                )
                result = await session.execute(stmt)

                if result.rowcount == 0:
                    raise LinkageConflictError(discord_id, expected_version)

                stored = await session.execute(
                    select(IdentityLinkModel).where(
                        IdentityLinkModel.discord_id == discord_id
                    )
                )
                return self._to_entity(stored.scalar_one())

        except IntegrityError as e:
            raise LinkageConflictError(discord_id, expected_version) from e
        except (SQLAlchemyError, OSError) as e:
            raise LedgerError("write", str(e)) from e

    def _to_entity(self, model: IdentityLinkModel) -> IdentityLink:
        """
        Convert IdentityLinkModel to IdentityLink entity.

        Args:
            model: SQLAlchemy model

        Returns:
            IdentityLink domain entity
        """
        return IdentityLink(
            discord_id=model.discord_id,
            wallets=list(model.wallets or []),
            total_balance=Decimal(model.total_balance),
            roles=list(model.roles or []),
            verified_at=model.verified_at,
            version=model.version,
            created_at=model.created_at,
        )
