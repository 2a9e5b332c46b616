"""
Unit tests for IdentityLink entity.

Usage:
    pytest huissier/tests/unit/domain
"""

from decimal import Decimal

import pytest

from huissier.domain.entities.identity_link import IdentityLink, merge_wallets


class TestMergeWallets:
    """Tests for merge_wallets."""

    def test_appends_new_wallet_last(self):
        """Test new wallet goes after existing ones."""
        assert merge_wallets(["A", "B"], "C") == ["A", "B", "C"]

    def test_known_wallet_not_duplicated(self):
        """Test re-submitting a linked wallet keeps the list unchanged."""
        assert merge_wallets(["A", "B"], "A") == ["A", "B"]

    def test_empty_existing(self):
        """Test first wallet for an account."""
        assert merge_wallets([], "A") == ["A"]

    def test_input_not_modified(self):
        """Test existing list is not mutated."""
        existing = ["A"]
        merge_wallets(existing, "B")
        assert existing == ["A"]


class TestIdentityLink:
    """Tests for IdentityLink validation and helpers."""

    def test_create_link(self):
        """Test creating a valid link."""
        link = IdentityLink(
            discord_id="123456789012345678",
            wallets=["A"],
            total_balance=Decimal("1500"),
            roles=["participant", "tier-1"],
        )

        assert link.version == 1
        assert link.has_wallet("A")
        assert not link.has_wallet("B")
        assert link.verified_at.tzinfo is not None

    def test_with_wallet(self):
        """Test candidate wallet list from entity."""
        link = IdentityLink(discord_id="1", wallets=["A"])

        assert link.with_wallet("B") == ["A", "B"]
        assert link.wallets == ["A"]

    def test_empty_discord_id_rejected(self):
        """Test empty Discord ID raises."""
        with pytest.raises(ValueError, match="Discord ID"):
            IdentityLink(discord_id="")

    def test_negative_balance_rejected(self):
        """Test negative balance raises."""
        with pytest.raises(ValueError, match="negative"):
            IdentityLink(discord_id="1", total_balance=Decimal("-1"))

    def test_duplicate_wallets_rejected(self):
        """Test duplicate wallets raise."""
        with pytest.raises(ValueError, match="duplicates"):
            IdentityLink(discord_id="1", wallets=["A", "A"])
