"""Repository interfaces."""

from huissier.domain.repositories.i_linkage_repository import ILinkageRepository

__all__ = ["ILinkageRepository"]
