"""Donation domain exports"""

from .models import DonationQuery, DonationResult, DonationTarget, TargetChain
from .service import DonationService
from .targets import TargetResolver

__all__ = [
    "DonationQuery",
    "DonationResult",
    "DonationTarget",
    "TargetChain",
    "DonationService",
    "TargetResolver",
]
