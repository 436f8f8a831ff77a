"""Charity domain exports"""

from .service import CharityCreateInput, CharityEditInput, CharityService

__all__ = ["CharityCreateInput", "CharityEditInput", "CharityService"]
