"""Campaign domain exports"""

from .service import CampaignCreateInput, CampaignEditInput, CampaignService

__all__ = ["CampaignCreateInput", "CampaignEditInput", "CampaignService"]
