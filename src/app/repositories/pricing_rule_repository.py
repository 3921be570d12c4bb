"""Pricing Rule Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.pricing_rule import PricingRule


class PricingRuleRepository(ABC):
    """Repository interface for PricingRule reads"""

    @abstractmethod
    async def get_all(self) -> List[PricingRule]:
        """
        Retrieve every configured pricing rule

        Returns:
            List of pricing rules (empty if none configured)
        """
        pass
