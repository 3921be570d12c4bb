"""Pricing Table

Read-only (paper size, print type) -> cost-per-page lookup consumed by
settlement and estimates. The table is an immutable snapshot; reload()
swaps in a new snapshot in one assignment so readers never observe a
half-loaded table.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple
from src.app.repositories.pricing_rule_repository import PricingRuleRepository
from src.domain.base import to_money
from src.domain.exceptions import RuleNotFound
from src.domain.pricing_rule import PricingRule, default_pricing_rules
from src.domain.printing_request import PaperSize, PrintType

logger = logging.getLogger(__name__)

PriceKey = Tuple[PaperSize, PrintType]


class PricingTable:
    def __init__(self, rules: Iterable[PricingRule] = ()):
        self._prices: Dict[PriceKey, Decimal] = self._index(rules)

    @staticmethod
    def _index(rules: Iterable[PricingRule]) -> Dict[PriceKey, Decimal]:
        return {
            (PaperSize(rule.paper_size), PrintType(rule.print_type)): to_money(rule.cost_per_page)
            for rule in rules
        }

    @classmethod
    def with_defaults(cls) -> "PricingTable":
        return cls(default_pricing_rules())

    @classmethod
    async def load(cls, repo: PricingRuleRepository) -> "PricingTable":
        """
        Build a table from the printing_costs table

        Falls back to the default price list when no rule is configured.
        """
        table = cls()
        await table.reload(repo)
        return table

    async def reload(self, repo: PricingRuleRepository) -> None:
        rules = await repo.get_all()
        if not rules:
            logger.warning("No printing costs configured, using default price list")
            rules = default_pricing_rules()
        self._prices = self._index(rules)
        logger.info(f"Pricing table loaded with {len(self._prices)} rules")

    def cost(self, paper_size, print_type) -> Decimal:
        """
        Cost per page for a paper size / print type pair

        Raises:
            RuleNotFound: If no rule exists for the pair
        """
        key = self._key(paper_size, print_type)
        price: Optional[Decimal] = self._prices.get(key) if key else None
        if price is None:
            raise RuleNotFound(
                getattr(paper_size, "value", paper_size),
                getattr(print_type, "value", print_type),
            )
        return price

    def total_cost(self, paper_size, print_type, num_pages: int, num_copies: int) -> Decimal:
        """cost_per_page * num_pages * num_copies, rounded to cents"""
        return to_money(self.cost(paper_size, print_type) * num_pages * num_copies)

    @staticmethod
    def _key(paper_size, print_type) -> Optional[PriceKey]:
        try:
            return PaperSize(paper_size), PrintType(print_type)
        except ValueError:
            return None

    def __len__(self) -> int:
        return len(self._prices)
