"""SQLAlchemy implementation of PricingRuleRepository"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.pricing_rule_repository import PricingRuleRepository
from src.domain.pricing_rule import PricingRule


class SqlAlchemyPricingRuleRepository(PricingRuleRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[PricingRule]:
        stmt = select(PricingRule).order_by(PricingRule.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
