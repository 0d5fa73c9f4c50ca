"""SQLAlchemy Directory Repository Implementation

Read-only lookups; nothing here writes to profiles, contacts or products.
"""

from typing import Dict, Optional, Sequence
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.directory_repository import DirectoryRepository
from src.domain.directory import Profile, Contact, Product


class SqlAlchemyDirectoryRepository(DirectoryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        statement = select(Profile).where(Profile.user_id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_profiles(self, user_ids: Sequence[str]) -> Dict[str, Profile]:
        if not user_ids:
            return {}
        statement = select(Profile).where(Profile.user_id.in_(list(user_ids)))
        result = await self.session.execute(statement)
        return {profile.user_id: profile for profile in result.scalars().all()}

    async def get_contact(self, org_id: str, contact_id: str) -> Optional[Contact]:
        statement = (
            select(Contact)
            .where(Contact.org_id == org_id)
            .where(Contact.id == contact_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_contacts(self, org_id: str, contact_ids: Sequence[str]) -> Dict[str, Contact]:
        if not contact_ids:
            return {}
        statement = (
            select(Contact)
            .where(Contact.org_id == org_id)
            .where(Contact.id.in_(list(contact_ids)))
        )
        result = await self.session.execute(statement)
        return {contact.id: contact for contact in result.scalars().all()}

    async def get_products(self, org_id: str, product_ids: Sequence[str]) -> Dict[str, Product]:
        if not product_ids:
            return {}
        statement = (
            select(Product)
            .where(Product.org_id == org_id)
            .where(Product.id.in_(list(product_ids)))
        )
        result = await self.session.execute(statement)
        return {product.id: product for product in result.scalars().all()}
