"""Directory Repository Interface

Read-only lookups of profiles, contacts and products.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence
from src.domain.directory import Profile, Contact, Product


class DirectoryRepository(ABC):

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Profile of an authenticated user, None if the user has no tenant"""
        pass

    @abstractmethod
    async def get_profiles(self, user_ids: Sequence[str]) -> Dict[str, Profile]:
        """Profiles keyed by user ID"""
        pass

    @abstractmethod
    async def get_contact(self, org_id: str, contact_id: str) -> Optional[Contact]:
        """Contact of a tenant, None if missing or owned by another tenant"""
        pass

    @abstractmethod
    async def get_contacts(self, org_id: str, contact_ids: Sequence[str]) -> Dict[str, Contact]:
        """Contacts of a tenant keyed by ID"""
        pass

    @abstractmethod
    async def get_products(self, org_id: str, product_ids: Sequence[str]) -> Dict[str, Product]:
        """Catalog products of a tenant keyed by ID"""
        pass
