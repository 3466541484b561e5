"""
Customer and order CRUD operations.

These Fluxori-side records feed the Xero contact and invoice sync.

Dependencies: sqlalchemy, fluxori.boundary.db.models
System role: Sales record persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.base_crud import BaseCRUD
from fluxori.boundary.db.models.customer_model import CustomerModel
from fluxori.boundary.db.models.order_model import OrderModel


class CustomerCRUD(BaseCRUD[CustomerModel]):
    """CRUD operations for CustomerModel."""

    def __init__(self) -> None:
        """Initialize CustomerCRUD with CustomerModel."""
        super().__init__(CustomerModel)

    async def get_by_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[CustomerModel]:
        return await self.find(session, limit=limit, offset=offset, organization_id=organization_id)

    async def set_xero_contact_id(
        self, session: AsyncSession, id: UUID, xero_contact_id: str
    ) -> CustomerModel:
        return await self.update_by_id_or_fail(session, id, xero_contact_id=xero_contact_id)


class OrderCRUD(BaseCRUD[OrderModel]):
    """CRUD operations for OrderModel."""

    def __init__(self) -> None:
        """Initialize OrderCRUD with OrderModel."""
        super().__init__(OrderModel)

    async def get_by_organization(
        self,
        session: AsyncSession,
        organization_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[OrderModel]:
        return await self.find(
            session, limit=limit, offset=offset, order_by="order_date", organization_id=organization_id
        )

    async def get_by_order_number(
        self, session: AsyncSession, organization_id: UUID, order_number: str
    ) -> OrderModel | None:
        return await self.find_one(session, organization_id=organization_id, order_number=order_number)

    async def set_xero_invoice_id(
        self, session: AsyncSession, id: UUID, xero_invoice_id: str
    ) -> OrderModel:
        return await self.update_by_id_or_fail(session, id, xero_invoice_id=xero_invoice_id)


customer_crud = CustomerCRUD()
order_crud = OrderCRUD()
