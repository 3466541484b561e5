"""
Warehouse service orchestrator.

Warehouse lifecycle with the one-default-per-organization rule: the
first warehouse becomes default, creating or flagging a warehouse as
default demotes the others, and deleting the default promotes the oldest
remaining warehouse.

Dependencies: fluxori.boundary.db.CRUD, fluxori.core
System role: Warehouse use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db.CRUD.organization_crud import organization_crud
from fluxori.boundary.db.CRUD.warehouse_crud import warehouse_crud
from fluxori.boundary.db.models.warehouse_model import WarehouseModel, WarehouseStatus
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def warehouse_to_dict(warehouse: WarehouseModel) -> dict[str, Any]:
    return {
        "id": warehouse.id,
        "organization_id": warehouse.organization_id,
        "name": warehouse.name,
        "code": warehouse.code,
        "description": warehouse.description,
        "is_default": warehouse.is_default,
        "status": warehouse.status,
        "address": warehouse.address or {},
        "contact": warehouse.contact or {},
        "settings": warehouse.settings or {},
        "created_at": warehouse.created_at,
        "updated_at": warehouse.updated_at,
    }


class WarehouseService:
    """Warehouse service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize warehouse service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_warehouse(
        self,
        organization_id: UUID,
        name: str,
        code: str,
        description: str | None = None,
        is_default: bool = False,
        address: dict | None = None,
        contact: dict | None = None,
        settings: dict | None = None,
    ) -> dict[str, Any]:
        """
        Create a warehouse.

        Args:
            organization_id: Owning organization
            name: Display name
            code: Short code, unique within the organization
            description: Optional description
            is_default: Make this the organization's default warehouse
            address: Address fields
            contact: Contact fields
            settings: Settings such as allow_negative_inventory

        Returns:
            dict: Created warehouse

        Raises:
            NotFoundError: Unknown organization
            ConflictError: Code already used in the organization
        """
        if not name or not code:
            raise InvalidInputError("Warehouse name and code are required", field="name" if not name else "code")

        await organization_crud.get_by_id_or_fail(self.db, organization_id)

        if await warehouse_crud.get_by_code(self.db, organization_id, code):
            raise ConflictError(f"Warehouse with code {code} already exists", field="code")

        has_default = await warehouse_crud.get_default(self.db, organization_id) is not None

        warehouse = await warehouse_crud.create(
            self.db,
            organization_id=organization_id,
            name=name,
            code=code,
            description=description,
            is_default=False,
            address=address or {},
            contact=contact or {},
            settings=settings or {},
        )
        if is_default or not has_default:
            warehouse = await warehouse_crud.set_as_default(self.db, organization_id, warehouse.id)

        logger.info(
            "Warehouse created",
            extra={
                "warehouse_id": str(warehouse.id),
                "organization_id": str(organization_id),
                "is_default": warehouse.is_default,
            },
        )
        return warehouse_to_dict(warehouse)

    async def get_warehouse(self, warehouse_id: UUID) -> dict[str, Any]:
        return warehouse_to_dict(await warehouse_crud.get_by_id_or_fail(self.db, warehouse_id))

    async def list_warehouses(
        self,
        organization_id: UUID,
        status: WarehouseStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        warehouses = await warehouse_crud.get_by_organization(
            self.db, organization_id, status=status, limit=limit, offset=offset
        )
        return [warehouse_to_dict(w) for w in warehouses]

    async def get_default_warehouse(self, organization_id: UUID) -> dict[str, Any]:
        warehouse = await warehouse_crud.get_default(self.db, organization_id)
        if warehouse is None:
            raise NotFoundError(
                f"Organization {organization_id} has no default warehouse", resource="Warehouse"
            )
        return warehouse_to_dict(warehouse)

    async def update_warehouse(self, warehouse_id: UUID, **fields) -> dict[str, Any]:
        """
        Update a warehouse. Default switching goes through set_as_default.

        Raises:
            NotFoundError: Unknown warehouse
            ConflictError: New code collides within the organization
        """
        warehouse = await warehouse_crud.get_by_id_or_fail(self.db, warehouse_id)
        fields = {k: v for k, v in fields.items() if v is not None}
        make_default = fields.pop("is_default", None)

        if "code" in fields and fields["code"] != warehouse.code:
            if await warehouse_crud.get_by_code(self.db, warehouse.organization_id, fields["code"]):
                raise ConflictError(f"Warehouse with code {fields['code']} already exists", field="code")

        updated = await warehouse_crud.update_by_id_or_fail(self.db, warehouse_id, **fields)
        if make_default and not updated.is_default:
            updated = await warehouse_crud.set_as_default(self.db, warehouse.organization_id, warehouse_id)
        return warehouse_to_dict(updated)

    async def set_as_default(self, organization_id: UUID, warehouse_id: UUID) -> dict[str, Any]:
        warehouse = await warehouse_crud.set_as_default(self.db, organization_id, warehouse_id)
        logger.info(
            "Default warehouse changed",
            extra={"warehouse_id": str(warehouse_id), "organization_id": str(organization_id)},
        )
        return warehouse_to_dict(warehouse)

    async def delete_warehouse(self, warehouse_id: UUID) -> None:
        """
        Delete a warehouse, promoting the oldest remaining one when the
        default is removed.

        Raises:
            NotFoundError: Unknown warehouse
        """
        warehouse = await warehouse_crud.get_by_id_or_fail(self.db, warehouse_id)
        organization_id = warehouse.organization_id
        was_default = warehouse.is_default

        await warehouse_crud.delete_by_id(self.db, warehouse_id)

        if was_default:
            remaining = await warehouse_crud.find(
                self.db, limit=1, order_by="created_at", organization_id=organization_id
            )
            if remaining:
                await warehouse_crud.set_as_default(self.db, organization_id, remaining[0].id)
        logger.info(
            "Warehouse deleted",
            extra={"warehouse_id": str(warehouse_id), "was_default": was_default},
        )
