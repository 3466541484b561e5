"""
Integration tests for the product catalog, users and reporting queries.

Runs ProductService and UserService against in-memory SQLite, plus the
inventory and order lookups that back stock reports and Xero matching.

System role: Verification of catalog, user and query persistence
"""

import uuid

import pytest

from fluxori.application.services.inventory_service import InventoryService
from fluxori.application.services.product_service import ProductService
from fluxori.application.services.user_service import UserService
from fluxori.boundary.db.CRUD.customer_crud import order_crud
from fluxori.boundary.db.CRUD.inventory_crud import (
    inventory_item_crud,
    inventory_level_crud,
    inventory_transaction_crud,
)
from fluxori.boundary.db.CRUD.organization_crud import organization_crud
from fluxori.boundary.db.CRUD.warehouse_crud import warehouse_crud
from fluxori.boundary.db.models.inventory_model import ReferenceType, TransactionType
from fluxori.boundary.db.models.product_model import ProductStatus, ProductType
from fluxori.core.exceptions import ConflictError, InvalidInputError, NotFoundError


@pytest.fixture
def product_service(test_async_db) -> ProductService:
    return ProductService(test_async_db)


@pytest.fixture
def user_service(test_async_db) -> UserService:
    return UserService(test_async_db)


@pytest.fixture
def inventory_service(test_async_db) -> InventoryService:
    return InventoryService(test_async_db)


@pytest.fixture
async def product(product_service, organization):
    return await product_service.create_product(
        organization_id=organization.id,
        title="Enamel Mug",
        sku="MUG",
        prices={"USD": 9.5},
    )


class TestProductService:
    """Test suite for products and variants."""

    @pytest.mark.asyncio
    async def test_create_product_should_slugify_title(self, product) -> None:
        assert product["slug"] == "enamel-mug"
        assert product["status"] == ProductStatus.DRAFT
        assert product["type"] == ProductType.SIMPLE
        assert product["prices"] == {"USD": 9.5}

    @pytest.mark.asyncio
    async def test_duplicate_sku_should_conflict(self, product_service, organization, product) -> None:
        with pytest.raises(ConflictError) as exc_info:
            await product_service.create_product(organization_id=organization.id, title="Other", sku="MUG")

        assert exc_info.value.details["field"] == "sku"

    @pytest.mark.asyncio
    async def test_duplicate_slug_should_conflict(self, product_service, organization, product) -> None:
        with pytest.raises(ConflictError) as exc_info:
            await product_service.create_product(
                organization_id=organization.id, title="Enamel  mug!", sku="MUG-2"
            )

        assert exc_info.value.details["field"] == "slug"

    @pytest.mark.asyncio
    async def test_same_sku_in_another_organization_is_allowed(self, product_service, product) -> None:
        # Arrange
        other = await organization_crud.create(product_service.db, name="Other", slug="other")

        # Act
        created = await product_service.create_product(organization_id=other.id, title="Enamel Mug", sku="MUG")

        # Assert
        assert created["organization_id"] == other.id

    @pytest.mark.asyncio
    async def test_missing_title_should_be_rejected(self, product_service, organization) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await product_service.create_product(organization_id=organization.id, title="", sku="X")

        assert exc_info.value.details["field"] == "title"

    @pytest.mark.asyncio
    async def test_unknown_organization_should_raise(self, product_service) -> None:
        with pytest.raises(NotFoundError):
            await product_service.create_product(organization_id=uuid.uuid4(), title="Mug", sku="MUG")

    @pytest.mark.asyncio
    async def test_list_products_should_filter_by_status(self, product_service, organization, product) -> None:
        # Arrange
        await product_service.create_product(
            organization_id=organization.id, title="Bowl", sku="BOWL", status=ProductStatus.ACTIVE
        )

        # Act
        everything = await product_service.list_products(organization.id)
        active = await product_service.list_products(organization.id, status=ProductStatus.ACTIVE)

        # Assert
        assert {p["sku"] for p in everything} == {"MUG", "BOWL"}
        assert [p["sku"] for p in active] == ["BOWL"]

    @pytest.mark.asyncio
    async def test_update_product_should_check_sku_collisions(self, product_service, organization, product) -> None:
        # Arrange
        await product_service.create_product(organization_id=organization.id, title="Bowl", sku="BOWL")

        # Act
        updated = await product_service.update_product(product["id"], slug="Camp Mug", description=None)

        # Assert
        assert updated["slug"] == "camp-mug"
        with pytest.raises(ConflictError):
            await product_service.update_product(product["id"], sku="BOWL")

    @pytest.mark.asyncio
    async def test_add_variant_should_make_product_variable(self, product_service, product) -> None:
        # Act
        variant = await product_service.add_variant(product["id"], sku="MUG-RED", title="Red")
        variants = await product_service.list_variants(product["id"])
        refreshed = await product_service.get_product(product["id"])

        # Assert
        assert variant["status"] == ProductStatus.DRAFT
        assert [v["sku"] for v in variants] == ["MUG-RED"]
        assert refreshed["type"] == ProductType.VARIABLE

    @pytest.mark.asyncio
    async def test_duplicate_variant_sku_should_conflict(self, product_service, product) -> None:
        await product_service.add_variant(product["id"], sku="MUG-RED", title="Red")

        with pytest.raises(ConflictError):
            await product_service.add_variant(product["id"], sku="MUG-RED", title="Also red")

    @pytest.mark.asyncio
    async def test_delete_product(self, product_service, product) -> None:
        await product_service.delete_product(product["id"])

        with pytest.raises(NotFoundError):
            await product_service.delete_product(product["id"])


class TestUserService:
    """Test suite for user accounts."""

    @pytest.mark.asyncio
    async def test_create_user_should_normalize_email(self, user_service) -> None:
        # Act
        user = await user_service.create_user(" Ops@Acme.Test ", first_name="Ops")
        found = await user_service.get_user_by_email("OPS@acme.test")

        # Assert
        assert user["email"] == "ops@acme.test"
        assert found["id"] == user["id"]

    @pytest.mark.asyncio
    async def test_invalid_email_should_be_rejected(self, user_service) -> None:
        with pytest.raises(InvalidInputError):
            await user_service.create_user("not-an-email")

    @pytest.mark.asyncio
    async def test_duplicate_email_should_conflict(self, user_service) -> None:
        await user_service.create_user("ops@acme.test")

        with pytest.raises(ConflictError):
            await user_service.create_user("OPS@acme.test")

    @pytest.mark.asyncio
    async def test_unknown_email_should_raise(self, user_service) -> None:
        with pytest.raises(NotFoundError):
            await user_service.get_user_by_email("ghost@acme.test")

    @pytest.mark.asyncio
    async def test_update_user_should_ignore_none_and_guard_email(self, user_service) -> None:
        # Arrange
        ops = await user_service.create_user("ops@acme.test", first_name="Ops")
        await user_service.create_user("admin@acme.test")

        # Act
        updated = await user_service.update_user(ops["id"], first_name=None, last_name="Team")

        # Assert
        assert updated["first_name"] == "Ops"
        assert updated["last_name"] == "Team"
        with pytest.raises(ConflictError):
            await user_service.update_user(ops["id"], email="Admin@acme.test")


class TestInventoryQueries:
    """Test suite for stock report lookups."""

    @pytest.mark.asyncio
    async def test_status_queries_should_follow_stock_movements(
        self, test_async_db, inventory_service, organization, warehouse
    ) -> None:
        # Arrange
        low = await inventory_service.create_item(
            organization_id=organization.id, sku="LOW", name="Low", reorder_point=5
        )
        await inventory_service.create_item(organization_id=organization.id, sku="NONE", name="None")
        await inventory_service.adjust_stock(low["id"], warehouse.id, 3, "Receive")

        # Act
        low_stock = await inventory_item_crud.find_low_stock(test_async_db, organization.id)
        out_of_stock = await inventory_item_crud.find_out_of_stock(test_async_db, organization.id)

        # Assert
        assert [i.sku for i in low_stock] == ["LOW"]
        assert [i.sku for i in out_of_stock] == ["NONE"]

    @pytest.mark.asyncio
    async def test_get_by_product_variant(
        self, test_async_db, inventory_service, product_service, organization, warehouse, product
    ) -> None:
        # Arrange
        variant = await product_service.add_variant(product["id"], sku="MUG-RED", title="Red")
        item = await inventory_service.create_item(
            organization_id=organization.id,
            sku="MUG-RED",
            name="Red mug",
            product_id=product["id"],
            product_variant_id=variant["id"],
        )

        # Act
        found = await inventory_item_crud.get_by_product_variant(test_async_db, variant["id"])

        # Assert
        assert found.id == item["id"]
        assert await inventory_item_crud.get_by_product_variant(test_async_db, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_or_create_level_should_reuse_existing_level(
        self, test_async_db, inventory_service, organization, warehouse
    ) -> None:
        # Arrange
        item = await inventory_service.create_item(organization_id=organization.id, sku="MUG", name="Mug")
        overflow = await warehouse_crud.create(
            test_async_db, organization_id=organization.id, name="Overflow", code="OVF"
        )

        # Act
        created = await inventory_service.get_or_create_level(item["id"], overflow.id)
        again = await inventory_service.get_or_create_level(item["id"], overflow.id)
        at_overflow = await inventory_level_crud.get_levels_for_warehouse(test_async_db, overflow.id)

        # Assert
        assert created["id"] == again["id"]
        assert created["on_hand"] == 0
        assert [level.id for level in at_overflow] == [created["id"]]

    @pytest.mark.asyncio
    async def test_get_or_create_level_in_foreign_warehouse_should_raise(
        self, test_async_db, inventory_service, organization, warehouse
    ) -> None:
        # Arrange
        item = await inventory_service.create_item(organization_id=organization.id, sku="MUG", name="Mug")
        other = await organization_crud.create(test_async_db, name="Other", slug="other")
        foreign = await warehouse_crud.create(test_async_db, organization_id=other.id, name="X", code="X")

        # Act / Assert
        with pytest.raises(NotFoundError):
            await inventory_service.get_or_create_level(item["id"], foreign.id)

    @pytest.mark.asyncio
    async def test_reservations_are_found_by_order_reference(
        self, test_async_db, inventory_service, organization, warehouse
    ) -> None:
        # Arrange
        item = await inventory_service.create_item(organization_id=organization.id, sku="MUG", name="Mug")
        await inventory_service.adjust_stock(item["id"], warehouse.id, 10, "Receive")
        await inventory_service.reserve_stock(item["id"], warehouse.id, 2, reference_id="SO-1")
        await inventory_service.reserve_stock(item["id"], warehouse.id, 1, reference_id="SO-2")

        # Act
        found = await inventory_transaction_crud.get_by_reference(
            test_async_db, ReferenceType.SALES_ORDER, "SO-1"
        )

        # Assert
        assert len(found) == 1
        assert found[0].type == TransactionType.RESERVE
        assert found[0].quantity == 2


class TestOrderQueries:
    """Test suite for order lookups used by invoice sync."""

    @pytest.mark.asyncio
    async def test_get_by_order_number_is_scoped_to_organization(self, test_async_db, organization) -> None:
        # Arrange
        other = await organization_crud.create(test_async_db, name="Other", slug="other")
        order = await order_crud.create(test_async_db, organization_id=organization.id, order_number="1001")
        await order_crud.create(test_async_db, organization_id=other.id, order_number="1001")

        # Act
        found = await order_crud.get_by_order_number(test_async_db, organization.id, "1001")

        # Assert
        assert found.id == order.id
        assert await order_crud.get_by_order_number(test_async_db, organization.id, "9999") is None

    @pytest.mark.asyncio
    async def test_get_all_should_paginate_across_organizations(self, test_async_db, organization) -> None:
        # Arrange
        other = await organization_crud.create(test_async_db, name="Other", slug="other")
        for number in ("1", "2"):
            await order_crud.create(test_async_db, organization_id=organization.id, order_number=number)
        await order_crud.create(test_async_db, organization_id=other.id, order_number="3")

        # Act
        everything = await order_crud.get_all(test_async_db)
        page = await order_crud.get_all(test_async_db, limit=2, offset=2)

        # Assert
        assert len(everything) == 3
        assert len(page) == 1
