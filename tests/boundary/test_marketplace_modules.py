"""
Test suite for the SP-API module factory and versioned modules.

Covers registry-driven version resolution, module caching, request
shaping (paths and query parameters), required-input validation and
token pagination through the get_all_* helpers.
"""

import json

import pytest

from fluxori.boundary.marketplace.factory import SellingPartnerFactory
from fluxori.boundary.marketplace.module_definitions import (
    get_default_module_version,
    get_module_definition,
)
from fluxori.boundary.marketplace.modules import CatalogItemsModule
from fluxori.core.exceptions import InvalidInputError


class TestModuleRegistry:
    """Test suite for module definitions."""

    def test_default_version_is_the_flagged_one(self) -> None:
        assert get_default_module_version("catalogItems") == "2022-04-01"
        assert get_default_module_version("orders") == "v0"

    def test_unknown_module_has_no_definition(self) -> None:
        assert get_module_definition("doesNotExist") is None
        assert get_default_module_version("doesNotExist") is None

    def test_supports_checks_listed_versions(self) -> None:
        definition = get_module_definition("catalogItems")

        assert definition.supports("2020-12-01")
        assert not definition.supports("1999-01-01")


class TestSellingPartnerFactory:
    """Test suite for SellingPartnerFactory.create_module()."""

    def test_create_module_uses_default_version(self, sp_factory) -> None:
        # Act
        module = sp_factory.create_module("catalogItems")

        # Assert
        assert isinstance(module, CatalogItemsModule)
        assert module.version == "2022-04-01"
        assert module.base_path == "/catalog/2022-04-01"
        assert module.marketplace_id == "ATVPDKIKX0DER"

    def test_modules_are_cached_per_version(self, sp_factory) -> None:
        assert sp_factory.catalog_items is sp_factory.create_module("catalogItems", "2022-04-01")
        assert sp_factory.create_module("catalogItems", "2020-12-01") is not sp_factory.catalog_items

    @pytest.mark.parametrize(
        "name, version, field",
        [
            ("doesNotExist", None, "name"),
            ("feeds", None, "name"),
            ("orders", "v9", "version"),
        ],
    )
    def test_invalid_module_requests_are_rejected(self, sp_factory, name, version, field) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            sp_factory.create_module(name, version)

        assert exc_info.value.details["field"] == field


class TestOrdersModule:
    """Test suite for OrdersModule."""

    @pytest.mark.asyncio
    async def test_get_orders_requires_a_date_filter(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError):
            await sp_factory.orders.get_orders()

        assert router.requests == []

    @pytest.mark.asyncio
    async def test_get_all_orders_follows_next_token(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"payload": {"Orders": [{"AmazonOrderId": "1"}], "NextToken": "abc"}})
        router.add(200, {"payload": {"Orders": [{"AmazonOrderId": "2"}]}})

        # Act
        orders = await sp_factory.orders.get_all_orders(created_after="2024-01-01T00:00:00Z")

        # Assert
        assert [o["AmazonOrderId"] for o in orders] == ["1", "2"]
        first, second = router.requests
        assert first.url.path == "/orders/v0/orders"
        assert first.url.params["MarketplaceIds"] == "ATVPDKIKX0DER"
        assert "NextToken" not in first.url.params
        assert second.url.params["NextToken"] == "abc"

    @pytest.mark.asyncio
    async def test_get_all_orders_respects_max_pages(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"payload": {"Orders": [{"AmazonOrderId": "x"}], "NextToken": "again"}})

        # Act
        orders = await sp_factory.orders.get_all_orders(max_pages=3, created_after="2024-01-01")

        # Assert
        assert len(orders) == 3
        assert len(router.requests) == 3


class TestCatalogAndInventoryModules:
    """Test suite for catalog, FBA inventory, pricing and sales modules."""

    @pytest.mark.asyncio
    async def test_catalog_search_needs_criteria(self, sp_factory) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.catalog_items.search_catalog_items()

        assert exc_info.value.details["field"] == "keywords"

    @pytest.mark.asyncio
    async def test_catalog_search_by_sku_sends_seller_id(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"items": [{"asin": "B000TEST"}], "numberOfResults": 1})

        # Act
        item = await sp_factory.catalog_items.get_catalog_item_by_sku("MUG-01")

        # Assert
        [request] = router.requests
        assert item == {"asin": "B000TEST"}
        assert request.url.params["identifiersType"] == "SKU"
        assert request.url.params["sellerId"] == "A1SELLER"
        assert request.url.params["includedData"]

    @pytest.mark.asyncio
    async def test_low_stock_filters_by_fulfillable_quantity(self, sp_factory, router) -> None:
        # Arrange
        router.add(
            200,
            {
                "payload": {
                    "inventorySummaries": [
                        {"sellerSku": "A", "inventoryDetails": {"fulfillableQuantity": 2}},
                        {"sellerSku": "B", "inventoryDetails": {"fulfillableQuantity": 40}},
                    ]
                },
                "pagination": {"nextToken": "p2"},
            },
        )
        router.add(200, {"payload": {"inventorySummaries": [{"sellerSku": "C", "totalQuantity": 5}]}})

        # Act
        low = await sp_factory.fba_inventory.get_low_stock_inventory(threshold=5)

        # Assert
        assert [s["sellerSku"] for s in low] == ["A", "C"]
        assert router.requests[0].url.path == "/fba/inventory/v1/summaries"
        assert router.requests[1].url.params["nextToken"] == "p2"

    @pytest.mark.asyncio
    async def test_pricing_rejects_more_than_twenty_items(self, sp_factory) -> None:
        with pytest.raises(InvalidInputError):
            await sp_factory.product_pricing.get_pricing_for_asins([f"B{i:09d}" for i in range(21)])

    @pytest.mark.asyncio
    async def test_sales_metrics_builds_interval(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"payload": []})

        # Act
        await sp_factory.sales.get_order_metrics("2024-01-01T00:00:00Z", "2024-01-31T00:00:00Z", "Day")

        # Assert
        params = router.requests[0].url.params
        assert params["interval"] == "2024-01-01T00:00:00Z--2024-01-31T00:00:00Z"
        assert params["granularity"] == "Day"

    @pytest.mark.asyncio
    async def test_sales_metrics_rejects_unknown_granularity(self, sp_factory) -> None:
        with pytest.raises(InvalidInputError):
            await sp_factory.sales.get_order_metrics("2024-01-01", "2024-01-02", "Fortnight")


class TestListingsModule:
    """Test suite for the Listings Items module."""

    @pytest.mark.asyncio
    async def test_get_listing_quotes_sku_in_path(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"sku": "MUG/01"})

        # Act
        await sp_factory.listings.get_listing("MUG/01")

        # Assert
        [request] = router.requests
        assert request.url.raw_path.startswith(b"/listings/2021-08-01/items/A1SELLER/MUG%2F01")
        assert request.url.params["marketplaceIds"] == "ATVPDKIKX0DER"
        assert request.url.params["includedData"] == "summaries,attributes,offers,issues"

    @pytest.mark.asyncio
    async def test_patch_listing_needs_patches(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.listings.patch_listing("MUG-01", "MUG", [])

        assert exc_info.value.details["field"] == "patches"
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_put_listing_sends_product_type_and_attributes(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"status": "ACCEPTED"})
        attributes = {"item_name": [{"value": "Blue mug"}]}

        # Act
        result = await sp_factory.listings.put_listing("MUG-01", "MUG", attributes)

        # Assert
        [request] = router.requests
        assert result == {"status": "ACCEPTED"}
        assert request.method == "PUT"
        assert json.loads(request.content) == {
            "productType": "MUG",
            "requirements": "LISTING",
            "attributes": attributes,
        }

    @pytest.mark.asyncio
    async def test_get_all_listings_follows_pagination_token(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"items": [{"sku": "A"}], "pagination": {"nextToken": "page-2"}})
        router.add(200, {"items": [{"sku": "B"}]})

        # Act
        listings = await sp_factory.listings.get_all_listings(page_size=10)

        # Assert
        assert [item["sku"] for item in listings] == ["A", "B"]
        first, second = router.requests
        assert first.url.path == "/listings/2021-08-01/items/A1SELLER"
        assert first.url.params["pageSize"] == "10"
        assert "pageToken" not in first.url.params
        assert second.url.params["pageToken"] == "page-2"

    @pytest.mark.asyncio
    async def test_search_needs_seller_id(self, sp_client, router) -> None:
        # Arrange
        factory = SellingPartnerFactory(sp_client, marketplace_id="ATVPDKIKX0DER")

        # Act
        with pytest.raises(InvalidInputError) as exc_info:
            await factory.listings.search_listings()

        # Assert
        assert exc_info.value.details["field"] == "seller_id"
        assert router.requests == []


class TestReportsModule:
    """Test suite for the Reports module."""

    @pytest.mark.asyncio
    async def test_create_report_defaults_to_factory_marketplace(self, sp_factory, router) -> None:
        # Arrange
        router.add(202, {"reportId": "R1"})

        # Act
        result = await sp_factory.reports.create_report(
            "GET_FLAT_FILE_OPEN_LISTINGS_DATA", data_start_time="2024-01-01T00:00:00Z"
        )

        # Assert
        [request] = router.requests
        assert result == {"reportId": "R1"}
        assert request.url.path == "/reports/2021-06-30/reports"
        assert json.loads(request.content) == {
            "reportType": "GET_FLAT_FILE_OPEN_LISTINGS_DATA",
            "marketplaceIds": ["ATVPDKIKX0DER"],
            "dataStartTime": "2024-01-01T00:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_create_report_needs_type(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.reports.create_report("")

        assert exc_info.value.details["field"] == "report_type"
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_get_all_reports_keeps_filters_on_every_page(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"reports": [{"reportId": "R1"}], "nextToken": "t2"})
        router.add(200, {"reports": [{"reportId": "R2"}]})

        # Act
        reports = await sp_factory.reports.get_all_reports(
            report_types=["GET_MERCHANT_LISTINGS_ALL_DATA"], next_token="ignored"
        )

        # Assert
        assert [r["reportId"] for r in reports] == ["R1", "R2"]
        first, second = router.requests
        assert "nextToken" not in first.url.params
        assert second.url.params["nextToken"] == "t2"
        assert {r.url.params["reportTypes"] for r in router.requests} == {"GET_MERCHANT_LISTINGS_ALL_DATA"}

    @pytest.mark.asyncio
    async def test_get_all_reports_stops_at_max_pages(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"reports": [{"reportId": "R"}], "nextToken": "more"})

        # Act
        reports = await sp_factory.reports.get_all_reports(max_pages=2)

        # Assert
        assert len(reports) == 2
        assert len(router.requests) == 2


class TestDataKioskModule:
    """Test suite for the Data Kiosk module."""

    @pytest.mark.asyncio
    async def test_execute_query_sends_variables(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"data": {}})

        # Act
        await sp_factory.data_kiosk.execute_query("query { sales }", {"from": "2024-01-01"})

        # Assert
        [request] = router.requests
        assert request.url.path == "/dataKiosk/2023-11-15/query"
        assert json.loads(request.content) == {"query": "query { sales }", "variables": {"from": "2024-01-01"}}

    @pytest.mark.asyncio
    async def test_create_document_needs_content_type(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError):
            await sp_factory.data_kiosk.create_document("Weekly sales", "query { sales }", "")

        assert router.requests == []

    @pytest.mark.asyncio
    async def test_get_all_documents_collects_pages(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"documents": [{"documentId": "D1"}], "nextToken": "d2"})
        router.add(200, {"documents": [{"documentId": "D2"}]})

        # Act
        documents = await sp_factory.data_kiosk.get_all_documents()

        # Assert
        assert [d["documentId"] for d in documents] == ["D1", "D2"]
        assert router.requests[1].url.params["nextToken"] == "d2"


class TestFulfillmentOutboundModule:
    """Test suite for the Fulfillment Outbound module."""

    @pytest.mark.asyncio
    async def test_create_order_reports_first_missing_field(self, sp_factory, router) -> None:
        # Act
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.fulfillment_outbound.create_fulfillment_order({"sellerFulfillmentOrderId": "F-1"})

        # Assert
        assert exc_info.value.details["field"] == "displayableOrderId"
        assert "shippingSpeedCategory" in exc_info.value.message
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_cancel_quotes_order_id(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {})

        # Act
        await sp_factory.fulfillment_outbound.cancel_fulfillment_order("F 1/2")

        # Assert
        [request] = router.requests
        assert request.method == "PUT"
        assert request.url.raw_path == b"/fba/outbound/2020-07-01/fulfillmentOrders/F%201%2F2/cancel"

    @pytest.mark.asyncio
    async def test_get_all_orders_reads_payload_token(self, sp_factory, router) -> None:
        # Arrange
        router.add(
            200,
            {"payload": {"fulfillmentOrders": [{"sellerFulfillmentOrderId": "F-1"}], "nextToken": "n2"}},
        )
        router.add(200, {"payload": {"fulfillmentOrders": [{"sellerFulfillmentOrderId": "F-2"}]}})

        # Act
        orders = await sp_factory.fulfillment_outbound.get_all_fulfillment_orders("2024-01-01T00:00:00Z")

        # Assert
        assert [o["sellerFulfillmentOrderId"] for o in orders] == ["F-1", "F-2"]
        second = router.requests[1]
        assert second.url.params["nextToken"] == "n2"
        assert second.url.params["queryStartDate"] == "2024-01-01T00:00:00Z"


class TestReplenishmentModule:
    """Test suite for the Replenishment module."""

    @pytest.mark.asyncio
    async def test_accept_patches_status(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"recommendationId": "REC-1", "status": "ACCEPTED"})

        # Act
        await sp_factory.replenishment.accept_recommendation("REC-1", notes="ok")

        # Assert
        [request] = router.requests
        assert request.method == "PATCH"
        assert request.url.path == "/replenishment/2022-11-07/recommendations/REC-1"
        assert json.loads(request.content) == {"status": "ACCEPTED", "notes": "ok"}

    @pytest.mark.asyncio
    async def test_reject_needs_reason(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.replenishment.reject_recommendation("REC-1", "")

        assert exc_info.value.details["field"] == "rejection_reason"
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_time_series_needs_every_argument(self, sp_factory) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.replenishment.get_time_series("MUG-01", "2024-01-01", "2024-02-01", "WEEK", "")

        assert exc_info.value.details["field"] == "data_type"

    @pytest.mark.asyncio
    async def test_get_all_recommendations_joins_filters(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"recommendations": [{"recommendationId": "REC-1"}], "nextToken": "r2"})
        router.add(200, {"recommendations": [{"recommendationId": "REC-2"}]})

        # Act
        recommendations = await sp_factory.replenishment.get_all_recommendations(
            seller_skus=["MUG-01", "MUG-02"], statuses=["PENDING"]
        )

        # Assert
        assert len(recommendations) == 2
        first, second = router.requests
        assert first.url.params["sellerSkus"] == "MUG-01,MUG-02"
        assert first.url.params["recommendationStatuses"] == "PENDING"
        assert second.url.params["nextToken"] == "r2"


class TestB2BModule:
    """Test suite for the Amazon Business module."""

    @pytest.mark.asyncio
    async def test_bulk_pricing_posts_one_batch(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"B000000001": {"tiers": []}, "B000000002": {"tiers": []}})

        # Act
        result = await sp_factory.b2b.get_bulk_pricing_tiers(["B000000001", "B000000002"])

        # Assert
        [request] = router.requests
        assert set(result) == {"B000000001", "B000000002"}
        assert request.method == "POST"
        assert request.url.path == "/b2b/2022-05-01/products/pricing-tiers/batch"
        assert request.url.params["marketplaceId"] == "ATVPDKIKX0DER"
        assert json.loads(request.content) == {"asins": ["B000000001", "B000000002"]}

    @pytest.mark.asyncio
    async def test_bulk_pricing_rejects_empty_list(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.b2b.get_bulk_pricing_tiers([])

        assert exc_info.value.details["field"] == "asins"
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_bulk_pricing_rejects_more_than_twenty_asins(self, sp_factory, router) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await sp_factory.b2b.get_bulk_pricing_tiers([f"B{i:09d}" for i in range(21)])

        assert exc_info.value.details["field"] == "asins"
        assert router.requests == []

    @pytest.mark.asyncio
    async def test_approval_settings_send_marketplace(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"requireApproval": True})

        # Act
        settings = await sp_factory.b2b.get_approval_settings()
        await sp_factory.b2b.update_approval_settings({"requireApproval": False}, marketplace_id="A1F83G8C2ARO7P")

        # Assert
        first, second = router.requests
        assert settings == {"requireApproval": True}
        assert first.url.path == "/b2b/2022-05-01/settings/approvals"
        assert first.url.params["marketplaceId"] == "ATVPDKIKX0DER"
        assert second.method == "PUT"
        assert second.url.params["marketplaceId"] == "A1F83G8C2ARO7P"

    @pytest.mark.asyncio
    async def test_pending_approvals_page_shape(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {"orders": [{"orderId": "B2B-1"}], "nextToken": "p2"})

        # Act
        page = await sp_factory.b2b.get_pending_approvals(max_results=5)

        # Assert
        assert page == {"items": [{"orderId": "B2B-1"}], "next_token": "p2", "has_more": True}
        assert router.requests[0].url.params["maxResults"] == "5"

    @pytest.mark.asyncio
    async def test_reject_order_sends_reason_and_notes(self, sp_factory, router) -> None:
        # Arrange
        router.add(200, {})

        # Act
        result = await sp_factory.b2b.reject_order("B2B-1", "Over budget", approver_notes="Q3 freeze")

        # Assert
        [request] = router.requests
        assert result == {"success": True}
        assert request.url.path == "/b2b/2022-05-01/orders/B2B-1/reject"
        assert request.url.params["marketplaceId"] == "ATVPDKIKX0DER"
        assert json.loads(request.content) == {"rejectionReason": "Over budget", "approverNotes": "Q3 freeze"}
