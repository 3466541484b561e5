"""
Inventory response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: fluxori.models.inventory
System role: Inventory response transformation
"""

from typing import Any

from fluxori.models.inventory import (
    InventoryItemResponse,
    InventoryLevelResponse,
    InventoryTransactionResponse,
)


def map_item_to_response(data: dict[str, Any]) -> InventoryItemResponse:
    return InventoryItemResponse(**data)


def map_items_to_response(items: list[dict[str, Any]]) -> list[InventoryItemResponse]:
    return [map_item_to_response(item) for item in items]


def map_levels_to_response(levels: list[dict[str, Any]]) -> list[InventoryLevelResponse]:
    return [InventoryLevelResponse(**level) for level in levels]


def map_transaction_to_response(data: dict[str, Any]) -> InventoryTransactionResponse:
    """
    Transform a transaction dictionary into InventoryTransactionResponse.

    Args:
        data: Dictionary from transaction_to_dict

    Returns:
        InventoryTransactionResponse: Pydantic model for API response
    """
    return InventoryTransactionResponse(**data)


def map_transactions_to_response(items: list[dict[str, Any]]) -> list[InventoryTransactionResponse]:
    return [map_transaction_to_response(item) for item in items]
