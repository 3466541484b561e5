"""
Stock alert schemas.

Dependencies: pydantic
System role: Stock alert API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fluxori.boundary.db.models.stock_alert_model import AlertPriority, AlertStatus, AlertType


class StockAlertResponse(BaseModel):
    id: uuid.UUID
    organization_id: uuid.UUID
    inventory_item_id: uuid.UUID
    warehouse_id: uuid.UUID | None
    type: AlertType
    status: AlertStatus
    priority: AlertPriority
    message: str
    data: dict
    resolved_by: uuid.UUID | None
    resolved_at: datetime | None
    created_at: datetime


class AlertActionRequest(BaseModel):
    """Resolve or ignore an alert on behalf of a user."""

    user_id: uuid.UUID | None = None


class AlertCheckResponse(BaseModel):
    checked: int = Field(description="Inventory levels scanned")
    alerts_created: int
    alerts: list[StockAlertResponse] = Field(default_factory=list)
