"""
Fixtures for application service tests.

Provides: in-memory Xero Accounting client, tenant credentials bound to
the seeded organization, customer/order factories
Dependencies: pytest, fluxori.boundary.xero
System role: Offline Xero harness for sync services
"""

import uuid

import pytest

from fluxori.boundary.db.CRUD.customer_crud import customer_crud, order_crud
from fluxori.boundary.xero.api_client import XeroCredentials
from fluxori.core.exceptions import InvalidInputError


class FakeXeroClient:
    """Stands in for XeroApiClient; keeps contacts and invoices in memory."""

    def __init__(self) -> None:
        self.contacts: dict[str, dict] = {}
        self.invoices: list[dict] = []
        self.accounts: list[dict] = []
        self.rejected_names: set[str] = set()
        # Names / order references answered without an id
        self.idless_names: set[str] = set()
        self.idless_references: set[str] = set()
        self.organisation: dict = {"Name": "Fluxori Ltd", "BaseCurrency": "GBP", "CountryCode": "GB"}
        self.organisation_error: Exception | None = None
        self.created_contacts = 0
        self.updated_contacts = 0

    async def __aenter__(self) -> "FakeXeroClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def get_contacts(self, page=None, where=None, include_archived=False) -> list[dict]:
        contacts = list(self.contacts.values())
        if where and where.startswith('Name=="'):
            name = where[len('Name=="'):-1]
            contacts = [c for c in contacts if c["Name"] == name]
        return contacts

    async def create_contact(self, contact: dict) -> dict:
        if contact["Name"] in self.rejected_names:
            raise InvalidInputError(f"Contact {contact['Name']} was rejected")
        if contact["Name"] in self.idless_names:
            return {"Name": contact["Name"]}
        self.created_contacts += 1
        contact_id = f"contact-{len(self.contacts) + 1}"
        self.contacts[contact_id] = {**contact, "ContactID": contact_id}
        return self.contacts[contact_id]

    async def update_contact(self, contact_id: str, contact: dict) -> dict:
        self.updated_contacts += 1
        self.contacts[contact_id] = {**contact, "ContactID": contact_id}
        return self.contacts[contact_id]

    async def create_invoice(self, invoice: dict) -> dict:
        if invoice.get("Reference") in self.idless_references:
            return {"Reference": invoice["Reference"], "Status": "DRAFT"}
        number = len(self.invoices) + 1
        created = {
            **invoice,
            "InvoiceID": f"invoice-{number}",
            "InvoiceNumber": invoice.get("InvoiceNumber", f"INV-{number:04d}"),
        }
        self.invoices.append(created)
        return created

    async def get_accounts(self, where=None) -> list[dict]:
        return self.accounts

    async def get_organisation(self) -> dict:
        if self.organisation_error is not None:
            raise self.organisation_error
        return self.organisation


@pytest.fixture
def fake_xero() -> FakeXeroClient:
    return FakeXeroClient()


@pytest.fixture
def client_factory(fake_xero):
    return lambda credentials: fake_xero


@pytest.fixture
def credentials(organization) -> XeroCredentials:
    return XeroCredentials(
        user_id=uuid.uuid4(),
        organization_id=organization.id,
        tenant_id="tenant-1",
        access_token="access-token",
    )


@pytest.fixture
def make_customer(test_async_db, organization):
    async def _make(**fields):
        fields.setdefault("organization_id", organization.id)
        return await customer_crud.create(test_async_db, **fields)

    return _make


@pytest.fixture
def make_order(test_async_db, organization):
    async def _make(order_number: str, customer=None, **fields):
        return await order_crud.create(
            test_async_db,
            organization_id=organization.id,
            customer_id=customer.id if customer else None,
            order_number=order_number,
            **fields,
        )

    return _make
