"""Test suite for slugify and the exception hierarchy."""

import pytest

from fluxori.core.exceptions import (
    AuthenticationError,
    ConflictError,
    FluxoriError,
    InvalidInputError,
    MarketplaceApiError,
    NotFoundError,
    OperationFailedError,
    UnknownError,
    XeroApiError,
    map_exception,
)
from fluxori.core.text import slugify


class TestSlugify:
    """Test suite for slugify()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Acme Trading", "acme-trading"),
            ("  Acme   Trading Co. ", "acme-trading-co"),
            ("Crème & Brûlée", "crème-brûlée"),
            ("--already--slugged--", "already-slugged"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, value: str, expected: str) -> None:
        assert slugify(value) == expected


class TestErrorHierarchy:
    """Test suite for error kinds, statuses and details."""

    @pytest.mark.parametrize(
        "error, kind, status",
        [
            (NotFoundError("x"), "not_found", 404),
            (InvalidInputError("x"), "invalid_input", 400),
            (ConflictError("x"), "conflict", 409),
            (AuthenticationError("x"), "unauthenticated", 401),
            (OperationFailedError("x"), "operation_failed", 500),
            (XeroApiError("x"), "operation_failed", 502),
            (MarketplaceApiError("x"), "operation_failed", 502),
        ],
    )
    def test_kind_and_status(self, error: FluxoriError, kind: str, status: int) -> None:
        assert error.error_kind == kind
        assert error.http_status == status

    def test_not_found_records_resource(self) -> None:
        # Act
        error = NotFoundError("Warehouse 1 not found", resource="Warehouse", resource_id=1)

        # Assert
        assert error.to_dict() == {
            "error": "not_found",
            "message": "Warehouse 1 not found",
            "details": {"resource": "Warehouse", "resource_id": "1"},
        }

    def test_api_errors_record_status_code(self) -> None:
        error = XeroApiError("Bad gateway", status_code=503, operation="xero.get_contacts")

        assert error.status_code == 503
        assert error.details == {"status_code": 503, "operation": "xero.get_contacts"}

    def test_str_includes_details(self) -> None:
        assert str(InvalidInputError("Bad", field="sku")) == "Bad | Details: {'field': 'sku'}"


class TestMapException:
    """Test suite for map_exception()."""

    def test_typed_errors_pass_through(self) -> None:
        error = ConflictError("dup")

        assert map_exception(error) is error

    def test_other_errors_become_unknown(self) -> None:
        # Act
        mapped = map_exception(KeyError("missing"), operation="sync.contacts")

        # Assert
        assert isinstance(mapped, UnknownError)
        assert mapped.details == {"error_type": "KeyError", "operation": "sync.contacts"}

    def test_empty_message_falls_back_to_type_name(self) -> None:
        assert map_exception(RuntimeError()).message == "RuntimeError"
