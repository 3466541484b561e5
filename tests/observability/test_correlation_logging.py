"""Tests for correlation id propagation into log records."""

import logging

from fluxori.observability import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


def make_record() -> logging.LogRecord:
    return logging.LogRecord("fluxori.test", logging.INFO, __file__, 1, "hello", None, None)


class TestCorrelationId:
    """Tests for the correlation id context."""

    def test_set_generates_id_when_missing(self) -> None:
        """A new id is generated when none is supplied."""
        value = set_correlation_id()
        try:
            assert value
            assert get_correlation_id() == value
        finally:
            clear_correlation_id()

    def test_unacceptable_ids_are_replaced(self) -> None:
        try:
            for bad in ("", "has space", "a" * 129, "semi;colon"):
                value = set_correlation_id(bad)
                assert value != bad
                assert len(value) == 32
        finally:
            clear_correlation_id()

    def test_clear_resets_to_empty(self) -> None:
        set_correlation_id("req-1")
        clear_correlation_id()
        assert get_correlation_id() == ""


class TestCorrelationIdFilter:
    """Tests for stamping log records."""

    def test_record_gets_current_id(self) -> None:
        """Records emitted inside a request carry its id."""
        record = make_record()
        set_correlation_id("req-42")
        try:
            assert CorrelationIdFilter().filter(record) is True
        finally:
            clear_correlation_id()
        assert record.correlation_id == "req-42"

    def test_record_outside_request_gets_placeholder(self) -> None:
        record = make_record()
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"
