"""
Pytest fixtures for the OOH billing test suite.

Provides:
- Structured logging configured once per session, with a capture fixture
- Deterministic clocks pinned to known dates
- Common campaign inputs
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from ooh_kernel.domain.clock import DeterministicClock
from ooh_kernel.domain.conventions import BillingConvention
from ooh_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# ---------------------------------------------------------------------------
# Logging fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ooh_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            build_billing_summary(...)
            logs = captured_logs()
            assert any(r["message"] == "billing_summary_built" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ooh_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# ---------------------------------------------------------------------------
# Clock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def deterministic_clock():
    """Clock pinned to 2026-01-20, inside the January period of most fixtures."""
    return DeterministicClock.on(date(2026, 1, 20))


# ---------------------------------------------------------------------------
# Campaign fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def straddling_campaign():
    """Jan 15 - Feb 14 2026: 31 days over two partial months."""
    return {
        "campaign_id": "CMP-0001",
        "start_date": "2026-01-15",
        "end_date": "2026-02-14",
        "total_amount": "104000",
        "printing_total": "5000",
        "mounting_total": "2500",
        "gst_percent": "18",
        "asset_count": 4,
    }


@pytest.fixture
def quarter_campaign():
    """Jan 1 - Mar 31 2026: three whole calendar months."""
    return {
        "campaign_id": "CMP-0002",
        "start_date": "2026-01-01",
        "end_date": "2026-03-31",
        "total_amount": "300000",
        "printing_total": "12000",
        "mounting_total": "6000",
        "gst_percent": "18",
        "asset_count": 10,
    }


@pytest.fixture
def short_cap_convention():
    """Standard 30-day convention with a tiny period cap, for truncation tests."""
    return BillingConvention(max_periods=3)


@pytest.fixture
def monthly_rent():
    return Decimal("100000")
