"""Tests for the OOH_ENGINE_TRACE decorator."""

from datetime import date

from ooh_engines.tracer import compute_input_fingerprint, traced_engine


class TestComputeInputFingerprint:

    def test_deterministic(self):
        kwargs = {"start": date(2026, 1, 15), "end": "2026-02-14"}
        a = compute_input_fingerprint(("start", "end"), kwargs)
        b = compute_input_fingerprint(("start", "end"), dict(reversed(kwargs.items())))
        assert a == b
        assert len(a) == 16

    def test_dates_and_strings_fingerprint_alike(self):
        as_date = compute_input_fingerprint(("start",), {"start": date(2026, 1, 15)})
        as_text = compute_input_fingerprint(("start",), {"start": "2026-01-15"})
        assert as_date == as_text

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("start",), {}) == compute_input_fingerprint(
            ("start",), {"start": None}
        )

    def test_changes_with_input(self):
        a = compute_input_fingerprint(("total_amount",), {"total_amount": "100"})
        b = compute_input_fingerprint(("total_amount",), {"total_amount": "101"})
        assert a != b


class TestTracedEngine:

    def test_returns_result_and_logs(self, captured_logs):
        @traced_engine("doubler", "2.1", fingerprint_fields=("value",))
        def double(value):
            return value * 2

        assert double(value=21) == 42

        trace = [r for r in captured_logs() if r["message"] == "OOH_ENGINE_TRACE"][-1]
        assert trace["engine_name"] == "doubler"
        assert trace["engine_version"] == "2.1"
        assert trace["trace_type"] == "OOH_ENGINE_TRACE"
        assert trace["input_fingerprint"] == compute_input_fingerprint(
            ("value",), {"value": 21}
        )
        assert trace["duration_ms"] >= 0

    def test_no_fingerprint_fields(self, captured_logs):
        @traced_engine("noop", "1.0")
        def noop():
            return None

        noop()
        trace = [r for r in captured_logs() if r["message"] == "OOH_ENGINE_TRACE"][-1]
        assert trace["input_fingerprint"] == ""

    def test_preserves_metadata(self):
        @traced_engine("named", "1.0")
        def documented():
            """Docstring kept."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring kept."
