"""Tests for the engine tracer (penalty_engines/tracer.py)."""

from datetime import date
from decimal import Decimal

import pytest

from penalty_engines.penalty import GSTPenaltyInput, compute_gst_penalty
from penalty_engines.rules import GSTReturnType
from penalty_engines.tracer import _canonicalize, compute_input_fingerprint, traced_engine
from penalty_kernel.exceptions import UnknownRuleKeyError


class TestCanonicalize:

    def test_decimal_normalized(self):
        assert _canonicalize(Decimal("5000")) == _canonicalize(Decimal("5.000E+3"))

    def test_enum_uses_value(self):
        assert _canonicalize(GSTReturnType.GSTR9) == "GSTR9"

    def test_bool_and_none(self):
        assert _canonicalize(True) == "true"
        assert _canonicalize(None) == "null"

    def test_dict_keys_sorted(self):
        assert _canonicalize({"b": 1, "a": 2}) == _canonicalize({"a": 2, "b": 1})

    def test_dataclass_expanded(self):
        penalty_input = GSTPenaltyInput(
            return_type="GSTR1",
            tax_amount="100",
            due_date=date(2025, 1, 31),
            filing_date=date(2025, 2, 1),
        )
        text = _canonicalize(penalty_input)

        assert text.startswith("GSTPenaltyInput{")
        assert "due_date:2025-01-31" in text


class TestFingerprint:

    def test_deterministic(self):
        args = {"amount": Decimal("100"), "days": 5}
        assert compute_input_fingerprint(("amount", "days"), args) == \
            compute_input_fingerprint(("amount", "days"), args)

    def test_length(self):
        assert len(compute_input_fingerprint(("x",), {"x": 1})) == 16

    def test_sensitive_to_selected_fields(self):
        a = compute_input_fingerprint(("x",), {"x": 1})
        b = compute_input_fingerprint(("x",), {"x": 2})
        assert a != b

    def test_ignores_unselected_fields(self):
        a = compute_input_fingerprint(("x",), {"x": 1, "y": 1})
        b = compute_input_fingerprint(("x",), {"x": 1, "y": 2})
        assert a == b


class TestTracedEngine:

    def test_trace_record_emitted(self, json_log_records):
        @traced_engine("demo", "2.1", fingerprint_fields=("amount",))
        def double(amount):
            return amount * 2

        assert double(Decimal("4")) == Decimal("8")

        traces = [r for r in json_log_records() if r["message"] == "PENALTY_ENGINE_TRACE"]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["engine_name"] == "demo"
        assert trace["engine_version"] == "2.1"
        assert trace["function"].endswith("double")
        assert len(trace["input_fingerprint"]) == 16
        assert trace["duration_ms"] >= 0

    def test_positional_and_keyword_calls_fingerprint_alike(self, json_log_records):
        @traced_engine("demo", "1.0", fingerprint_fields=("amount",))
        def identity(amount):
            return amount

        identity(Decimal("7"))
        identity(amount=Decimal("7"))

        fingerprints = [
            r["input_fingerprint"] for r in json_log_records()
            if r["message"] == "PENALTY_ENGINE_TRACE"
        ]
        assert len(fingerprints) == 2
        assert fingerprints[0] == fingerprints[1]

    def test_exceptions_propagate_without_trace(self, json_log_records):
        @traced_engine("demo", "1.0")
        def broken():
            raise UnknownRuleKeyError("X")

        with pytest.raises(UnknownRuleKeyError):
            broken()

        assert not [r for r in json_log_records() if r["message"] == "PENALTY_ENGINE_TRACE"]

    def test_penalty_engine_traced(self, json_log_records):
        compute_gst_penalty(GSTPenaltyInput(
            return_type="GSTR3B",
            tax_amount="50000",
            due_date="2025-01-31",
            filing_date="2025-03-31",
            tax_paid_late=True,
        ))

        records = json_log_records()
        trace = next(r for r in records if r["message"] == "PENALTY_ENGINE_TRACE")
        assert trace["engine_name"] == "gst_penalty"
        assert trace["logger"] == "penalty_kernel.engines.tracer"

        computed = next(r for r in records if r["message"] == "gst_penalty_computed")
        assert computed["total_penalty"] == "6455"
        assert computed["status_label"] == "late"

    def test_wraps_preserves_name(self):
        @traced_engine("demo", "1.0")
        def named():
            """Docstring."""

        assert named.__name__ == "named"
        assert named.__doc__ == "Docstring."
