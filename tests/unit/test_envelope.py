import pytest

from src.doku_client.envelope import ResponseEnvelope, envelope_body, extract_checkout


class TestEnvelopeBody:
    """Tests for envelope_body()."""

    @pytest.mark.unit
    def test_nested_envelope_reads_response_key(self):
        payload = {"response": {"order": {}}, "order": {"x": 1}}
        assert envelope_body(payload, ResponseEnvelope.NESTED) == {"order": {}}

    @pytest.mark.unit
    def test_flat_envelope_is_payload_itself(self):
        payload = {"order": {"x": 1}}
        assert envelope_body(payload, ResponseEnvelope.FLAT) is payload

    @pytest.mark.unit
    def test_non_dict_response_key_treated_as_empty(self):
        assert envelope_body({"response": "ok"}, ResponseEnvelope.NESTED) == {}

    @pytest.mark.unit
    def test_non_dict_payload_treated_as_empty(self):
        assert envelope_body(["x"], ResponseEnvelope.FLAT) == {}


class TestExtractCheckout:
    """Tests for extract_checkout()."""

    @pytest.mark.unit
    def test_nested_envelope(self, response_factory):
        payload = response_factory.checkout_payload(
            "INV-1", 15000, ResponseEnvelope.NESTED, payment_url="https://pay/1"
        )
        details = extract_checkout(payload)
        assert details.payment_url == "https://pay/1"
        assert details.invoice_number == "INV-1"
        assert details.amount == 15000

    @pytest.mark.unit
    def test_flat_envelope(self, response_factory):
        payload = response_factory.checkout_payload(
            "INV-2", 20000, ResponseEnvelope.FLAT, payment_url="https://pay/2"
        )
        details = extract_checkout(payload)
        assert details.payment_url == "https://pay/2"
        assert details.invoice_number == "INV-2"
        assert details.amount == 20000

    @pytest.mark.unit
    def test_nested_takes_precedence_over_flat(self):
        payload = {
            "response": {"payment": {"url": "https://nested"}, "order": {"invoice_number": "N"}},
            "payment": {"url": "https://flat"},
            "order": {"invoice_number": "F"},
        }
        details = extract_checkout(payload)
        assert details.payment_url == "https://nested"
        assert details.invoice_number == "N"

    @pytest.mark.unit
    def test_fields_fall_back_to_flat_individually(self):
        payload = {
            "response": {"payment": {"url": "https://nested"}},
            "order": {"invoice_number": "F", "amount": 500},
        }
        details = extract_checkout(payload)
        assert details.payment_url == "https://nested"
        assert details.invoice_number == "F"
        assert details.amount == 500

    @pytest.mark.unit
    def test_missing_fields_are_none(self):
        details = extract_checkout({"message": ["SUCCESS"]})
        assert details.payment_url is None
        assert details.invoice_number is None
        assert details.amount is None
