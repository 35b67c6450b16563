"""Tests for webhook signature verification and event parsing."""
import hashlib
import hmac
import json

import pytest

from sendly import WebhookSignatureError
from sendly.models.webhook import DEFAULT_API_VERSION, WebhookEvent
from sendly.webhooks import (
    SIGNATURE_HEADER,
    generate_signature,
    parse_event,
    verify_signature,
)

SECRET = "whsec_test_secret"

MOCK_EVENT = {
    "id": "evt_123",
    "type": "message.delivered",
    "data": {
        "message_id": "msg_abc123",
        "status": "delivered",
        "to": "+15551234567",
        "from": "+15550001111",
        "delivered_at": "2025-01-20T00:00:05Z",
        "segments": 2,
        "credits_used": 2,
    },
    "created_at": "2025-01-20T00:00:05Z",
    "api_version": "2024-06-01",
}


def _signed(payload):
    body = json.dumps(payload) if not isinstance(payload, str) else payload
    return body, generate_signature(body, SECRET)


class TestGenerateSignature:
    def test_format(self):
        signature = generate_signature("{}", SECRET)
        expected = hmac.new(SECRET.encode(), b"{}", hashlib.sha256).hexdigest()
        assert signature == f"sha256={expected}"

    def test_lowercase_hex(self):
        digest = generate_signature("payload", SECRET).split("=", 1)[1]
        assert digest == digest.lower()
        assert len(digest) == 64

    def test_bytes_and_str_agree(self):
        assert generate_signature(b"payload", SECRET) == generate_signature("payload", SECRET)

    def test_header_name(self):
        assert SIGNATURE_HEADER == "X-Sendly-Signature"


class TestVerifySignature:
    def test_valid_signature(self):
        body, signature = _signed(MOCK_EVENT)
        assert verify_signature(body, signature, SECRET) is True

    def test_valid_signature_over_bytes(self):
        body = json.dumps(MOCK_EVENT).encode("utf-8")
        assert verify_signature(body, generate_signature(body, SECRET), SECRET) is True

    def test_tampered_payload(self):
        body, signature = _signed(MOCK_EVENT)
        assert verify_signature(body.replace("delivered", "failed"), signature, SECRET) is False

    def test_wrong_secret(self):
        body, signature = _signed(MOCK_EVENT)
        assert verify_signature(body, signature, "whsec_other") is False

    def test_flipped_hex_character(self):
        body, signature = _signed(MOCK_EVENT)
        flipped = signature[:-1] + ("0" if signature[-1] != "0" else "1")
        assert verify_signature(body, flipped, SECRET) is False

    def test_missing_prefix(self):
        body, signature = _signed(MOCK_EVENT)
        assert verify_signature(body, signature[len("sha256="):], SECRET) is False

    def test_truncated_signature(self):
        body, signature = _signed(MOCK_EVENT)
        assert verify_signature(body, signature[:-2], SECRET) is False

    @pytest.mark.parametrize(
        ("payload", "signature", "secret"),
        [
            ("", "sha256=abc", SECRET),
            (None, "sha256=abc", SECRET),
            ("{}", "", SECRET),
            ("{}", None, SECRET),
            ("{}", "sha256=abc", ""),
            ("{}", "sha256=abc", None),
            ("{}", 12345, SECRET),
            (12345, "sha256=abc", SECRET),
            (b"{}", "sha256=\ud800", SECRET),
            ("{\ud800}", "sha256=abc", SECRET),
            (b"{}", "sha256=abc", "whsec_\udfff"),
        ],
    )
    def test_empty_or_invalid_inputs_return_false(self, payload, signature, secret):
        assert verify_signature(payload, signature, secret) is False


class TestParseEvent:
    def test_parse_valid_event(self):
        body, signature = _signed(MOCK_EVENT)

        event = parse_event(body, signature, SECRET)

        assert isinstance(event, WebhookEvent)
        assert event.id == "evt_123"
        assert event.type == "message.delivered"
        assert event.api_version == "2024-06-01"
        assert event.data.message_id == "msg_abc123"
        assert event.data.from_ == "+15550001111"
        assert event.data.segments == 2
        assert event.data.credits_used == 2

    def test_optional_fields_take_defaults(self):
        payload = {
            "id": "evt_1",
            "type": "message.sent",
            "data": {"message_id": "msg_1", "status": "sent", "to": "+15551234567", "segments": None},
            "created_at": "2025-01-20T00:00:00Z",
        }
        body, signature = _signed(payload)

        event = parse_event(body, signature, SECRET)

        assert event.api_version == DEFAULT_API_VERSION
        assert event.data.from_ == ""
        assert event.data.segments == 1
        assert event.data.credits_used == 0
        assert event.data.error is None

    def test_event_is_frozen(self):
        body, signature = _signed(MOCK_EVENT)
        event = parse_event(body, signature, SECRET)
        with pytest.raises(Exception):
            event.type = "message.failed"

    def test_to_dict_uses_wire_names(self):
        body, signature = _signed(MOCK_EVENT)
        data = parse_event(body, signature, SECRET).data.to_dict()
        assert data["from"] == "+15550001111"
        assert "from_" not in data

    def test_invalid_signature_checked_first(self):
        with pytest.raises(WebhookSignatureError, match="Invalid webhook signature"):
            parse_event("not json", "sha256=deadbeef", SECRET)

    def test_invalid_json(self):
        body, signature = _signed("not json")

        with pytest.raises(WebhookSignatureError, match="Failed to parse webhook payload"):
            parse_event(body, signature, SECRET)

    @pytest.mark.parametrize("missing", ["id", "type", "data", "created_at"])
    def test_missing_required_field(self, missing):
        payload = {key: value for key, value in MOCK_EVENT.items() if key != missing}
        body, signature = _signed(payload)

        with pytest.raises(WebhookSignatureError, match="Invalid event structure"):
            parse_event(body, signature, SECRET)

    def test_null_required_field(self):
        body, signature = _signed({**MOCK_EVENT, "created_at": None})

        with pytest.raises(WebhookSignatureError, match="Invalid event structure"):
            parse_event(body, signature, SECRET)

    @pytest.mark.parametrize("payload", ["[1, 2, 3]", '"event"', "42"])
    def test_non_object_payload(self, payload):
        body, signature = _signed(payload)

        with pytest.raises(WebhookSignatureError, match="Invalid event structure"):
            parse_event(body, signature, SECRET)

    def test_data_must_be_object(self):
        body, signature = _signed({**MOCK_EVENT, "data": "msg_abc123"})

        with pytest.raises(WebhookSignatureError, match="Invalid event structure"):
            parse_event(body, signature, SECRET)

    def test_mistyped_field(self):
        body, signature = _signed({**MOCK_EVENT, "id": {"nested": True}})

        with pytest.raises(WebhookSignatureError, match="Invalid event structure"):
            parse_event(body, signature, SECRET)
