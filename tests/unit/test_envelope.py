"""Unit tests for double-encoded response decoding."""

import json

import pytest

from payout_authorization.clients.envelope import (
    decode_double_encoded,
    decode_inner_body,
    decode_outer_envelope,
)
from payout_authorization.models.exceptions import ResponseBodyError


class TestDecodeOuterEnvelope:
    """Stage one: outer JSON object with a string body."""

    def test_returns_body_string(self):
        content = json.dumps({"statusCode": 200, "body": '{"a": 1}'}).encode()

        assert decode_outer_envelope(content) == '{"a": 1}'

    def test_body_already_decoded_rejected(self):
        content = json.dumps({"body": {"a": 1}}).encode()

        with pytest.raises(ResponseBodyError, match="no string 'body'"):
            decode_outer_envelope(content)

    def test_missing_body_rejected(self):
        with pytest.raises(ResponseBodyError, match="no string 'body'"):
            decode_outer_envelope(b'{"statusCode": 200}')

    @pytest.mark.parametrize("content", [b"", b"<html>", b'"just a string"', b"[]"])
    def test_non_object_rejected(self, content):
        with pytest.raises(ResponseBodyError):
            decode_outer_envelope(content)


class TestDecodeInnerBody:
    """Stage two: JSON document carried in the body string."""

    def test_returns_payload(self):
        assert decode_inner_body('{"card_payouts": {}}') == {"card_payouts": {}}

    @pytest.mark.parametrize("body", ["", "{not json", "42", '["a"]'])
    def test_invalid_body_rejected(self, body):
        with pytest.raises(ResponseBodyError):
            decode_inner_body(body)


def test_decode_double_encoded():
    payload = {"data": [{"currency_account_id": "ca_1"}]}
    content = json.dumps({"body": json.dumps(payload)}).encode()

    assert decode_double_encoded(content) == payload
