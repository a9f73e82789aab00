"""Decoding of double-encoded merchant server responses.

The merchant server relays provider responses as a JSON object whose `body`
field is itself a JSON document serialised to a string:

    {"statusCode": 200, "body": "{\\"card_payouts\\": {...}}"}

Both stages are decoded explicitly so each can fail with a clear message.
"""

import json
from typing import Any

from payout_authorization.models.exceptions import ResponseBodyError


def decode_outer_envelope(content: bytes) -> str:
    """
    Stage one: parse the response and return the raw `body` string.

    Raises:
        ResponseBodyError: Content is not a JSON object with a string `body`
    """
    try:
        envelope = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ResponseBodyError(f"Response is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise ResponseBodyError("Response is not a JSON object")

    body = envelope.get("body")
    if not isinstance(body, str):
        raise ResponseBodyError("Response has no string 'body' field")
    return body


def decode_inner_body(body: str) -> dict[str, Any]:
    """
    Stage two: parse the JSON document carried in `body`.

    Raises:
        ResponseBodyError: `body` is not a JSON object
    """
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise ResponseBodyError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ResponseBodyError("Response body is not a JSON object")
    return payload


def decode_double_encoded(content: bytes) -> dict[str, Any]:
    """Run both decode stages on raw response content."""
    return decode_inner_body(decode_outer_envelope(content))
