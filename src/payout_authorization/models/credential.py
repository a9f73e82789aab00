"""Wallet payment credential models.

The wallet hands over an encrypted payment credential as UTF-8 JSON bytes.
Its header carries the key material needed by the provider to decrypt the
payload, and the shape of that header depends on the protocol version:
elliptic-curve credentials carry an ephemeral public key, RSA credentials a
wrapped symmetric key. The variants below make that "exactly one of"
rule structural instead of two optional fields.
"""

import json
from dataclasses import dataclass
from typing import Any, Union

from payout_authorization.models.exceptions import DecodeError

EC_V1 = "EC_v1"
RSA_V1 = "RSA_v1"


@dataclass(frozen=True)
class EcV1Header:
    """Header of an elliptic-curve (EC_v1) credential."""

    ephemeral_public_key: str
    public_key_hash: str
    transaction_id: str

    def to_dict(self) -> dict[str, str]:
        return {
            "ephemeralPublicKey": self.ephemeral_public_key,
            "publicKeyHash": self.public_key_hash,
            "transactionId": self.transaction_id,
        }


@dataclass(frozen=True)
class RsaV1Header:
    """Header of an RSA (RSA_v1) credential."""

    wrapped_key: str
    public_key_hash: str
    transaction_id: str

    def to_dict(self) -> dict[str, str]:
        return {
            "wrappedKey": self.wrapped_key,
            "publicKeyHash": self.public_key_hash,
            "transactionId": self.transaction_id,
        }


CredentialHeader = Union[EcV1Header, RsaV1Header]


@dataclass(frozen=True)
class PaymentCredential:
    """
    Opaque encrypted payment credential produced by the wallet.

    Write-once and never persisted. Only `decode_credential` looks inside.
    """

    payment_data: bytes

    def __repr__(self) -> str:
        return f"PaymentCredential(<{len(self.payment_data)} bytes>)"


@dataclass(frozen=True)
class DecryptedCredentialEnvelope:
    """
    Structured fields of a wallet payment credential.

    Attributes:
        version: Protocol version (EC_v1 or RSA_v1)
        data: Base64-encoded encrypted payment data
        signature: Base64-encoded detached signature
        header: Version-specific header variant
    """

    version: str
    data: str
    signature: str
    header: CredentialHeader

    def to_token_data(self) -> dict[str, Any]:
        """Build the `token_data` object expected by the token endpoint."""
        return {
            "version": self.version,
            "data": self.data,
            "signature": self.signature,
            "header": self.header.to_dict(),
        }


def _require_str(source: dict[str, Any], key: str, where: str) -> str:
    value = source.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Credential {where} is missing string field '{key}'")
    return value


def _decode_header(version: str, raw_header: Any) -> CredentialHeader:
    if not isinstance(raw_header, dict):
        raise DecodeError("Credential header must be a JSON object")

    public_key_hash = _require_str(raw_header, "publicKeyHash", "header")
    transaction_id = _require_str(raw_header, "transactionId", "header")
    ephemeral_public_key = raw_header.get("ephemeralPublicKey")
    wrapped_key = raw_header.get("wrappedKey")

    if ephemeral_public_key is not None and wrapped_key is not None:
        raise DecodeError("Credential header has both ephemeralPublicKey and wrappedKey")

    if version == EC_V1 and ephemeral_public_key is None:
        raise DecodeError(f"{EC_V1} credential header requires ephemeralPublicKey")
    if version == RSA_V1 and wrapped_key is None:
        raise DecodeError(f"{RSA_V1} credential header requires wrappedKey")

    if isinstance(ephemeral_public_key, str):
        return EcV1Header(
            ephemeral_public_key=ephemeral_public_key,
            public_key_hash=public_key_hash,
            transaction_id=transaction_id,
        )
    if isinstance(wrapped_key, str):
        return RsaV1Header(
            wrapped_key=wrapped_key,
            public_key_hash=public_key_hash,
            transaction_id=transaction_id,
        )

    raise DecodeError("Credential header has neither ephemeralPublicKey nor wrappedKey")


def decode_credential(credential: PaymentCredential) -> DecryptedCredentialEnvelope:
    """
    Decode a wallet payment credential into its structured envelope.

    Args:
        credential: Raw credential bytes from the wallet

    Returns:
        DecryptedCredentialEnvelope with the version-specific header variant

    Raises:
        DecodeError: Payload is empty, not JSON, or violates the envelope shape
    """
    if not credential.payment_data:
        raise DecodeError("Payment credential is empty")

    try:
        raw = json.loads(credential.payment_data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Payment credential is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise DecodeError("Payment credential must be a JSON object")

    version = _require_str(raw, "version", "envelope")
    return DecryptedCredentialEnvelope(
        version=version,
        data=_require_str(raw, "data", "envelope"),
        signature=_require_str(raw, "signature", "envelope"),
        header=_decode_header(version, raw.get("header")),
    )
