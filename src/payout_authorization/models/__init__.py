"""Domain models for the Payout Authorization service."""

from payout_authorization.models.authorization import (
    AuthorizationDecision,
    BalanceRecord,
    DecisionError,
    DecisionStatus,
    ErrorCode,
)
from payout_authorization.models.credential import (
    DecryptedCredentialEnvelope,
    EcV1Header,
    PaymentCredential,
    RsaV1Header,
    decode_credential,
)
from payout_authorization.models.eligibility import EligibilityKind, EligibilityResult
from payout_authorization.models.exceptions import (
    BalanceError,
    DecisionAlreadyMade,
    DecodeError,
    EligibilityError,
    InvalidStateTransition,
    PayoutError,
    ResponseBodyError,
    TokenError,
    ValidationError,
)
from payout_authorization.models.recipient import (
    PaymentMethod,
    PaymentMethodType,
    PayoutAttempt,
    RecipientContact,
)

__all__ = [
    "AuthorizationDecision",
    "BalanceError",
    "BalanceRecord",
    "DecisionAlreadyMade",
    "DecisionError",
    "DecisionStatus",
    "DecodeError",
    "DecryptedCredentialEnvelope",
    "EcV1Header",
    "EligibilityError",
    "EligibilityKind",
    "EligibilityResult",
    "ErrorCode",
    "InvalidStateTransition",
    "PaymentCredential",
    "PaymentMethod",
    "PaymentMethodType",
    "PayoutAttempt",
    "PayoutError",
    "RecipientContact",
    "ResponseBodyError",
    "RsaV1Header",
    "TokenError",
    "ValidationError",
    "decode_credential",
]
