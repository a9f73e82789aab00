"""Card payout eligibility models."""

from dataclasses import dataclass
from enum import Enum


class EligibilityKind(str, Enum):
    """
    Classification of a provider eligibility value.

    The provider's set of values is open. Anything outside the known
    values maps to OTHER and is handled by the default (reject) branch.
    """

    FAST_FUNDS = "fast_funds"
    STANDARD = "standard"
    UNKNOWN = "unknown"
    OTHER = "other"


PROCEED_KINDS = frozenset(
    {EligibilityKind.FAST_FUNDS, EligibilityKind.STANDARD, EligibilityKind.UNKNOWN}
)


@dataclass(frozen=True)
class EligibilityResult:
    """Eligibility of the recipient card for a payout scenario."""

    kind: EligibilityKind
    value: str

    @classmethod
    def from_provider(cls, value: str) -> "EligibilityResult":
        """Classify a raw provider value, e.g. "fast_funds" or "ineligible"."""
        try:
            kind = EligibilityKind(value)
        except ValueError:
            kind = EligibilityKind.OTHER
        return cls(kind=kind, value=value)

    @property
    def proceeds(self) -> bool:
        """True if the payout may continue to the balance check."""
        return self.kind in PROCEED_KINDS
