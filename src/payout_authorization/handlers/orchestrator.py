"""
Payout authorization orchestration.

This module implements the workflow that ties the components together for
one payout attempt:
- Recipient name validation (local)
- Credential decode and token exchange
- Card payout eligibility check
- Funding account balance check
- Final accept/reject decision, resolved exactly once
"""

import asyncio
import uuid
from decimal import Decimal
from enum import Enum

import structlog

from payout_authorization.clients.balances_client import BalancesClient
from payout_authorization.clients.metadata_client import CardMetadataClient
from payout_authorization.clients.token_client import CheckoutTokenClient
from payout_authorization.config import RecipientValidationPolicy, Settings, settings
from payout_authorization.domain.recipient_validator import validate_recipient_name
from payout_authorization.models.authorization import (
    AuthorizationDecision,
    DecisionError,
    DecisionStatus,
    ErrorCode,
)
from payout_authorization.models.credential import decode_credential
from payout_authorization.models.exceptions import (
    BalanceError,
    DecisionAlreadyMade,
    DecodeError,
    EligibilityError,
    InvalidStateTransition,
    TokenError,
    ValidationError,
)
from payout_authorization.models.recipient import PayoutAttempt

logger = structlog.get_logger(__name__)


class AttemptState(str, Enum):
    """Progress of a single payout attempt."""

    START = "START"
    NAME_VALIDATED = "NAME_VALIDATED"
    TOKENIZED = "TOKENIZED"
    ELIGIBILITY_CHECKED = "ELIGIBILITY_CHECKED"
    BALANCE_CHECKED = "BALANCE_CHECKED"
    DECIDED = "DECIDED"


ALLOWED_TRANSITIONS: dict[AttemptState, frozenset[AttemptState]] = {
    AttemptState.START: frozenset({AttemptState.NAME_VALIDATED}),
    AttemptState.NAME_VALIDATED: frozenset({AttemptState.TOKENIZED, AttemptState.DECIDED}),
    AttemptState.TOKENIZED: frozenset({AttemptState.ELIGIBILITY_CHECKED, AttemptState.DECIDED}),
    AttemptState.ELIGIBILITY_CHECKED: frozenset(
        {AttemptState.BALANCE_CHECKED, AttemptState.DECIDED}
    ),
    AttemptState.BALANCE_CHECKED: frozenset({AttemptState.DECIDED}),
    AttemptState.DECIDED: frozenset(),
}


class PayoutOrchestrator:
    """
    Sequences one payout authorization attempt and produces its decision.

    Each instance handles exactly one attempt: construct a new orchestrator
    per attempt. Network calls run strictly one after another because each
    needs the previous result. Every error is converted into a FAILURE
    decision at its call site; nothing is retried.

    The decision is delivered through `decision`, an asyncio future that
    resolves exactly once on the event loop running the attempt. Callers
    can await `authorize()` or attach callbacks to the future.
    """

    def __init__(
        self,
        token_client: CheckoutTokenClient,
        metadata_client: CardMetadataClient,
        balances_client: BalancesClient,
        amount: Decimal,
        currency_account_id: str,
        scenario: str = "domestic_money_transfer",
        recipient_validation: RecipientValidationPolicy = RecipientValidationPolicy.CONTINUE,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            token_client: Exchanges the wallet credential for a provider token
            metadata_client: Looks up card payout eligibility
            balances_client: Looks up funding account balances
            amount: Payout amount compared against the available balance
            currency_account_id: Funding currency account
            scenario: Payout eligibility scenario key
            recipient_validation: Whether an invalid name stops the attempt
        """
        self.token_client = token_client
        self.metadata_client = metadata_client
        self.balances_client = balances_client
        self.amount = amount
        self.currency_account_id = currency_account_id
        self.scenario = scenario
        self.recipient_validation = recipient_validation

        self.correlation_id = str(uuid.uuid4())
        self.state = AttemptState.START
        self._errors: list[DecisionError] = []
        self._decision: asyncio.Future[AuthorizationDecision] | None = None

    @property
    def decision(self) -> "asyncio.Future[AuthorizationDecision]":
        """Future resolved with the attempt's decision."""
        if self._decision is None:
            raise RuntimeError("authorize() has not been called")
        return self._decision

    async def authorize(self, attempt: PayoutAttempt) -> AuthorizationDecision:
        """
        Run the payout attempt to its decision.

        Args:
            attempt: Credential, recipient and card details from the wallet

        Returns:
            The attempt's AuthorizationDecision

        Raises:
            RuntimeError: The orchestrator already ran an attempt
        """
        if self._decision is not None:
            raise RuntimeError("PayoutOrchestrator authorizes a single attempt per instance")
        self._decision = asyncio.get_running_loop().create_future()

        with structlog.contextvars.bound_contextvars(correlation_id=self.correlation_id):
            try:
                await self._run(attempt)
            except Exception as e:
                if not self._decision.done():
                    self._decision.set_exception(e)
                    # Retrieved here; the caller gets it from the raise
                    self._decision.exception()
                raise

        return await self._decision

    async def _run(self, attempt: PayoutAttempt) -> AuthorizationDecision:
        logger.info(
            "payout_attempt_started",
            amount=str(self.amount),
            scenario=self.scenario,
            payment_method=attempt.payment_method.to_log_dict(),
        )

        # Step 1: Validate recipient name
        outcome = validate_recipient_name(attempt.recipient.full_name)
        self._transition(AttemptState.NAME_VALIDATED)
        logger.info("recipient_name_validated", valid=outcome.valid)

        try:
            outcome.raise_for_invalid()
        except ValidationError as e:
            logger.warning(
                "recipient_validation_failed",
                error=str(e),
                policy=self.recipient_validation.value,
            )
            self._record(
                ErrorCode.RECIPIENT_NAME_INVALID,
                "Recipient name not valid",
                contact_field=outcome.contact_field,
            )
            if self.recipient_validation == RecipientValidationPolicy.SHORT_CIRCUIT:
                return self._decide()

        # Step 2: Decode credential and exchange it for a provider token
        try:
            envelope = decode_credential(attempt.credential)
        except DecodeError as e:
            logger.error("credential_decode_failed", error=str(e))
            self._record(ErrorCode.CREDENTIAL_INVALID, "Payment card details could not be read")
            return self._decide()

        try:
            token = await self.token_client.exchange(envelope, correlation_id=self.correlation_id)
        except TokenError as e:
            logger.error("token_exchange_failed", error=str(e))
            self._record(ErrorCode.TOKEN_EXCHANGE_FAILED, "Payment card could not be verified")
            return self._decide()
        self._transition(AttemptState.TOKENIZED)

        # Step 3: Check card payout eligibility
        try:
            eligibility = await self.metadata_client.check_eligibility(
                token, self.scenario, correlation_id=self.correlation_id
            )
        except EligibilityError as e:
            logger.error("payout_eligibility_failed", error=str(e))
            self._record(
                ErrorCode.ELIGIBILITY_UNAVAILABLE,
                "Payout eligibility could not be determined",
            )
            return self._decide()
        self._transition(AttemptState.ELIGIBILITY_CHECKED)

        if not eligibility.proceeds:
            logger.info("payout_card_unsupported", eligibility=eligibility.value)
            self._record(ErrorCode.CARD_UNSUPPORTED, "Card not supported for payouts")
            return self._decide()

        # Step 4: Check funding account balance
        try:
            available = await self.balances_client.get_balance(
                self.currency_account_id, correlation_id=self.correlation_id
            )
        except BalanceError as e:
            logger.error("balance_check_failed", error=str(e))
            self._record(ErrorCode.BALANCE_UNAVAILABLE, "Payout is temporarily unavailable")
            return self._decide()
        self._transition(AttemptState.BALANCE_CHECKED)

        # Step 5: Compare available balance to the payout amount
        if available >= self.amount:
            logger.info("payout_funds_available", available=str(available))
        else:
            logger.info(
                "payout_insufficient_funds",
                available=str(available),
                amount=str(self.amount),
            )
            self._record(ErrorCode.INSUFFICIENT_FUNDS, "Insufficient funds for payout")

        return self._decide()

    def _transition(self, new_state: AttemptState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidStateTransition(
                f"Illegal payout attempt transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state

    def _record(
        self,
        code: ErrorCode,
        message: str,
        contact_field: str | None = None,
    ) -> None:
        self._errors.append(DecisionError(code=code, message=message, contact_field=contact_field))

    def _decide(self) -> AuthorizationDecision:
        """Resolve the decision future. Every branch of an attempt ends here."""
        if self._decision is None or self._decision.done():
            raise DecisionAlreadyMade("Payout attempt already has a decision")
        self._transition(AttemptState.DECIDED)

        status = DecisionStatus.FAILURE if self._errors else DecisionStatus.SUCCESS
        decision = AuthorizationDecision(status=status, errors=tuple(self._errors))
        self._decision.set_result(decision)

        logger.info(
            "payout_decision",
            status=status.value,
            error_codes=[code.value for code in decision.error_codes],
        )
        return decision

    async def close(self) -> None:
        """Close all HTTP clients."""
        await self.token_client.close()
        await self.metadata_client.close()
        await self.balances_client.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def create_orchestrator(app_settings: Settings | None = None) -> PayoutOrchestrator:
    """
    Build an orchestrator and its clients from configuration.

    This is the recommended way to get an orchestrator for one attempt.

    Args:
        app_settings: Settings to use (defaults to the global settings)

    Returns:
        PayoutOrchestrator ready to authorize one attempt
    """
    app_settings = app_settings or settings

    return PayoutOrchestrator(
        token_client=CheckoutTokenClient(
            token_url=app_settings.checkout.token_url,
            public_key=app_settings.checkout.public_key,
            timeout_seconds=app_settings.checkout.timeout_seconds,
        ),
        metadata_client=CardMetadataClient(
            metadata_api_url=app_settings.server.metadata_api_url,
            timeout_seconds=app_settings.server.timeout_seconds,
        ),
        balances_client=BalancesClient(
            balances_api_url=app_settings.server.balances_api_url,
            timeout_seconds=app_settings.server.timeout_seconds,
        ),
        amount=app_settings.payout.amount,
        currency_account_id=app_settings.checkout.currency_account_id,
        scenario=app_settings.payout.scenario,
        recipient_validation=app_settings.payout.recipient_validation,
    )


async def authorize_payout(
    attempt: PayoutAttempt,
    app_settings: Settings | None = None,
) -> AuthorizationDecision:
    """Authorize one attempt with a fresh orchestrator and close it afterwards."""
    async with create_orchestrator(app_settings) as orchestrator:
        return await orchestrator.authorize(attempt)
