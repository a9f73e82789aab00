"""Command-line entry point: authorize one payout attempt from a credential file."""

import argparse
import asyncio
import sys
from pathlib import Path

from payout_authorization.config import settings
from payout_authorization.handlers.orchestrator import authorize_payout
from payout_authorization.logging_config import configure_logging, get_logger
from payout_authorization.models.credential import PaymentCredential
from payout_authorization.models.recipient import (
    PaymentMethod,
    PaymentMethodType,
    PayoutAttempt,
    RecipientContact,
)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payout-authorize",
        description="Authorize a card payout for a wallet payment credential.",
    )
    parser.add_argument("credential", type=Path, help="Path to the wallet credential JSON")
    parser.add_argument("--given-name", default=None)
    parser.add_argument("--family-name", default=None)
    parser.add_argument("--phone-number", default=None)
    parser.add_argument("--email-address", default=None)
    parser.add_argument("--card-network", default=None)
    parser.add_argument("--card-display-name", default=None)
    parser.add_argument(
        "--card-type",
        default=PaymentMethodType.UNKNOWN.value,
        choices=[member.value for member in PaymentMethodType],
    )
    return parser


def build_attempt(args: argparse.Namespace) -> PayoutAttempt:
    return PayoutAttempt(
        credential=PaymentCredential(payment_data=args.credential.read_bytes()),
        recipient=RecipientContact(
            given_name=args.given_name,
            family_name=args.family_name,
            phone_number=args.phone_number,
            email_address=args.email_address,
        ),
        payment_method=PaymentMethod(
            type=PaymentMethodType.from_wallet(args.card_type),
            display_name=args.card_display_name,
            network=args.card_network,
        ),
    )


async def run(argv: list[str] | None = None) -> int:
    """Authorize one attempt and return the process exit code."""
    args = build_parser().parse_args(argv)
    try:
        attempt = build_attempt(args)
    except OSError as e:
        logger.error("credential_file_unreadable", path=str(args.credential), error=str(e))
        return 2

    decision = await authorize_payout(attempt)

    logger.info(
        "payout_authorization_finished",
        status=decision.status.value,
        errors=[error.message for error in decision.errors],
    )
    return 0 if decision.succeeded else 1


def main() -> None:
    """Main application entry point."""
    configure_logging(
        log_level="DEBUG" if settings.debug else "INFO",
        format_as_json=settings.environment != "development",
        include_correlation_id=True,
    )

    try:
        exit_code = asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
