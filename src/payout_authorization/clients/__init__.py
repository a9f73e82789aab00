"""HTTP clients for the provider and the merchant server."""

from payout_authorization.clients.balances_client import BalancesClient
from payout_authorization.clients.metadata_client import CardMetadataClient
from payout_authorization.clients.token_client import CheckoutTokenClient

__all__ = ["BalancesClient", "CardMetadataClient", "CheckoutTokenClient"]
