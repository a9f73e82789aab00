"""Payout authorization for wallet card payouts."""

__version__ = "0.1.0"
