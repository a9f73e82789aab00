"""Configuration management for the Payout Authorization service."""

from decimal import Decimal
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RecipientValidationPolicy(str, Enum):
    """What the orchestrator does after the recipient name fails validation."""

    # Keep calling the token, eligibility and balance services and report
    # every error found.
    CONTINUE = "continue"
    # Decide FAILURE immediately, without any network call.
    SHORT_CIRCUIT = "short_circuit"


class MerchantSettings(BaseSettings):
    """Wallet merchant settings."""

    identifier: str = Field(
        default="merchant.com.example.payouts",
        description="Wallet merchant identifier"
    )


class CheckoutSettings(BaseSettings):
    """Payment provider settings for token exchange and funding."""

    public_key: str = Field(default="", description="Provider public API key")
    token_url: str = Field(
        default="https://api.sandbox.checkout.com/tokens",
        description="Token exchange endpoint"
    )
    currency_account_id: str = Field(
        default="",
        description="Funding currency account the payout is drawn from"
    )
    timeout_seconds: float = Field(default=10.0, description="Request timeout")


class ServerSettings(BaseSettings):
    """Merchant server endpoints that proxy the provider's secret-key APIs."""

    metadata_api_url: str = Field(
        default="http://localhost:8000/card-metadata",
        description="Card metadata (payout eligibility) endpoint"
    )
    balances_api_url: str = Field(
        default="http://localhost:8000/balances",
        description="Currency account balances endpoint"
    )
    timeout_seconds: float = Field(default=10.0, description="Request timeout")


class PayoutSettings(BaseSettings):
    """Business rules for a single payout attempt."""

    amount: Decimal = Field(default=Decimal("9.99"), description="Payout amount")
    currency: str = Field(default="GBP", description="ISO 4217 currency code")
    region: str = Field(default="GB", description="Target region")
    scenario: str = Field(
        default="domestic_money_transfer",
        description="Card payout eligibility scenario"
    )
    supported_networks: list[str] = Field(
        default_factory=lambda: ["visa", "masterCard"],
        description="Card networks offered to the recipient"
    )
    merchant_capabilities: list[str] = Field(
        default_factory=lambda: ["debit"],
        description="Card types offered to the recipient"
    )
    recipient_validation: RecipientValidationPolicy = Field(
        default=RecipientValidationPolicy.CONTINUE,
        description="Behaviour after an invalid recipient name"
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")

    merchant: MerchantSettings = Field(default_factory=MerchantSettings)
    checkout: CheckoutSettings = Field(default_factory=CheckoutSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    payout: PayoutSettings = Field(default_factory=PayoutSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )


# Global settings instance
settings = Settings()
