from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # JWT: no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7

    # Demo data loaded into the in-memory store at startup
    SEED_DEMO_DATA: bool = True
    SEED_DEMO_PASSWORD: str = "password123"

    # Wallet integration: "stub" | "jsonrpc" | "none"
    WALLET_PROVIDER: str = "stub"
    WALLET_RPC_URL: str = "http://localhost:8545"
    WALLET_RPC_TIMEOUT_SECONDS: float = 10.0
    STUB_WALLET_BALANCE_WEI: int = 5 * 10**18

    # Crypto checkout: fixed conversion rate, USD cents per 1 ETH
    ETH_USD_PRICE_CENTS: int = 200_000
    MERCHANT_WALLET_ADDRESS: str = "0x742d35Cc6634C0532925a3b8D0C9C0E3C5d5c8E9"

    # App
    APP_NAME: str = "EcoFinds Marketplace"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
