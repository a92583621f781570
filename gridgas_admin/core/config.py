from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "GridGas Admin API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (hosted Postgres via asyncpg, or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./gridgas_dev.db",
        alias="DATABASE_URL",
    )

    # Hosted BaaS (auth, storage, edge functions)
    supabase_url: str = Field(default="http://localhost:54321", alias="SUPABASE_URL")
    supabase_anon_key: str = Field(default="", alias="SUPABASE_ANON_KEY")
    supabase_service_role_key: str | None = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY",
    )  # Never sent to the browser
    http_timeout: float = Field(default=15.0, alias="HTTP_TIMEOUT")

    # Console unlock PIN; empty disables the gate
    admin_pin: str = Field(default="", alias="ADMIN_PIN")

    # Vendor approval email (best-effort)
    email_service_url: str = Field(default="", alias="EMAIL_SERVICE_URL")
    email_service_key: str = Field(default="", alias="EMAIL_SERVICE_KEY")
    email_from_vendor_approval: str = Field(
        default="support@gridgas.network", alias="EMAIL_FROM_VENDOR_APPROVAL",
    )
    email_from_vendor_approval_name: str = Field(
        default="GridGas", alias="EMAIL_FROM_VENDOR_APPROVAL_NAME",
    )

    # Manual vend
    default_rate_per_kg: float = Field(default=1500.0, alias="DEFAULT_RATE_PER_KG")
    vend_max_amount_naira: float = Field(default=1_000_000_000, alias="VEND_MAX_AMOUNT_NAIRA")
    vend_min_kg: float = Field(default=1.0, alias="VEND_MIN_KG")
    vend_max_kg: float = Field(default=100.0, alias="VEND_MAX_KG")
    vend_token_function: str = Field(default="vendor-vend-token", alias="VEND_TOKEN_FUNCTION")
    vend_send_function: str = Field(default="tb-send-vend", alias="VEND_SEND_FUNCTION")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def email_enabled(self) -> bool:
        """Approval emails are sent only when both URL and key are configured."""
        return bool(self.email_service_url and self.email_service_key)

settings = Settings()
