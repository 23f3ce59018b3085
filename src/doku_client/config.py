from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.doku_client.errors import ConfigurationError
from src.models.credentials import Credentials


class DokuSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOKU_", env_file=".env", extra="ignore")

    client_id: str = Field(min_length=1)
    secret_key: SecretStr
    is_production: bool = False

    # Transport tuning
    timeout_seconds: float = Field(default=30, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)

    @field_validator("secret_key")
    @classmethod
    def _secret_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("Secret Key is required")
        return value

    def credentials(self) -> Credentials:
        return Credentials.from_flag(
            client_id=self.client_id,
            secret_key=self.secret_key.get_secret_value(),
            is_production=self.is_production,
        )


def load_settings(**overrides) -> DokuSettings:
    """Build settings from the environment, with keyword overrides taking precedence."""
    try:
        return DokuSettings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ConfigurationError(f"Invalid DOKU settings: {', '.join(fields)}") from e
