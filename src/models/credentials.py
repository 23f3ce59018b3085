from dataclasses import dataclass, field
from enum import Enum
from typing import Self


class Environment(Enum):
    PRODUCTION = "PRODUCTION"
    SANDBOX = "SANDBOX"


BASE_URLS = {
    Environment.PRODUCTION: "https://api.doku.com",
    Environment.SANDBOX: "https://api-sandbox.doku.com",
}


@dataclass(frozen=True)
class Credentials:
    client_id: str
    secret_key: str = field(repr=False)
    environment: Environment = Environment.SANDBOX

    def __post_init__(self):
        if not self.client_id:
            raise ValueError("Client ID is required")
        if not self.secret_key:
            raise ValueError("Secret Key is required")

    @classmethod
    def from_flag(cls, client_id: str, secret_key: str, is_production: bool) -> Self:
        environment = Environment.PRODUCTION if is_production else Environment.SANDBOX
        return cls(client_id=client_id, secret_key=secret_key, environment=environment)

    @property
    def base_url(self) -> str:
        return BASE_URLS[self.environment]
