import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_PROXY_URL = "https://sdk-proxy.sns.id"
DEFAULT_HTTP_TIMEOUT = 5.0


class ConfigurationError(RuntimeError):
    """Raised when an environment setting cannot be used."""


@dataclass
class SnsConfig:
    rpc_url: str = DEFAULT_RPC_URL
    proxy_url: str = DEFAULT_PROXY_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def load_config(**overrides) -> SnsConfig:
    """
    Read settings from the environment (and a .env file if present).
    Keyword overrides that are not None win over the environment.
    """
    load_dotenv()
    timeout_raw = os.getenv("SNS_HTTP_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"SNS_HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from None
    if timeout <= 0:
        raise ConfigurationError("SNS_HTTP_TIMEOUT must be positive")

    config = SnsConfig(
        rpc_url=os.getenv("SNS_RPC_URL") or DEFAULT_RPC_URL,
        proxy_url=(os.getenv("SNS_PROXY_URL") or DEFAULT_PROXY_URL).rstrip("/"),
        http_timeout=timeout,
    )
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    return config
