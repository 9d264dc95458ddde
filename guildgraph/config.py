import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://discord.com/api/v10"


@dataclass(frozen=True)
class Settings:
    token: str
    api_base: str = DEFAULT_API_BASE
    # Seconds before an HTTP request is abandoned and surfaced as a TransportError
    http_timeout: float = 10.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    api_base = os.getenv("GUILDGRAPH_API_BASE", "").strip() or DEFAULT_API_BASE
    raw_timeout = os.getenv("GUILDGRAPH_HTTP_TIMEOUT", "").strip()
    http_timeout = 10.0
    if raw_timeout:
        try:
            http_timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"GUILDGRAPH_HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from None
        if http_timeout <= 0:
            raise ValueError("GUILDGRAPH_HTTP_TIMEOUT must be positive")
    log_level = os.getenv("GUILDGRAPH_LOG_LEVEL", "").strip().upper() or "INFO"
    return Settings(
        token=token,
        api_base=api_base,
        http_timeout=http_timeout,
        log_level=log_level,
    )
