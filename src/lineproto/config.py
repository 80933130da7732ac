"""Configuration handling for the lineproto server."""

from dataclasses import dataclass, field
from pathlib import Path
import yaml

PROTOCOLS = ("ftp", "smtp")
DEFAULT_PORTS = {"ftp": 2121, "smtp": 2525}


@dataclass
class Config:
    """Configuration settings for the lineproto server.

    Attributes:
        protocol: Protocol variant to serve ("ftp" or "smtp").
        host: Address to listen on.
        port: Port to listen on (None picks the protocol's default).
        greeting: Text of the 220 greeting (None picks the protocol's default).
        idle_timeout_seconds: Seconds without data before a connection is dropped.
        max_line_length: Largest command line buffered before giving up.
        max_payload_size: Largest message body buffered before giving up.
        allow_anonymous: Accept user "anonymous" with any password.
        accounts: Mapping of user names to passwords.
    """

    protocol: str = "ftp"
    host: str = "127.0.0.1"
    port: int | None = None
    greeting: str | None = None
    idle_timeout_seconds: int = 300
    max_line_length: int = 4096
    max_payload_size: int = 10 * 1024 * 1024
    allow_anonymous: bool = False
    accounts: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.protocol not in PROTOCOLS:
            raise ValueError(f"Unknown protocol: {self.protocol}")

    def get_port(self) -> int:
        """Get the listening port, falling back to the protocol default."""
        if self.port is None:
            return DEFAULT_PORTS[self.protocol]
        return self.port


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the protocol is not supported.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    server = data.get("server", {})
    limits = data.get("limits", {})
    auth = data.get("auth", {})

    return Config(
        protocol=server.get("protocol", Config.protocol),
        host=server.get("host", Config.host),
        port=server.get("port", Config.port),
        greeting=server.get("greeting", Config.greeting),
        idle_timeout_seconds=server.get("idle_timeout_seconds", Config.idle_timeout_seconds),
        max_line_length=limits.get("max_line_length", Config.max_line_length),
        max_payload_size=limits.get("max_payload_size", Config.max_payload_size),
        allow_anonymous=auth.get("allow_anonymous", Config.allow_anonymous),
        accounts={str(k): str(v) for k, v in (auth.get("accounts") or {}).items()},
    )
