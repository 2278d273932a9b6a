"""Configuration dataclasses for schema sync."""

from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_PORT = 1521


@dataclass
class SchemaConfig:
    """Connection settings for the schema engine."""

    host: Optional[str] = None
    port: Optional[int] = None
    service_name: Optional[str] = None
    sid: Optional[str] = None

    # Full connect descriptor or EZConnect string, used instead of host/port
    dsn: Optional[str] = None

    username: Optional[str] = None
    password: Optional[str] = None

    # Schema owner; defaults to the connecting user
    owner: Optional[str] = None

    verbosity: int = 0

    def __post_init__(self) -> None:
        if self.port is None and self.host:
            self.port = DEFAULT_PORT

    def validate(self) -> None:
        """Validate the configuration is complete and consistent."""
        if not self.dsn:
            if not self.host:
                raise ConfigurationError("Host or DSN is required")
            if not self.service_name and not self.sid:
                raise ConfigurationError("Service name or SID is required")
        if not self.username or not self.password:
            raise ConfigurationError("Username and password are required")

    @property
    def resolved_owner(self) -> str:
        """Owner whose tables are managed, upper-cased like unquoted identifiers."""
        owner = self.owner or self.username
        if not owner:
            raise ConfigurationError("Owner cannot be resolved without a username")
        return owner.upper()
