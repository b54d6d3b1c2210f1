"""Custom exceptions for mail-hostauth."""


class HostAuthError(Exception):
    """Base exception for mail-hostauth."""


class ConnectionStringError(HostAuthError):
    """Raised when a connection string cannot be produced or parsed."""


class EncodeError(ConnectionStringError):
    """Raised when a descriptor cannot be encoded as a connection string."""


class InvalidComponentsError(EncodeError):
    """Raised when a descriptor field is illegal for its position in the connection string."""

    def __init__(self, component: str, value: object, reason: str) -> None:
        self.component = component
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {component} {value!r}: {reason}")


class DecodeError(ConnectionStringError):
    """Raised when a connection string is structurally malformed."""

    def __init__(self, connection_string: str, reason: str) -> None:
        self.connection_string = connection_string
        self.reason = reason
        super().__init__(f"Cannot parse connection string: {reason}")


class ConfigError(HostAuthError):
    """Raised when there is a configuration error."""


class ConnectionNotFoundError(HostAuthError):
    """Raised when a requested named connection is not configured."""

    def __init__(self, connection_id: str) -> None:
        self.connection_id = connection_id
        super().__init__(f"Connection not found: {connection_id}")


class CredentialNotFoundError(ConfigError):
    """Raised when the password for a connection is not found."""

    def __init__(self, connection_id: str, env_keys: tuple[str, ...]) -> None:
        self.connection_id = connection_id
        self.env_keys = env_keys
        super().__init__(
            f"Missing password for connection '{connection_id}': "
            f"set one of {', '.join(env_keys)}"
        )
