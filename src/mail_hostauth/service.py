"""Connection service for resolving named connections into descriptors."""

import structlog

from mail_hostauth.config import ConnectionConfig
from mail_hostauth.credentials.base import CredentialBackend
from mail_hostauth.descriptor import ConnectionDescriptor
from mail_hostauth.exceptions import ConnectionNotFoundError
from mail_hostauth.uri import decode

logger = structlog.get_logger()


class ConnectionService:
    """Service for looking up configured connections by ID.

    Decodes the configured connection strings and fills in passwords that
    were left out of them from a credential backend.
    """

    def __init__(
        self,
        connections: list[ConnectionConfig],
        credentials: CredentialBackend,
    ) -> None:
        """Initialize the connection service.

        Args:
            connections: List of named connection configurations.
            credentials: Backend for retrieving connection passwords.
        """
        self._connections = {c.id: c for c in connections}
        self._credentials = credentials

    def list_connections(self) -> list[str]:
        """Return configured connection IDs in the order they were configured."""
        return list(self._connections.keys())

    def get_config(self, connection_id: str) -> ConnectionConfig:
        """Get the configuration for a connection.

        Raises:
            ConnectionNotFoundError: If the connection ID is not found.
        """
        config = self._connections.get(connection_id)
        if not config:
            raise ConnectionNotFoundError(connection_id)
        return config

    def get_descriptor(self, connection_id: str) -> ConnectionDescriptor:
        """Return a new descriptor for the connection.

        If the connection authenticates but its string carries no password,
        the password is retrieved from the credential backend.

        Raises:
            ConnectionNotFoundError: If the connection ID is not found.
            CredentialNotFoundError: If a required password cannot be retrieved.
        """
        config = self.get_config(connection_id)
        descriptor = decode(config.connection)

        if descriptor.login is not None and descriptor.password is None:
            password = self._credentials.get_password(config, descriptor.login)
            descriptor.set_login(descriptor.login, password)
            logger.debug("Password loaded from credential backend", connection_id=connection_id)

        logger.debug(
            "Resolved connection",
            connection_id=connection_id,
            protocol=descriptor.protocol,
            port=descriptor.port,
        )
        return descriptor
