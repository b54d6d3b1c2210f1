"""Interface for looking up passwords left out of connection strings."""

from abc import ABC, abstractmethod

from pydantic import SecretStr

from mail_hostauth.config import ConnectionConfig


class CredentialBackend(ABC):
    """Supplies the password of a configured connection.

    A configured connection string may name a login without a password
    (``imap+ssl+://alice@mail.example.com``). :class:`ConnectionService` then
    asks a backend for the password, passing the connection's configuration and
    the login decoded from its string, so a backend can key its lookup on
    either.
    """

    @abstractmethod
    def get_password(self, config: ConnectionConfig, login: str) -> SecretStr:
        """Return the password for ``login`` on the configured connection.

        Raises:
            CredentialNotFoundError: If no password is available.
        """
        ...
