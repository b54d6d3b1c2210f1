"""Passwords from environment variables."""

import logging
import os
import re

from pydantic import SecretStr

from mail_hostauth.config import ConnectionConfig
from mail_hostauth.credentials.base import CredentialBackend
from mail_hostauth.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)


def env_name(value: str) -> str:
    """Upper-case ``value`` and replace everything but letters and digits with "_".

    ``"work-imap"`` becomes ``"WORK_IMAP"`` and ``"alice@example.com"`` becomes
    ``"ALICE_EXAMPLE_COM"``.
    """
    return re.sub(r"[^a-zA-Z0-9]", "_", value).upper()


def password_env_keys(config: ConnectionConfig, login: str) -> list[str]:
    """Return the variables searched for a connection's password, in order.

    A ``password_env`` set on the connection is the only variable consulted.
    Otherwise the connection-specific variable comes first, then one shared by
    every connection with the same login (an IMAP and an SMTP connection of one
    mailbox, say).
    """
    if config.password_env is not None:
        return [config.password_env]
    keys = [f"HOSTAUTH_CONNECTION_{env_name(config.id)}_PASSWORD"]
    if login.strip():
        keys.append(f"HOSTAUTH_LOGIN_{env_name(login.strip())}_PASSWORD")
    return keys


class EnvCredentialBackend(CredentialBackend):
    """Reads passwords from the variables named by :func:`password_env_keys`.

    A variable that is set but empty is a blank password.
    """

    def get_password(self, config: ConnectionConfig, login: str) -> SecretStr:
        keys = password_env_keys(config, login)
        for key in keys:
            value = os.environ.get(key)
            if value is not None:
                logger.debug("Password for connection %s read from %s", config.id, key)
                return SecretStr(value)
        raise CredentialNotFoundError(config.id, tuple(keys))
