"""In-memory record of one mail server connection."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from mail_hostauth.flags import PORT_UNKNOWN, USER_CONFIG_MASK, SecurityFlag
from mail_hostauth.ports import MailProtocol, resolve_default_port
from mail_hostauth.scheme import decode_scheme, scheme_protocol

logger = logging.getLogger(__name__)

# Flat row layout used by the persistence layer
ROW_FIELDS = ("id", "protocol", "address", "port", "flags", "login", "password", "domain")

_UNSET: Any = object()


class ConnectionDescriptor(BaseModel):
    """Connection settings for one mail server: protocol, host, port, security and credentials.

    A new descriptor is empty, with ``port == PORT_UNKNOWN`` and no flags. It is
    populated with :meth:`set_connection` and :meth:`set_login`, or by decoding a
    connection string with :func:`mail_hostauth.uri.decode`.

    The AUTHENTICATE flag tracks whether a login is set: :meth:`set_login` keeps
    the two in step, and :meth:`get_login` only reports credentials while the
    flag is set.

    Attributes:
        id: Row identity assigned by the persistence layer (not part of equality).
        protocol: Protocol identifier such as "imap"; unknown values are kept.
        address: Host name or IP literal, trimmed when encoded.
        port: Port number, or PORT_UNKNOWN to infer it from protocol and SSL.
        flags: SecurityFlag bit set.
        login: User name, present iff AUTHENTICATE is set.
        password: Password, present alongside login.
        domain: Path suffix (e.g. an EAS mailbox path) without its leading "/".
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    protocol: str | None = None
    address: str | None = None
    port: int = PORT_UNKNOWN
    flags: int = SecurityFlag.NONE
    login: str | None = None
    password: SecretStr | None = None
    domain: str | None = None

    @field_validator("flags")
    @classmethod
    def _coerce_flags(cls, v: int) -> SecurityFlag:
        # Unnamed bits are kept as they are.
        if v < 0:
            raise ValueError(f"flags must not be negative, got {v}")
        return SecurityFlag(v)

    def set_login(self, login: str | None, password: str | SecretStr | None = _UNSET) -> None:
        """Set the credentials and the AUTHENTICATE flag.

        Called with a single argument, ``login`` is URI user info in the form
        ``user[:password]``; it is split on the first ":". Empty user info
        clears both login and password.

        Called with two arguments, both values are stored as given and
        AUTHENTICATE is set iff ``login`` is not None.
        """
        if password is _UNSET:
            login, password = _split_user_info(login)

        self.login = login
        self.password = password
        if login is None:
            self.flags = int(self.flags) & ~int(SecurityFlag.AUTHENTICATE)
        else:
            self.flags |= SecurityFlag.AUTHENTICATE

    def get_login(self) -> tuple[str, str] | None:
        """Return ``(login, password)`` if AUTHENTICATE is set, otherwise None.

        The login is trimmed and missing values are reported as empty strings.
        """
        if not self.flags & SecurityFlag.AUTHENTICATE:
            return None
        login = self.login.strip() if self.login is not None else ""
        password = self.password.get_secret_value() if self.password is not None else ""
        return login, password

    def set_connection(
        self,
        scheme: str,
        address: str | None,
        port: int = PORT_UNKNOWN,
        flags: int | None = None,
    ) -> None:
        """Set protocol, address, port and security mode.

        Args:
            scheme: A bare protocol ("imap") or a full scheme ("imap+ssl+").
                The protocol is the part before the first "+".
            address: Host name, stored verbatim.
            port: Port number; PORT_UNKNOWN infers the default for the
                protocol and SSL bit when the protocol is known.
            flags: Security flags to apply. Defaults to the flags named by
                ``scheme``. Only the user-configurable bits are taken; the
                AUTHENTICATE state is left unchanged.
        """
        if flags is None:
            flags = decode_scheme(scheme)

        self.protocol = scheme_protocol(scheme)
        mask = int(USER_CONFIG_MASK)
        self.flags = (int(self.flags) & ~mask) | (int(flags) & mask)
        self.address = address
        self.port = port

        if self.port == PORT_UNKNOWN:
            use_ssl = bool(self.flags & SecurityFlag.SSL)
            default_port = resolve_default_port(self.protocol, use_ssl)
            if default_port is not None:
                logger.debug(
                    "Inferred default port (protocol=%s, ssl=%s, port=%d)",
                    self.protocol,
                    use_ssl,
                    default_port,
                )
                self.port = default_port
            else:
                logger.debug("No default port for protocol %r; port left unknown", self.protocol)

    def is_eas_connection(self) -> bool:
        """Return True if this is an Exchange ActiveSync connection."""
        return self.protocol == MailProtocol.EAS.value

    def as_row(self) -> dict[str, Any]:
        """Return the descriptor as a flat row of scalar values for storage."""
        return {
            "id": self.id,
            "protocol": self.protocol,
            "address": self.address,
            "port": self.port,
            "flags": int(self.flags),
            "login": self.login,
            "password": self.password.get_secret_value() if self.password is not None else None,
            "domain": self.domain,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ConnectionDescriptor":
        """Restore a descriptor from a flat row produced by :meth:`as_row`."""
        return cls.model_validate({name: row[name] for name in ROW_FIELDS if name in row})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectionDescriptor):
            return NotImplemented
        return (
            self.port == other.port
            and self.flags == other.flags
            and self.protocol == other.protocol
            and self.address == other.address
            and self.login == other.login
            and self.password == other.password
            and self.domain == other.domain
        )

    def __str__(self) -> str:
        from mail_hostauth.uri import try_encode

        encoded = try_encode(self)
        return encoded if encoded is not None else repr(self)


def _split_user_info(user_info: str | None) -> tuple[str | None, str | None]:
    """Split ``user[:password]`` user info; empty input yields ``(None, None)``."""
    if not user_info:
        return None, None
    parts = user_info.split(":", 1)
    login = parts[0]
    password = parts[1] if len(parts) > 1 else None
    return login, password
