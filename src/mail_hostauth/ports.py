"""Known mail protocols and their default ports."""

from enum import Enum
from types import MappingProxyType


class MailProtocol(str, Enum):
    """Protocol identifiers with a known default port.

    Descriptors keep the protocol as a plain string; identifiers outside this
    set are preserved as-is and simply have no default port.
    """

    POP3 = "pop3"
    IMAP = "imap"
    EAS = "eas"
    SMTP = "smtp"


# protocol -> (plain port, SSL port). TLS runs on the plain port.
DEFAULT_PORTS = MappingProxyType(
    {
        MailProtocol.POP3.value: (110, 995),
        MailProtocol.IMAP.value: (143, 993),
        MailProtocol.EAS.value: (80, 443),
        MailProtocol.SMTP.value: (587, 465),
    }
)


def resolve_default_port(protocol: str | None, use_ssl: bool) -> int | None:
    """Return the default port for ``protocol``, or None if the protocol is unknown."""
    if isinstance(protocol, MailProtocol):
        protocol = protocol.value
    ports = DEFAULT_PORTS.get(protocol) if protocol is not None else None
    if ports is None:
        return None
    plain, ssl = ports
    return ssl if use_ssl else plain
