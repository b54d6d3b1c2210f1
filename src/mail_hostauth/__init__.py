"""Mail server connection descriptors and their connection-string codec."""

from mail_hostauth.descriptor import ConnectionDescriptor
from mail_hostauth.exceptions import (
    ConnectionStringError,
    DecodeError,
    EncodeError,
    HostAuthError,
    InvalidComponentsError,
)
from mail_hostauth.flags import PORT_UNKNOWN, USER_CONFIG_MASK, SecurityFlag
from mail_hostauth.ports import MailProtocol, resolve_default_port
from mail_hostauth.scheme import decode_scheme, encode_scheme
from mail_hostauth.uri import apply_connection_string, decode, encode, try_encode

__version__ = "0.1.0"

__all__ = [
    "PORT_UNKNOWN",
    "USER_CONFIG_MASK",
    "ConnectionDescriptor",
    "ConnectionStringError",
    "DecodeError",
    "EncodeError",
    "HostAuthError",
    "InvalidComponentsError",
    "MailProtocol",
    "SecurityFlag",
    "apply_connection_string",
    "decode",
    "decode_scheme",
    "encode",
    "encode_scheme",
    "resolve_default_port",
    "try_encode",
]
