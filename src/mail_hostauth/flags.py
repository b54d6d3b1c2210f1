"""Security flag bits and sentinel values shared by the descriptor and its codecs."""

from enum import IntFlag


class SecurityFlag(IntFlag):
    """Connection security and authentication bits.

    SSL and TLS are mutually exclusive in practice: the codecs never set both,
    although the type does not forbid it.
    """

    NONE = 0x00
    SSL = 0x01
    TLS = 0x02
    AUTHENTICATE = 0x04  # use login/password
    TRUST_ALL = 0x08  # trust all certificates


# Bits the user edits directly. AUTHENTICATE is derived from the login.
USER_CONFIG_MASK = SecurityFlag.SSL | SecurityFlag.TLS | SecurityFlag.TRUST_ALL

PORT_UNKNOWN = -1


def describe_flags(flags: int) -> str:
    """Return the names of the set flags, e.g. "SSL|AUTHENTICATE"."""
    names = [flag.name for flag in SecurityFlag if flag and flags & flag]
    return "|".join(names) if names else SecurityFlag.NONE.name
