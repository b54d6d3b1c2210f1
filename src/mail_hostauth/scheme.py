"""Mapping between security flags and connection string scheme suffixes.

A scheme is ``protocol[+security[+trustallcerts]]``, e.g. ``imap+ssl+`` or
``smtp+tls+trustallcerts``.
"""

import logging

from mail_hostauth.flags import USER_CONFIG_MASK, SecurityFlag

logger = logging.getLogger(__name__)

SCHEME_SEPARATOR = "+"

# Exact masked values only: TRUST_ALL alone maps to no suffix.
_SCHEME_SUFFIXES: dict[SecurityFlag, str] = {
    SecurityFlag.SSL: "+ssl+",
    SecurityFlag.SSL | SecurityFlag.TRUST_ALL: "+ssl+trustallcerts",
    SecurityFlag.TLS: "+tls+",
    SecurityFlag.TLS | SecurityFlag.TRUST_ALL: "+tls+trustallcerts",
}

_SECURITY_TOKENS: dict[str, SecurityFlag] = {
    "ssl": SecurityFlag.SSL,
    "tls": SecurityFlag.TLS,
}

TRUST_ALL_TOKEN = "trustallcerts"


def encode_scheme(protocol: str, flags: int) -> str:
    """Return the scheme for ``protocol`` with the suffix selected by ``flags``."""
    masked = SecurityFlag(flags & USER_CONFIG_MASK)
    return protocol + _SCHEME_SUFFIXES.get(masked, "")


def decode_scheme(scheme: str) -> SecurityFlag:
    """Return the security flags named by a scheme.

    Unrecognized security or certificate tokens are ignored, so foreign or
    hand-edited schemes decode to ``SecurityFlag.NONE`` instead of failing.
    """
    parts = scheme.split(SCHEME_SEPARATOR)
    flags = SecurityFlag.NONE
    if len(parts) >= 2:
        security = _SECURITY_TOKENS.get(parts[1])
        if security is not None:
            flags |= security
        elif parts[1]:
            logger.debug("Ignoring unknown security token in scheme (token=%r)", parts[1])
        if len(parts) >= 3:
            if parts[2] == TRUST_ALL_TOKEN:
                flags |= SecurityFlag.TRUST_ALL
            elif parts[2]:
                logger.debug("Ignoring unknown certificate token in scheme (token=%r)", parts[2])
    return flags


def scheme_protocol(scheme: str) -> str:
    """Return the protocol part of a scheme (everything before the first ``+``)."""
    return scheme.split(SCHEME_SEPARATOR, 1)[0]
