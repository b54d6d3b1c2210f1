"""Tests for scheme suffix encoding and decoding."""

import pytest

from mail_hostauth.flags import SecurityFlag
from mail_hostauth.scheme import decode_scheme, encode_scheme, scheme_protocol


class TestEncodeScheme:
    @pytest.mark.parametrize(
        ("protocol", "flags", "expected"),
        [
            ("imap", SecurityFlag.SSL, "imap+ssl+"),
            ("imap", SecurityFlag.SSL | SecurityFlag.TRUST_ALL, "imap+ssl+trustallcerts"),
            ("smtp", SecurityFlag.TLS, "smtp+tls+"),
            ("smtp", SecurityFlag.TLS | SecurityFlag.TRUST_ALL, "smtp+tls+trustallcerts"),
            ("pop3", SecurityFlag.NONE, "pop3"),
        ],
    )
    def test_suffix_table(self, protocol: str, flags: SecurityFlag, expected: str) -> None:
        assert encode_scheme(protocol, flags) == expected

    def test_trust_all_alone_has_no_suffix(self) -> None:
        """Trusting all certificates only shows up together with SSL or TLS."""
        assert encode_scheme("imap", SecurityFlag.TRUST_ALL) == "imap"

    def test_authenticate_does_not_affect_suffix(self) -> None:
        flags = SecurityFlag.SSL | SecurityFlag.AUTHENTICATE
        assert encode_scheme("imap", flags) == "imap+ssl+"

    def test_ssl_and_tls_together_has_no_suffix(self) -> None:
        assert encode_scheme("imap", SecurityFlag.SSL | SecurityFlag.TLS) == "imap"

    def test_accepts_plain_int(self) -> None:
        assert encode_scheme("eas", 1) == "eas+ssl+"

    def test_unknown_protocol_kept(self) -> None:
        assert encode_scheme("xmpp", SecurityFlag.TLS) == "xmpp+tls+"


class TestDecodeScheme:
    def test_tls_trust_all(self) -> None:
        assert decode_scheme("imap+tls+trustallcerts") == SecurityFlag.TLS | SecurityFlag.TRUST_ALL

    def test_ssl(self) -> None:
        assert decode_scheme("imap+ssl+") == SecurityFlag.SSL

    def test_ssl_without_trailing_separator(self) -> None:
        assert decode_scheme("imap+ssl") == SecurityFlag.SSL

    def test_bare_protocol(self) -> None:
        assert decode_scheme("smtp") == SecurityFlag.NONE

    def test_unknown_tokens_ignored(self) -> None:
        assert decode_scheme("smtp+bogus+zzz") == SecurityFlag.NONE

    def test_unknown_security_with_trust_all(self) -> None:
        assert decode_scheme("imap+bogus+trustallcerts") == SecurityFlag.TRUST_ALL

    def test_tokens_are_case_sensitive(self) -> None:
        assert decode_scheme("imap+SSL+") == SecurityFlag.NONE

    def test_extra_segments_ignored(self) -> None:
        flags = decode_scheme("imap+ssl+trustallcerts+more")

        assert flags == SecurityFlag.SSL | SecurityFlag.TRUST_ALL

    def test_empty(self) -> None:
        assert decode_scheme("") == SecurityFlag.NONE

    @pytest.mark.parametrize(
        "flags",
        [
            SecurityFlag.NONE,
            SecurityFlag.SSL,
            SecurityFlag.SSL | SecurityFlag.TRUST_ALL,
            SecurityFlag.TLS,
            SecurityFlag.TLS | SecurityFlag.TRUST_ALL,
        ],
    )
    def test_decodes_every_encoded_suffix(self, flags: SecurityFlag) -> None:
        assert decode_scheme(encode_scheme("imap", flags)) == flags


class TestSchemeProtocol:
    def test_full_scheme(self) -> None:
        assert scheme_protocol("imap+ssl+trustallcerts") == "imap"

    def test_bare_protocol(self) -> None:
        assert scheme_protocol("pop3") == "pop3"
