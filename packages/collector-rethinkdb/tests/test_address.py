"""
Tests for server address resolution.

Tests cover:
- Literal host and host:port pairs
- URL-like addresses with a scheme
- IPv6 addresses, bracketed and bare
- Default address when nothing is configured
- ParseError for malformed input
"""

import pytest

from collector_rethinkdb.address import (
    DEFAULT_ADDRESS,
    DEFAULT_PORT,
    ServerAddress,
    resolve_address,
    resolve_servers,
)
from collector_rethinkdb.errors import ParseError


class TestResolveAddress:
    """Tests for resolve_address()."""

    def test_host_and_port(self):
        """host:port literal is split into host and port."""
        address = resolve_address("10.0.0.1:28015")

        assert address == ServerAddress(host="10.0.0.1", port=28015)
        assert address.tag == "10.0.0.1:28015"

    def test_bare_host_gets_default_port(self):
        """A host without a port uses the default driver port."""
        address = resolve_address("localhost")

        assert address.host == "localhost"
        assert address.port == DEFAULT_PORT
        assert address.tag == "localhost:28015"

    def test_custom_port(self):
        """Non-default ports are kept."""
        assert resolve_address("10.10.3.33:18832").port == 18832

    def test_surrounding_whitespace_is_ignored(self):
        """Leading/trailing whitespace does not end up in the host."""
        assert resolve_address("  db-1:28016 ").tag == "db-1:28016"

    def test_url_with_scheme(self):
        """URL-like addresses use the network location."""
        address = resolve_address("rethinkdb://db-1.internal:28016")

        assert address == ServerAddress(host="db-1.internal", port=28016)

    def test_url_without_port(self):
        """URL without a port gets the default port."""
        assert resolve_address("rethinkdb://db-1").port == DEFAULT_PORT

    def test_url_userinfo_is_dropped(self):
        """Credentials in a URL are not part of the address."""
        assert resolve_address("rethinkdb://admin@db-1:28015").tag == "db-1:28015"

    def test_bracketed_ipv6(self):
        """[addr]:port form is supported for IPv6."""
        address = resolve_address("[::1]:28016")

        assert address.host == "::1"
        assert address.port == 28016
        assert address.tag == "[::1]:28016"

    def test_bare_ipv6(self):
        """An unbracketed IPv6 address is taken as the host."""
        address = resolve_address("fe80::1")

        assert address.host == "fe80::1"
        assert address.port == DEFAULT_PORT

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "db-1:abc",
            "db-1:70000",
            "db-1:0",
            "db-1:\u00b2",
            "db-1:\u0661\u0662",
            "db-1:+80",
            ":28015",
            "[::1",
            "[::1]x",
            "rethinkdb://",
            "rethinkdb://[::1",
        ],
    )
    def test_malformed_raises_parse_error(self, raw):
        """Malformed addresses raise ParseError carrying the raw input."""
        with pytest.raises(ParseError) as exc_info:
            resolve_address(raw)

        assert exc_info.value.raw == raw


class TestResolveServers:
    """Tests for resolve_servers()."""

    def test_empty_list_yields_default_address(self):
        """No configured servers means exactly one default address."""
        assert resolve_servers([]) == [DEFAULT_ADDRESS]

    def test_default_address_connects_to_localhost(self):
        """The default address has an empty host but connects to localhost."""
        assert DEFAULT_ADDRESS.host == ""
        assert DEFAULT_ADDRESS.connect_host == "localhost"
        assert DEFAULT_ADDRESS.tag == "localhost:28015"

    def test_preserves_order(self):
        """Addresses come back in configuration order."""
        result = resolve_servers(["db-2", "db-1:28016"])

        assert [a.tag for a in result] == ["db-2:28015", "db-1:28016"]

    def test_malformed_entry_aborts(self):
        """One malformed entry fails the whole resolution."""
        with pytest.raises(ParseError):
            resolve_servers(["db-1", "db-2:notaport", "db-3"])
