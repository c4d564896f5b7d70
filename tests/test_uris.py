import pytest

from ccu_tools.utils import uris


@pytest.mark.parametrize(
    "expected,parts",
    [
        # No slashes
        ("https://example.org/abc", ("https://example.org", "abc")),
        # Trailing slash on base
        ("https://example.org/abc", ("https://example.org/", "abc")),
        # Leading slash on part
        ("https://example.org/abc", ("https://example.org", "/abc")),
        # Both slashes on part
        ("https://example.org/abc", ("https://example.org", "/abc/")),
        # Multiple parts
        ("https://example.org/ccu/v2/queues/default", ("https://example.org", "ccu/v2/queues", "default")),
        # Path on base is kept
        ("https://example.org/api/abc", ("https://example.org/api", "abc")),
        # No parts
        ("https://example.org", ("https://example.org",)),
    ],
)
def test_join(expected, parts):
    assert uris.join(*parts) == expected


def test_join_quote():
    assert uris.join("https://example.org", "ccu/v2/purges", "a b+c", quote=True) == (
        "https://example.org/ccu/v2/purges/a%20b%2Bc"
    )


@pytest.mark.parametrize(
    "host",
    [
        "akab-abc.luna.akamaiapis.net",
        "akab-abc.luna.akamaiapis.net/",
        "https://akab-abc.luna.akamaiapis.net",
        " akab-abc.luna.akamaiapis.net ",
    ],
)
def test_host_url(host):
    assert uris.host_url(host) == "https://akab-abc.luna.akamaiapis.net"
