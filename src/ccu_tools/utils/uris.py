"""Uri helpers"""
from urllib import parse

__all__ = ["join", "host_url"]


def join(base: str, *parts: str, quote: bool = False) -> str:
    """Append path parts to a base url, keeping any path on the base."""
    if not parts:
        return base

    path = "/".join(
        (parse.quote(part.strip("/"), safe="/") if quote else part.strip("/"))
        for part in parts
    )
    return f"{base.rstrip('/')}/{path}"


def host_url(host: str) -> str:
    """Turn an .edgerc host entry into an https base url."""
    host = host.strip().rstrip("/")
    for scheme in ("https://", "http://"):
        host = host.removeprefix(scheme)
    return f"https://{host}"
