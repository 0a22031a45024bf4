from urllib.parse import urlsplit

from app.services.errors import InvalidBaseURL

DEFAULT_PORTS = {"http": 80, "https": 443}


def origin(url: str) -> str:
    """Return scheme://host[:port] for an absolute URL.

    The default port for the scheme is omitted and the host is lower-cased.
    Raises ``InvalidBaseURL`` when ``url`` has no scheme or host.
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as exc:
        raise InvalidBaseURL(url) from exc

    host = parts.hostname
    if not parts.scheme or not host:
        raise InvalidBaseURL(url)

    scheme = parts.scheme.lower()
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def resolve_url(candidate: str, base_url: str) -> str:
    """Resolve ``candidate`` against ``base_url``.

    Best effort: if ``base_url`` is not absolute the candidate comes back
    unchanged.
    """
    if candidate.startswith("//"):
        return f"https:{candidate}"
    if candidate.startswith("http"):
        return candidate

    try:
        base = origin(base_url)
    except InvalidBaseURL:
        return candidate

    if candidate.startswith("/"):
        return f"{base}{candidate}"
    return f"{base}/{candidate}"
