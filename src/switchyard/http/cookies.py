"""Cookie header parsing for requests."""


def parse_cookies(header: str | None) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Only well-formed ``name=value`` pairs are kept: a pair with no ``=``
    or with more than one ``=`` is skipped. Returns an empty dict for an
    empty or missing header.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        parts = pair.strip().split("=")
        if len(parts) != 2:
            continue
        cookies[parts[0]] = parts[1]
    return cookies
