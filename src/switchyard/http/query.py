"""Query string parsing.

The dispatcher works with a plain, mutable ``dict[str, str]`` for the
query so schemas can validate it and replace it with coerced values.
"""

from urllib.parse import parse_qsl


def parse_query(query_string: bytes | str) -> dict[str, str]:
    """Parse a raw query string into a flat dict.

    Blank values are kept. When a key repeats, the last value wins::

        parse_query(b"page=1&tag=a&tag=b")  # {"page": "1", "tag": "b"}
    """
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    return dict(parse_qsl(query_string, keep_blank_values=True))
