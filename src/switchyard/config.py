"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, preflight_method="OPTIONS")
    """

    debug: bool = False

    # Requests with this method are answered with an empty 200 after the
    # global middleware ran, before any route is matched.
    preflight_method: str = "OPTIONS"

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Body decoding
    default_charset: str = "utf-8"
