"""Leaf schemas: string, number, boolean, file, any.

Leaf schemas are coercive rather than strict. A query string value
``"42"`` is a fine number and ``"TRUE"`` a fine boolean. Each leaf
reports at most one issue: the first constraint that fails, checked in
a fixed order that does not depend on the order the constraints were
declared in.
"""

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from switchyard.http.forms import UploadFile
from switchyard.validation.base import MISSING, Schema, describe_type, stringify
from switchyard.validation.issues import IssueCode

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$", re.IGNORECASE)
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_URL_RE = re.compile(r"^https?://.+")

_REQUIRED = "Required"


@dataclass(frozen=True, slots=True)
class Bound:
    """A numeric limit and the message reported when it is violated."""

    value: int | float
    message: str


@dataclass(frozen=True, slots=True)
class Affix:
    """A required prefix or suffix."""

    value: str
    message: str


@dataclass(frozen=True, slots=True)
class Pattern:
    """A user-supplied regex, matched anywhere in the string."""

    regex: re.Pattern[str]
    message: str


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StringSchema(Schema[str]):
    """Stringifies its input, then checks constraints in this order:

    1. length bounds: min (``too_small``), max (``too_big``),
       exact (``invalid_length``)
    2. affixes: prefix, then suffix (``invalid_string``)
    3. user regexes, in declaration order (``invalid_string``)
    4. formats: email, uuid, url (``invalid_string``)
    """

    message: str | None = None
    min_length: Bound | None = None
    max_length: Bound | None = None
    exact_length: Bound | None = None
    prefix: Affix | None = None
    suffix: Affix | None = None
    patterns: tuple[Pattern, ...] = ()
    email_message: str | None = None
    uuid_message: str | None = None
    url_message: str | None = None

    def _message(self, message: str | None, default: str) -> str:
        return message or self.message or default

    def min(self, length: int, message: str | None = None) -> "StringSchema":
        text = self._message(message, f"String must be at least {length} characters")
        return replace(self, min_length=Bound(length, text))

    def max(self, length: int, message: str | None = None) -> "StringSchema":
        text = self._message(message, f"String must be at most {length} characters")
        return replace(self, max_length=Bound(length, text))

    def length(self, length: int, message: str | None = None) -> "StringSchema":
        text = self._message(message, f"String must be exactly {length} characters")
        return replace(self, exact_length=Bound(length, text))

    def starts_with(self, prefix: str, message: str | None = None) -> "StringSchema":
        text = self._message(message, f'String must start with "{prefix}"')
        return replace(self, prefix=Affix(prefix, text))

    def ends_with(self, suffix: str, message: str | None = None) -> "StringSchema":
        text = self._message(message, f'String must end with "{suffix}"')
        return replace(self, suffix=Affix(suffix, text))

    def regex(self, pattern: str | re.Pattern[str], message: str | None = None) -> "StringSchema":
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        text = self._message(message, "String does not match required pattern")
        return replace(self, patterns=(*self.patterns, Pattern(compiled, text)))

    def email(self, message: str | None = None) -> "StringSchema":
        return replace(self, email_message=self._message(message, "Invalid email format"))

    def uuid(self, message: str | None = None) -> "StringSchema":
        return replace(self, uuid_message=self._message(message, "Invalid UUID format"))

    def url(self, message: str | None = None) -> "StringSchema":
        return replace(self, url_message=self._message(message, "Invalid URL format"))

    def parse(self, value: Any) -> str:
        if value is MISSING:
            raise self._fail(self.message or _REQUIRED, IssueCode.INVALID_TYPE)

        text = stringify(value)

        if self.min_length is not None and len(text) < self.min_length.value:
            raise self._fail(self.min_length.message, IssueCode.TOO_SMALL)
        if self.max_length is not None and len(text) > self.max_length.value:
            raise self._fail(self.max_length.message, IssueCode.TOO_BIG)
        if self.exact_length is not None and len(text) != self.exact_length.value:
            raise self._fail(self.exact_length.message, IssueCode.INVALID_LENGTH)

        if self.prefix is not None and not text.startswith(self.prefix.value):
            raise self._fail(self.prefix.message, IssueCode.INVALID_STRING)
        if self.suffix is not None and not text.endswith(self.suffix.value):
            raise self._fail(self.suffix.message, IssueCode.INVALID_STRING)

        for pattern in self.patterns:
            if pattern.regex.search(text) is None:
                raise self._fail(pattern.message, IssueCode.INVALID_STRING)

        if self.email_message is not None and not _EMAIL_RE.match(text):
            raise self._fail(self.email_message, IssueCode.INVALID_STRING)
        if self.uuid_message is not None and not _UUID_RE.match(text):
            raise self._fail(self.uuid_message, IssueCode.INVALID_STRING)
        if self.url_message is not None and not _URL_RE.match(text):
            raise self._fail(self.url_message, IssueCode.INVALID_STRING)

        return text


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------


def coerce_number(value: Any) -> int | float | None:
    """Numeric parse used by ``NumberSchema``; ``None`` means "not a number".

    Booleans count as 1/0, strings are stripped before parsing, and
    integral results come back as ``int``. Blank strings, NaN and
    non-scalar values are not numbers.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number):
        return None
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


@dataclass(frozen=True, slots=True)
class NumberSchema(Schema[int | float]):
    """Coerces its input to a number, then checks integer, positive,
    negative, min and max, in that order.
    """

    message: str | None = None
    integer_message: str | None = None
    positive_message: str | None = None
    negative_message: str | None = None
    minimum: Bound | None = None
    maximum: Bound | None = None

    def _message(self, message: str | None, default: str) -> str:
        return message or self.message or default

    def min(self, value: int | float, message: str | None = None) -> "NumberSchema":
        text = self._message(message, f"Number must be at least {value}")
        return replace(self, minimum=Bound(value, text))

    def max(self, value: int | float, message: str | None = None) -> "NumberSchema":
        text = self._message(message, f"Number must be at most {value}")
        return replace(self, maximum=Bound(value, text))

    def integer(self, message: str | None = None) -> "NumberSchema":
        return replace(self, integer_message=self._message(message, "Expected integer, got float"))

    def positive(self, message: str | None = None) -> "NumberSchema":
        return replace(self, positive_message=self._message(message, "Number must be positive"))

    def negative(self, message: str | None = None) -> "NumberSchema":
        return replace(self, negative_message=self._message(message, "Number must be negative"))

    def parse(self, value: Any) -> int | float:
        if value is MISSING:
            raise self._fail(self.message or _REQUIRED, IssueCode.INVALID_TYPE)

        number = coerce_number(value)
        if number is None:
            text = self.message or f'Cannot convert "{stringify(value)}" to number'
            raise self._fail(text, IssueCode.INVALID_TYPE)

        if self.integer_message is not None and not isinstance(number, int):
            raise self._fail(self.integer_message, IssueCode.INVALID_TYPE)
        if self.positive_message is not None and number <= 0:
            raise self._fail(self.positive_message, IssueCode.TOO_SMALL)
        if self.negative_message is not None and number >= 0:
            raise self._fail(self.negative_message, IssueCode.TOO_BIG)
        if self.minimum is not None and number < self.minimum.value:
            raise self._fail(self.minimum.message, IssueCode.TOO_SMALL)
        if self.maximum is not None and number > self.maximum.value:
            raise self._fail(self.maximum.message, IssueCode.TOO_BIG)

        return number


# ---------------------------------------------------------------------------
# Boolean / file / any
# ---------------------------------------------------------------------------

_TRUE_TOKENS = frozenset({"true", "1"})
_FALSE_TOKENS = frozenset({"false", "0"})


@dataclass(frozen=True, slots=True)
class BooleanSchema(Schema[bool]):
    """Accepts exactly ``true``/``1`` and ``false``/``0``, in any letter case."""

    message: str | None = None

    def parse(self, value: Any) -> bool:
        if value is MISSING:
            raise self._fail(self.message or _REQUIRED, IssueCode.INVALID_TYPE)

        token = stringify(value).lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False

        text = self.message or (
            f'Cannot convert "{stringify(value)}" to boolean. '
            'Expected "true", "false", "1", or "0"'
        )
        raise self._fail(text, IssueCode.INVALID_TYPE)


@dataclass(frozen=True, slots=True)
class FileSchema(Schema[UploadFile]):
    """Accepts an uploaded file, then checks min size, max size and type.

    Sizes are in bytes. ``accept`` matches the file's content type by
    prefix, so ``"image/"`` allows every image type.
    """

    message: str | None = None
    min_bytes: Bound | None = None
    max_bytes: Bound | None = None
    content_types: tuple[str, ...] = ()
    content_type_message: str | None = None

    def _message(self, message: str | None, default: str) -> str:
        return message or self.message or default

    def min_size(self, size: int, message: str | None = None) -> "FileSchema":
        text = self._message(message, f"File size must be at least {size} bytes")
        return replace(self, min_bytes=Bound(size, text))

    def max_size(self, size: int, message: str | None = None) -> "FileSchema":
        text = self._message(message, f"File size must be at most {size} bytes")
        return replace(self, max_bytes=Bound(size, text))

    def accept(self, types: Iterable[str], message: str | None = None) -> "FileSchema":
        allowed = tuple(types)
        text = self._message(message, f"File type must be one of: {', '.join(allowed)}")
        return replace(self, content_types=allowed, content_type_message=text)

    def parse(self, value: Any) -> UploadFile:
        if value is MISSING:
            raise self._fail(self.message or _REQUIRED, IssueCode.INVALID_TYPE)
        if not isinstance(value, UploadFile):
            text = self.message or f"Expected file, got {describe_type(value)}"
            raise self._fail(text, IssueCode.INVALID_TYPE)

        if self.min_bytes is not None and value.size < self.min_bytes.value:
            raise self._fail(self.min_bytes.message, IssueCode.TOO_SMALL)
        if self.max_bytes is not None and value.size > self.max_bytes.value:
            raise self._fail(self.max_bytes.message, IssueCode.TOO_BIG)
        if self.content_type_message is not None and not value.content_type.startswith(
            self.content_types
        ):
            raise self._fail(self.content_type_message, IssueCode.INVALID_TYPE)

        return value


@dataclass(frozen=True, slots=True)
class AnySchema(Schema[Any]):
    """Accepts anything and returns it unchanged."""

    def parse(self, value: Any) -> Any:
        return value
