"""Schema validation: composable, coercive validators with path-addressed errors.

Usage::

    from switchyard.validation import s

    schema = s.object({"name": s.string().min(3), "tags": s.array(s.string())})

    schema.parse({"name": "ada", "tags": ["x"]})   # {"name": "ada", "tags": ["x"]}

    result = schema.safe_parse({"name": "ab", "tags": [1, None]})
    if not result:
        result.error.to_list()
        # [{"path": ["name"], "message": "String must be at least 3 characters",
        #   "code": "too_small"}]
"""

from switchyard.validation.base import MISSING, Schema
from switchyard.validation.builder import SchemaBuilder, s
from switchyard.validation.composite import (
    ArraySchema,
    EnumSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    UnionSchema,
)
from switchyard.validation.issues import Issue, IssueCode, ParseResult, ValidationError
from switchyard.validation.primitives import (
    AnySchema,
    BooleanSchema,
    FileSchema,
    NumberSchema,
    StringSchema,
)

__all__ = [
    "MISSING",
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "EnumSchema",
    "FileSchema",
    "Issue",
    "IssueCode",
    "NullableSchema",
    "NumberSchema",
    "ObjectSchema",
    "OptionalSchema",
    "ParseResult",
    "Schema",
    "SchemaBuilder",
    "StringSchema",
    "UnionSchema",
    "ValidationError",
    "s",
]
