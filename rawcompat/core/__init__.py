"""Core types and logic for rawcompat."""

from .classify import classify
from .compat import (
    ArrayMatch,
    ComparePolicy,
    FailureCollector,
    check,
    check_claims,
    raw_check,
)
from .errors import (
    CompatError,
    DepthLimitError,
    ElementNotFoundError,
    MalformedValueError,
    MismatchError,
    MissingElementsError,
    MissingKeyError,
    TypeMismatchError,
    ValueMismatchError,
)
from .numbers import compare_numbers, format_float
from .rawjson import (
    decode_number,
    decode_string,
    load_document,
    split_array,
    split_object,
    to_document,
)
from .types import Document, FailureRecord, FieldPath, RawValue, ValueKind

__all__ = [
    # Types
    "Document",
    "FailureRecord",
    "FieldPath",
    "RawValue",
    "ValueKind",
    # Classification
    "classify",
    # Raw decoding
    "decode_number",
    "decode_string",
    "load_document",
    "split_array",
    "split_object",
    "to_document",
    # Numbers
    "compare_numbers",
    "format_float",
    # Comparison
    "ArrayMatch",
    "ComparePolicy",
    "FailureCollector",
    "check",
    "check_claims",
    "raw_check",
    # Exceptions
    "CompatError",
    "MalformedValueError",
    "DepthLimitError",
    "MismatchError",
    "TypeMismatchError",
    "ValueMismatchError",
    "MissingKeyError",
    "MissingElementsError",
    "ElementNotFoundError",
]
