from .core import (
    # Comparison
    ArrayMatch,
    ComparePolicy,
    # Exceptions
    CompatError,
    DepthLimitError,
    # Types
    Document,
    ElementNotFoundError,
    FailureRecord,
    FieldPath,
    MalformedValueError,
    MismatchError,
    MissingElementsError,
    MissingKeyError,
    RawValue,
    TypeMismatchError,
    ValueKind,
    ValueMismatchError,
    check,
    check_claims,
    # Classification and decoding
    classify,
    load_document,
    raw_check,
    to_document,
)
from .version import RAWCOMPAT_VERSION

__all__ = [
    # Version
    "RAWCOMPAT_VERSION",
    # Types
    "Document",
    "FailureRecord",
    "FieldPath",
    "RawValue",
    "ValueKind",
    # Classification and decoding
    "classify",
    "load_document",
    "to_document",
    # Comparison
    "ArrayMatch",
    "ComparePolicy",
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
