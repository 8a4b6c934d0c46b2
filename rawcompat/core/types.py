from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Tuple, Union

# One undecoded JSON value. str is accepted and treated as its UTF-8 encoding.
RawValue = Union[bytes, str]

# A JSON object as key -> undecoded member value.
Document = Mapping[str, RawValue]


class ValueKind(Enum):
    """
    Syntactic kind of a raw JSON value.

    true and false are separate kinds: two booleans of the same kind are
    already equal, and a boolean mismatch is reported as a type mismatch.
    """

    NULL = "null"
    FALSE = "false"
    TRUE = "true"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldPath:
    """
    Dotted location of a value inside a document, e.g. ``obj_fail.fail.0``.

    Paths are values: child() returns a new path and never touches the
    receiver, so sibling branches of a walk cannot see each other's segments.
    """

    segments: Tuple[str, ...] = ()

    @classmethod
    def root(cls) -> "FieldPath":
        return cls()

    def child(self, segment: Union[str, int]) -> "FieldPath":
        return FieldPath(self.segments + (str(segment),))

    def __str__(self) -> str:
        return ".".join(self.segments)


@dataclass(frozen=True)
class FailureRecord:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}
