"""
Shared types and exceptions for the EML parsing pipeline.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


# Custom exceptions
class EnrollmentParseError(Exception):
    """Base exception for enrollment parsing errors."""

    code = "parse_error"


class UnreadableInputError(EnrollmentParseError):
    """Raised when the input is empty or cannot be read."""

    code = "input_unreadable"


class HtmlPartNotFoundError(EnrollmentParseError):
    """Raised when the message has no text/html part."""

    code = "html_not_found"


class DataTableNotFoundError(EnrollmentParseError):
    """Raised when the decoded HTML has no question/answer table."""

    code = "table_not_found"


# label -> value, or label -> [values] when the label repeats
RawFieldTable = Mapping[str, str | list[str]]
OrderedPairs = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class HtmlPayload:
    """The located HTML body part, still transport-encoded.

    Attributes:
        body: Raw body text of the part
        charset: Declared charset (lower case), or None when absent
        transfer_encoding: Content-Transfer-Encoding (lower case), or None
    """

    body: str
    charset: str | None = None
    transfer_encoding: str | None = None


@dataclass(frozen=True)
class FieldTable:
    """Question/answer rows read from the data table.

    Attributes:
        raw: label -> value lookup; repeated labels hold a list in row order
        pairs: every kept (label, value) row in table order
    """

    raw: RawFieldTable = field(default_factory=lambda: MappingProxyType({}))
    pairs: OrderedPairs = ()

    def first(self, label: str) -> str:
        """Get the value for a label, or its first value when repeated."""
        value = self.raw.get(label, "")
        if isinstance(value, list):
            return value[0] if value else ""
        return value

    def all(self, label: str) -> list[str]:
        """Get every value recorded for a label, in row order."""
        value = self.raw.get(label)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def to_dict(self) -> dict:
        """Plain JSON-ready view of the table."""
        return {
            "raw": {label: (list(v) if isinstance(v, list) else v) for label, v in self.raw.items()},
            "flat": [list(pair) for pair in self.pairs],
        }


@dataclass
class PhoneNumbers:
    """Phone numbers attributed to one contact role."""

    mobile: str | None = None
    landline: str | None = None


# role tag -> numbers
PhoneAssociations = dict[str, PhoneNumbers]
