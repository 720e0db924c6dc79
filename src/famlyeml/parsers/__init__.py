"""Parsing stages: payload location, transport decoding and table reading."""

from famlyeml.parsers.base import (
    DataTableNotFoundError,
    EnrollmentParseError,
    FieldTable,
    HtmlPartNotFoundError,
    HtmlPayload,
    PhoneNumbers,
    UnreadableInputError,
)
from famlyeml.parsers.mime_payload import decode_transport, extract_html, locate_html_part
from famlyeml.parsers.table_tokenizer import clean_text, tokenize_table

__all__ = [
    "DataTableNotFoundError",
    "EnrollmentParseError",
    "FieldTable",
    "HtmlPartNotFoundError",
    "HtmlPayload",
    "PhoneNumbers",
    "UnreadableInputError",
    "clean_text",
    "decode_transport",
    "extract_html",
    "locate_html_part",
    "tokenize_table",
]
