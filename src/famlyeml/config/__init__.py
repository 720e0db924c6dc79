"""Configuration module for famlyeml."""

from famlyeml.config.constants import (
    DATA_TABLE_ID,
    EML_EXTENSION,
    JSON_SECTIONS,
    QUESTION_CLASS_MARKER,
    VALUE_CLASS_MARKER,
)
from famlyeml.config.settings import Config, get_config

__all__ = [
    "Config",
    "get_config",
    "DATA_TABLE_ID",
    "EML_EXTENSION",
    "JSON_SECTIONS",
    "QUESTION_CLASS_MARKER",
    "VALUE_CLASS_MARKER",
]
