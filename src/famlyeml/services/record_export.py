"""JSON views and file export of parsed records."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from famlyeml.config.constants import JSON_SECTIONS
from famlyeml.models.enrollment import EnrollmentRecord


def record_section(record: EnrollmentRecord, section: str = "all") -> dict[str, Any]:
    """JSON-ready view of a record or one of its sections.

    Sections:
        all: the whole record
        child: {"child": ...}
        contacts: parents, guardian and emergency contact
        health: doctor, immunisations and special needs

    Raises:
        ValueError: If the section name is unknown
    """
    if section not in JSON_SECTIONS:
        raise ValueError(f"Unknown section: {section} (expected one of {', '.join(JSON_SECTIONS)})")

    data = record.model_dump(mode="json")
    keys = JSON_SECTIONS[section]
    if not keys:
        return data
    return {key: data[key] for key in keys}


def to_json(data: dict[str, Any], indent: int = 2) -> str:
    """Serialize with accented names kept readable."""
    return json.dumps(data, indent=indent, ensure_ascii=False)


def write_json(data: dict[str, Any], path: str | Path, indent: int = 2) -> Path:
    """Write data as pretty-printed UTF-8 JSON, creating parent folders."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_json(data, indent) + "\n", encoding="utf-8")
    logger.info(f"Wrote {out_path}")
    return out_path
