"""Parse a Famly enrollment email into an EnrollmentRecord.

Pipeline:
    raw message -> HTML part -> decoded HTML -> field table
    field table -> phone numbers (contact linker)
    field table + phone numbers -> record (projector) -> resolved addresses

Every call is independent; nothing is kept between parses.
"""

from pathlib import Path

from loguru import logger

from famlyeml.config import get_config
from famlyeml.models.enrollment import EnrollmentRecord
from famlyeml.parsers.base import EnrollmentParseError, FieldTable, UnreadableInputError
from famlyeml.parsers.mime_payload import extract_html
from famlyeml.parsers.table_tokenizer import tokenize_table
from famlyeml.services.address_resolver import resolve_addresses
from famlyeml.services.contact_linker import link_phone_numbers
from famlyeml.services.field_projector import project_record


def read_fields(html: str, table_id: str | None = None) -> FieldTable:
    """Tokenize the form table of decoded HTML.

    Raises:
        DataTableNotFoundError: If the table is missing
    """
    return tokenize_table(html, table_id or get_config().data_table_id)


def build_record(table: FieldTable) -> EnrollmentRecord:
    """Run the linker, projector and address resolver over a field table."""
    phones = link_phone_numbers(table.pairs)
    record = project_record(table, phones)
    return resolve_addresses(record)


def parse_html(html: str, table_id: str | None = None) -> EnrollmentRecord:
    """Parse an already decoded HTML document (no MIME wrapper).

    Raises:
        UnreadableInputError: If the HTML is empty
        DataTableNotFoundError: If the table is missing
    """
    if not html or not html.strip():
        raise UnreadableInputError("HTML content is empty")
    return build_record(read_fields(html, table_id))


def extract_fields(eml_content: str, table_id: str | None = None) -> FieldTable:
    """Locate, decode and tokenize the form table of a raw message.

    Raises:
        UnreadableInputError: If the message is empty
        HtmlPartNotFoundError: If the message has no HTML part
        DataTableNotFoundError: If the HTML has no form table
    """
    if not isinstance(eml_content, str) or not eml_content.strip():
        raise UnreadableInputError("EML content is empty")

    html = extract_html(eml_content, default_charset=get_config().default_charset)
    return read_fields(html, table_id)


def parse_eml(eml_content: str, table_id: str | None = None) -> EnrollmentRecord:
    """Parse a raw EML message into an enrollment record.

    Args:
        eml_content: Full message text
        table_id: Override for the form table id

    Returns:
        EnrollmentRecord with every field present

    Raises:
        UnreadableInputError: If the message is empty
        HtmlPartNotFoundError: If the message has no HTML part
        DataTableNotFoundError: If the HTML has no form table
    """
    try:
        table = extract_fields(eml_content, table_id)
    except EnrollmentParseError as e:
        logger.error(f"EML parsing error: {e}")
        raise

    record = build_record(table)
    logger.info(
        f"Parsed enrollment for {record.child.name or 'unnamed child'}: "
        f"{len(table.pairs)} rows, {len(record.parents)} parent(s)"
    )
    return record


def read_eml_file(path: str | Path) -> str:
    """Read an EML file as text.

    Bytes are decoded as UTF-8, falling back to Latin-1 so 8-bit exports
    still load.

    Raises:
        UnreadableInputError: If the file cannot be read or is empty
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise UnreadableInputError(f"Failed to read file: {file_path}") from e

    if not data.strip():
        raise UnreadableInputError(f"File is empty: {file_path}")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"{file_path.name} is not UTF-8, reading as Latin-1")
        return data.decode("latin-1")


def parse_eml_file(path: str | Path, table_id: str | None = None) -> EnrollmentRecord:
    """Read and parse an EML file. See parse_eml."""
    return parse_eml(read_eml_file(path), table_id)
