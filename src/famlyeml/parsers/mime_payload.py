"""Locate and decode the HTML body part of a Famly email export.

Only the single text/html part is handled; this is not a general MIME
parser. The decoder is best-effort and never raises: anything it cannot
repair is left in the text as-is.
"""

import base64
import binascii
import codecs
import re

from loguru import logger

from famlyeml.parsers.base import HtmlPayload, HtmlPartNotFoundError
from famlyeml.parsers.charset_repair import decode_residual_escapes, repair_mojibake


class PayloadLocator:
    """Find the first text/html part and its declared charset."""

    HTML_CONTENT_TYPE_PATTERN = re.compile(r"^Content-Type:[ \t]*text/html\b", re.IGNORECASE | re.MULTILINE)
    CHARSET_PATTERN = re.compile(r"charset\s*=\s*\"?([^\s\";]+)\"?", re.IGNORECASE)
    TRANSFER_ENCODING_PATTERN = re.compile(
        r"^Content-Transfer-Encoding:[ \t]*([\w-]+)", re.IGNORECASE | re.MULTILINE
    )
    BOUNDARY_PATTERN = re.compile(r"boundary\s*=\s*\"?([^\";\r\n]+)\"?", re.IGNORECASE)

    def locate(self, message: str) -> HtmlPayload:
        """Return the first HTML part, preferring one that declares a charset.

        Args:
            message: Full raw message text

        Returns:
            HtmlPayload with the still-encoded body

        Raises:
            HtmlPartNotFoundError: If the message has no text/html part
        """
        text = message.replace("\r\n", "\n")
        boundaries = [b.strip() for b in self.BOUNDARY_PATTERN.findall(text)]

        candidates = [self._read_part(text, match.start(), boundaries)
                      for match in self.HTML_CONTENT_TYPE_PATTERN.finditer(text)]
        if not candidates:
            raise HtmlPartNotFoundError("No HTML part found in EML file")

        for payload in candidates:
            if payload.charset:
                return payload

        logger.debug("HTML part declares no charset")
        return candidates[0]

    def _read_part(self, text: str, header_pos: int, boundaries: list[str]) -> HtmlPayload:
        # Part headers run from the previous blank line to the next one
        headers_start = text.rfind("\n\n", 0, header_pos)
        headers_start = 0 if headers_start == -1 else headers_start + 2
        headers_end = text.find("\n\n", header_pos)
        if headers_end == -1:
            headers = text[headers_start:]
            body = ""
        else:
            headers = text[headers_start:headers_end]
            body = text[headers_end + 2:]

        # Unfold continuation lines so parameters on the next line are seen
        content_type = re.sub(r"\n[ \t]+", " ", headers[header_pos - headers_start:])
        content_type = content_type.split("\n", 1)[0]

        charset_match = self.CHARSET_PATTERN.search(content_type)
        encoding_match = self.TRANSFER_ENCODING_PATTERN.search(headers)

        return HtmlPayload(
            body=self._cut_at_boundary(body, boundaries),
            charset=charset_match.group(1).lower() if charset_match else None,
            transfer_encoding=encoding_match.group(1).lower() if encoding_match else None,
        )

    @staticmethod
    def _cut_at_boundary(body: str, boundaries: list[str]) -> str:
        end = len(body)
        for boundary in boundaries:
            delimiter = f"--{boundary}"
            if body.startswith(delimiter):
                return ""
            pos = body.find(f"\n{delimiter}")
            if pos != -1:
                end = min(end, pos)
        return body[:end]


class TransportDecoder:
    """Undo quoted-printable encoding and repair charset damage."""

    SOFT_LINE_BREAK_PATTERN = re.compile(r"=[ \t]*\r?\n")
    ESCAPE_PATTERN = re.compile(r"=([0-9A-Fa-f]{2})")

    # Runs of byte-valued characters left by escape decoding
    HIGH_BYTE_RUN_PATTERN = re.compile(r"[\x80-\xff]+")
    UTF8_SEQUENCE_PATTERN = re.compile(
        r"[\xc2-\xdf][\x80-\xbf]|[\xe0-\xef][\x80-\xbf]{2}|[\xf0-\xf4][\x80-\xbf]{3}"
    )

    WESTERN_SINGLE_BYTE_CODECS = frozenset({"iso8859-1", "iso8859-15", "cp1252"})
    PASSTHROUGH_ENCODINGS = frozenset({"7bit", "8bit", "binary"})

    def __init__(self, default_charset: str = "utf-8"):
        self.default_charset = default_charset

    def decode(self, body: str, charset: str | None = None, transfer_encoding: str | None = None) -> str:
        """Decode a transport-encoded body into clean text.

        Args:
            body: Body text as found in the message
            charset: Declared charset, or None to use the default
            transfer_encoding: Content-Transfer-Encoding, or None for quoted-printable

        Returns:
            Decoded text
        """
        if transfer_encoding in self.PASSTHROUGH_ENCODINGS:
            text = body
        else:
            if transfer_encoding == "base64":
                text = self._decode_base64(body)
            else:
                text = self.decode_quoted_printable(body)
            text = self.reinterpret_charset(text, charset or self.default_charset)

        text = repair_mojibake(text)
        return decode_residual_escapes(text)

    def decode_quoted_printable(self, text: str) -> str:
        """Remove soft line breaks and turn ``=XX`` escapes into byte characters.

        Escapes are decoded in a single pass, so ``=3DC3`` becomes the literal
        text ``=C3`` rather than being decoded twice.
        """
        text = self.SOFT_LINE_BREAK_PATTERN.sub("", text)
        return self.ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1), 16)), text)

    def reinterpret_charset(self, text: str, charset: str) -> str:
        """Read byte characters as the declared charset.

        Single-byte Western European charsets decode each run of high bytes
        with that codec. UTF-8 reassembles each well-formed multi-byte
        sequence; stray bytes are left for the mojibake table.
        """
        try:
            codec = codecs.lookup(charset).name
        except LookupError:
            logger.warning(f"Unknown charset {charset!r}, leaving bytes as-is")
            return text

        if codec == "utf-8":
            return self.UTF8_SEQUENCE_PATTERN.sub(self._join_utf8, text)
        if codec in self.WESTERN_SINGLE_BYTE_CODECS:
            return self.HIGH_BYTE_RUN_PATTERN.sub(lambda m: self._decode_run(m.group(0), codec), text)

        logger.debug(f"No byte reinterpretation for charset {codec}")
        return text

    @staticmethod
    def _join_utf8(match: re.Match) -> str:
        sequence = match.group(0)
        try:
            return sequence.encode("latin-1").decode("utf-8")
        except UnicodeDecodeError:
            return sequence

    @staticmethod
    def _decode_run(run: str, codec: str) -> str:
        try:
            return run.encode("latin-1").decode(codec)
        except UnicodeDecodeError:
            # cp1252 leaves five bytes unassigned; fall back per character
            return "".join(
                codecs.decode(char.encode("latin-1"), codec, errors="ignore") or char
                for char in run
            )

    @staticmethod
    def _decode_base64(body: str) -> str:
        try:
            return base64.b64decode("".join(body.split())).decode("latin-1")
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Invalid base64 body, leaving as-is: {e}")
            return body


def locate_html_part(message: str) -> HtmlPayload:
    """Locate the HTML part of a raw message. See PayloadLocator.locate."""
    return PayloadLocator().locate(message)


def decode_transport(
    body: str,
    charset: str | None = None,
    transfer_encoding: str | None = None,
    default_charset: str = "utf-8",
) -> str:
    """Decode a transport-encoded body. See TransportDecoder.decode."""
    return TransportDecoder(default_charset=default_charset).decode(body, charset, transfer_encoding)


def extract_html(message: str, default_charset: str = "utf-8") -> str:
    """Locate and decode the HTML part in one step.

    Raises:
        HtmlPartNotFoundError: If the message has no text/html part
    """
    payload = locate_html_part(message)
    logger.debug(
        f"HTML part located: charset={payload.charset}, "
        f"transfer_encoding={payload.transfer_encoding}, {len(payload.body)} chars"
    )
    return decode_transport(payload.body, payload.charset, payload.transfer_encoding, default_charset)
