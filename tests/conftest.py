"""Shared fixtures: builders for Famly form HTML and EML messages."""

import html
import quopri

import pytest

from famlyeml.config import settings

BOUNDARY = "----=_Part_4471_1093882341.1700000000000"

SAMPLE_ROWS: list[tuple[str, str]] = [
    ("Please choose from the list below", "Little Acorns Creche"),
    ("Required Start Date", "01/09/2025"),
    ("Type of Placement", "Full Time"),
    ("Average Weekly Term Hours", "40"),
    ("Average Weekly Holiday Hours", "20"),
    ("Child's Name (as it appears on birth certificate)", "Aoibhín Stafford"),
    ("Known as (if different from above)", "Aoife"),
    ("Date of Birth", "01/01/2022"),
    ("Sex: Male/Female", "Female"),
    ("Address", "123 Main Street, Dublin"),
    ("Child's First Language", "Irish"),
    ("Parent 1 - Name", "Siobhán O'Connor"),
    ("Mobile", "0871111111"),
    ("Landline", "014444444"),
    ("Parent 1 Email", "siobhan@example.com"),
    ("Parent 1 Address - Same as above?", "Yes"),
    ("Parent 2 - Name", "Seán Murphy"),
    ("Mobile", "0862222222"),
    ("Parent 2 Email", "sean@example.com"),
    ("Address - Same as above?", "Yes"),
    ("Guardian Email", "gran@example.com"),
    ("Mobile", "0853333333"),
    ("Guardian Address - Same as above?", "No"),
    ("Guardian Eircode", "D02 XY45"),
    ("Primary Contact", "Parent 1"),
    ("Other Email", "other@example.com"),
    ("Mobile", "0834444444"),
    ("Emergency Contact Name", "Máire Walsh"),
    ("Mobile", "0895555555"),
    ("Email", "maire@example.com"),
    ("Emergency Contact Address - Same as above?", "Yes"),
    ("Doctors Name", "Dr. Ó Briain"),
    ("Doctors Landline", "016666666"),
    ("Doctors Address", "Clinic Road, Dublin"),
    ("(2 Months) 6 in 1 + MenB* + PCV +Rotavirus", "Yes"),
    ("Please enter date of 6 in 1 + MenB* + PCV +Rotavirus", "01/03/2022"),
    ("(13 Months) Hib/MenC + PCV", "Yes"),
    ("Medical Condition(s)", "No"),
    ("Allergies e.g. food, medicine, other pollutants", "Yes"),
    ("As you answered 'Yes', we require additional information.", "Peanut allergy"),
    ("Notes", "Collects on Fridays"),
]


def make_table_html(rows: list[tuple[str, str]], table_attr: str = 'id="emailFieldsTable"') -> str:
    """Build a form page with one question/answer row per pair."""
    cells = "\n".join(
        f'<tr><td class="questionColumn">{html.escape(q)}</td>'
        f'<td class="valueColumn">{html.escape(v)}</td></tr>'
        for q, v in rows
    )
    return (
        "<html><head><title>New enrollment</title></head><body>\n"
        "<p>A new form has been submitted.</p>\n"
        f"<table {table_attr}>\n{cells}\n</table>\n"
        "</body></html>"
    )


def qp_encode(data: bytes) -> str:
    """Quoted-printable encode bytes the way mail clients do."""
    return quopri.encodestring(data).decode("ascii")


def make_eml(
    html_text: str,
    charset: str | None = "utf-8",
    body_bytes: bytes | None = None,
    newline: str = "\n",
) -> str:
    """Wrap HTML in a multipart/alternative message with a plain-text part first."""
    if body_bytes is None:
        body_bytes = html_text.encode(charset or "utf-8")
    content_type = f'text/html; charset="{charset}"' if charset else "text/html"

    lines = [
        "From: Famly <noreply@famly.co>",
        "To: office@littleacorns.ie",
        "Subject: New enrollment form",
        "MIME-Version: 1.0",
        f'Content-Type: multipart/alternative; boundary="{BOUNDARY}"',
        "",
        f"--{BOUNDARY}",
        "Content-Type: text/plain; charset=us-ascii",
        "Content-Transfer-Encoding: 7bit",
        "",
        "A new form has been submitted.",
        "",
        f"--{BOUNDARY}",
        f"Content-Type: {content_type}",
        "Content-Transfer-Encoding: quoted-printable",
        "",
        # The line break before a delimiter belongs to the delimiter
        qp_encode(body_bytes).rstrip("\n"),
        f"--{BOUNDARY}--",
        "",
    ]
    return newline.join(lines)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Each test reads configuration from its own environment."""
    monkeypatch.setattr(settings, "_config", None)


@pytest.fixture
def sample_html() -> str:
    """Decoded form HTML with every section filled in."""
    return make_table_html(SAMPLE_ROWS)


@pytest.fixture
def sample_eml(sample_html) -> str:
    """UTF-8 quoted-printable message carrying the sample form."""
    return make_eml(sample_html)


@pytest.fixture
def build_html():
    """Factory for form HTML from (question, answer) rows."""
    return make_table_html


@pytest.fixture
def build_eml():
    """Factory for EML messages wrapping form HTML."""
    return make_eml


@pytest.fixture
def sample_rows() -> list[tuple[str, str]]:
    return list(SAMPLE_ROWS)
