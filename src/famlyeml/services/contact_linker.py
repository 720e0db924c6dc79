"""Attribute trailing "Mobile"/"Landline" rows to the contact they follow.

The form asks for phone numbers under generic questions ("Mobile",
"Landline") right after each contact's name or email, so the owning contact
is only known from row order.
"""

from collections.abc import Iterable

from loguru import logger

from famlyeml.parsers.base import PhoneAssociations, PhoneNumbers
from famlyeml.parsers.field_mapping import LANDLINE_MARKER, MOBILE_MARKER, ROLE_MARKERS


def opened_role(label: str) -> str | None:
    """Return the role a row label opens, if any."""
    for marker, role in ROLE_MARKERS:
        if marker in label:
            return role
    return None


def link_phone_numbers(pairs: Iterable[tuple[str, str]]) -> PhoneAssociations:
    """Collect phone numbers per contact role in one forward pass.

    Args:
        pairs: (label, value) rows in table order

    Returns:
        role tag -> PhoneNumbers; a later number of the same kind overwrites
        an earlier one
    """
    phones: PhoneAssociations = {}
    role: str | None = None

    for label, value in pairs:
        role = opened_role(label) or role

        if MOBILE_MARKER in label:
            kind = "mobile"
        elif LANDLINE_MARKER in label:
            kind = "landline"
        else:
            continue

        if role is None:
            logger.debug(f"Ignoring {kind} row {label!r} before any contact section")
            continue

        setattr(phones.setdefault(role, PhoneNumbers()), kind, value)

    return phones
