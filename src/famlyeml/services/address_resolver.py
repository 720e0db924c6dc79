"""Apply "Address - Same as above?" answers.

Rules run in a fixed order and each reads the already resolved address of
the contact it copies from, so Parent 2 can inherit the child's address
through Parent 1:

1. Parent 1 copies the child's address.
2. Parent 2 copies Parent 1's address.
3. The guardian copies Parent 1's address.
4. The emergency contact copies Parent 1's address.

A rule applies only when the flag contains "yes" (any case) and the source
address is non-empty. Parents are taken by list position.
"""

from loguru import logger
from pydantic import BaseModel

from famlyeml.models.enrollment import EnrollmentRecord


def is_same_as_above(flag: str) -> bool:
    """Check a same-as-above answer."""
    return "yes" in (flag or "").lower()


def _inherit(contact: BaseModel, source_address: str, label: str) -> BaseModel:
    if is_same_as_above(contact.address_same_as_above) and source_address:
        logger.debug(f"{label} address taken from the contact above")
        return contact.model_copy(update={"address": source_address})
    return contact


def resolve_addresses(record: EnrollmentRecord) -> EnrollmentRecord:
    """Return a copy of the record with inherited addresses filled in."""
    parents = list(record.parents)

    if parents:
        parents[0] = _inherit(parents[0], record.child.address, "Parent 1")
    if len(parents) > 1:
        parents[1] = _inherit(parents[1], parents[0].address, "Parent 2")

    parent1_address = parents[0].address if parents else ""

    return record.model_copy(
        update={
            "parents": parents,
            "guardian": _inherit(record.guardian, parent1_address, "Guardian"),
            "emergency_contact": _inherit(record.emergency_contact, parent1_address, "Emergency contact"),
        }
    )
