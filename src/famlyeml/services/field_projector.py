"""Project a field table onto the enrollment record.

Most fields come straight from the tables in parsers/field_mapping.py. The
rules that do not fit a table (parent presence, guardian inference,
immunisation pairing and special-needs details) live here as functions.
"""

from loguru import logger

from famlyeml.models.enrollment import (
    Child,
    Doctor,
    EmergencyContact,
    EnrollmentRecord,
    Guardian,
    Immunisation,
    Parent,
    PrimaryContact,
    SpecialNeed,
)
from famlyeml.parsers.base import FieldTable, PhoneAssociations
from famlyeml.parsers.field_mapping import (
    CHILD_FIELDS,
    DOCTOR_FIELDS,
    EMERGENCY_CONTACT_FIELDS,
    GUARDIAN_FIELDS,
    GUARDIAN_PROVIDED_LABELS,
    IMMUNISATION_DATE_LABELS,
    PARENT_FIELDS,
    PARENT_NAME_LABELS,
    PRIMARY_CONTACT_FIELDS,
    RECORD_FIELDS,
    SPECIAL_NEED_DEFAULT,
    SPECIAL_NEED_LABELS,
    SPECIAL_NEEDS_DETAILS_LABEL,
    FieldMap,
    FieldSource,
    PhoneRef,
)


class FieldProjector:
    """Table-driven interpreter for the field mapping.

    One instance serves a single parse: it holds the field table and the
    phone numbers linked from it.
    """

    def __init__(self, table: FieldTable, phones: PhoneAssociations):
        self.table = table
        self.phones = phones

    def resolve(self, source: FieldSource) -> str:
        """Value of one source, or "" when absent."""
        if isinstance(source, PhoneRef):
            numbers = self.phones.get(source.role)
            if numbers is None:
                return ""
            return getattr(numbers, source.kind) or ""
        return self.table.first(source)

    def project(self, fields: FieldMap) -> dict[str, str]:
        """Resolve every destination field of a mapping."""
        values = {}
        for name, sources in fields.items():
            values[name] = next((v for v in map(self.resolve, sources) if v), "")
        return values

    def build_child(self) -> Child:
        return Child(**self.project(CHILD_FIELDS))

    def build_parents(self) -> list[Parent]:
        parents = []
        for name_label, fields in zip(PARENT_NAME_LABELS, PARENT_FIELDS):
            if self.table.first(name_label):
                parents.append(Parent(**self.project(fields)))
        return parents

    def build_guardian(self) -> Guardian:
        values = self.project(GUARDIAN_FIELDS)
        provided = next((self.table.first(label) for label in GUARDIAN_PROVIDED_LABELS
                         if self.table.first(label)), "")
        if not provided:
            provided = "Yes" if values["email"] else "No"
        return Guardian(provided=provided, **values)

    def build_primary_contact(self) -> PrimaryContact:
        return PrimaryContact(**self.project(PRIMARY_CONTACT_FIELDS))

    def build_emergency_contact(self) -> EmergencyContact:
        return EmergencyContact(**self.project(EMERGENCY_CONTACT_FIELDS))

    def build_doctor(self) -> Doctor:
        return Doctor(**self.project(DOCTOR_FIELDS))

    def build_immunisations(self) -> list[Immunisation]:
        """Vaccines with either a received answer or a date."""
        immunisations = []
        for label, date_label in IMMUNISATION_DATE_LABELS.items():
            received = self.table.first(label)
            date = self.table.first(date_label)
            if received or date:
                immunisations.append(Immunisation(label=label, received=received, date=date))
        return immunisations

    def build_special_needs(self) -> list[SpecialNeed]:
        """Special-needs answers with details handed out in schema order.

        The form has a single details question that repeats once per "Yes"
        answer, so its values are consumed positionally by the "Yes" entries.
        """
        details = self.table.all(SPECIAL_NEEDS_DETAILS_LABEL)
        pointer = 0
        needs = []

        for label in SPECIAL_NEED_LABELS:
            need = SpecialNeed(type=label, provided=self.table.first(label) or SPECIAL_NEED_DEFAULT)
            if need.provided.lower() == "yes" and pointer < len(details):
                need.details = details[pointer]
                pointer += 1
            needs.append(need)

        if pointer < len(details):
            logger.warning(f"{len(details) - pointer} special-needs details left unassigned")
        return needs

    def build_record(self) -> EnrollmentRecord:
        """Project the whole record (addresses not yet resolved)."""
        return EnrollmentRecord(
            **self.project(RECORD_FIELDS),
            child=self.build_child(),
            parents=self.build_parents(),
            guardian=self.build_guardian(),
            primary_contact=self.build_primary_contact(),
            emergency_contact=self.build_emergency_contact(),
            doctor=self.build_doctor(),
            immunisations=self.build_immunisations(),
            special_needs=self.build_special_needs(),
        )


def project_record(table: FieldTable, phones: PhoneAssociations) -> EnrollmentRecord:
    """Project a field table and its linked phone numbers onto a record."""
    return FieldProjector(table, phones).build_record()
