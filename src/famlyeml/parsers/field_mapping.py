"""Field mapping from Famly form questions to the enrollment record.

This is the single source of truth for which question label feeds which
record field. The projector in services/field_projector.py interprets these
tables; nothing here contains logic.

Each destination field maps to an ordered tuple of sources. A source is
either a question label (looked up in the field table) or a PhoneRef (looked
up in the phone numbers collected by the contact linker). The first source
with a non-empty value wins; when none has one the field is "".

Example:
    # Doctor landline: the dedicated question first, then whatever
    # "Landline" row followed the doctor's name
    "landline": ("Doctors Landline", PhoneRef("doctor", "landline")),
"""

from typing import Final, NamedTuple


class PhoneRef(NamedTuple):
    """Reference to a phone number collected for a contact role."""

    role: str
    kind: str  # "mobile" or "landline"


FieldSource = str | PhoneRef
FieldMap = dict[str, tuple[FieldSource, ...]]

# =============================================================================
# Contact roles
# =============================================================================
#
# Role-opening markers, checked in order against each row label (substring
# match). A matching row switches the current role; "Mobile"/"Landline" rows
# that follow are attributed to it.
#
# =============================================================================

ROLE_PARENT1: Final = "parent1"
ROLE_PARENT2: Final = "parent2"
ROLE_GUARDIAN: Final = "guardian"
ROLE_PRIMARY: Final = "primary"
ROLE_EMERGENCY: Final = "emergency"
ROLE_DOCTOR: Final = "doctor"

ROLE_MARKERS: Final[tuple[tuple[str, str], ...]] = (
    ("Parent 1 - Name", ROLE_PARENT1),
    ("Parent 2 - Name", ROLE_PARENT2),
    ("Guardian Email", ROLE_GUARDIAN),
    ("Other Email", ROLE_PRIMARY),
    ("Primary Contact", ROLE_PRIMARY),
    ("Emergency Contact Name", ROLE_EMERGENCY),
    ("Doctors Name", ROLE_DOCTOR),
)

MOBILE_MARKER: Final = "Mobile"
LANDLINE_MARKER: Final = "Landline"

# =============================================================================
# Record fields
# =============================================================================

RECORD_FIELDS: Final[FieldMap] = {
    "creche_name": ("Please choose from the list below",),
    "start_date": ("Required Start Date",),
    "placement_type": ("Type of Placement",),
    "term_hours": ("Average Weekly Term Hours",),
    "holiday_hours": ("Average Weekly Holiday Hours",),
    "notes": ("Notes",),
}

CHILD_FIELDS: Final[FieldMap] = {
    "name": ("Child's Name (as it appears on birth certificate)",),
    "known_as": ("Known as (if different from above)",),
    "dob": ("Date of Birth",),
    "gender": ("Sex: Male/Female",),
    "address": ("Address",),
    "first_language": ("Child's First Language",),
}

# -------------------------------------------------------------------------
# Parents: an entry exists only when its name question was answered
# -------------------------------------------------------------------------
PARENT_NAME_LABELS: Final[tuple[str, str]] = ("Parent 1 - Name", "Parent 2 - Name")

PARENT_FIELDS: Final[tuple[FieldMap, FieldMap]] = (
    {
        "name": ("Parent 1 - Name",),
        "mobile": (PhoneRef(ROLE_PARENT1, "mobile"),),
        "landline": (PhoneRef(ROLE_PARENT1, "landline"),),
        "email": ("Parent 1 Email",),
        "address_same_as_above": ("Parent 1 Address - Same as above?",),
        "address": ("Parent 1 Address",),
    },
    {
        "name": ("Parent 2 - Name",),
        "mobile": (PhoneRef(ROLE_PARENT2, "mobile"),),
        "landline": (PhoneRef(ROLE_PARENT2, "landline"),),
        "email": ("Parent 2 Email",),
        # The form re-uses the bare question for the second parent
        "address_same_as_above": ("Address - Same as above?",),
        "address": ("Parent 2 Address",),
    },
)

GUARDIAN_FIELDS: Final[FieldMap] = {
    "name": ("Guardian Name",),
    "email": ("Guardian Email",),
    "mobile": (PhoneRef(ROLE_GUARDIAN, "mobile"),),
    "landline": (PhoneRef(ROLE_GUARDIAN, "landline"),),
    "address_same_as_above": ("Guardian Address - Same as above?",),
    "address": ("Guardian Eircode", "Guardian Address"),
    "note": ("Additional Text",),
}

# Explicit answers to "is there a guardian?", in order of preference.
# Without one, a guardian email implies "Yes".
GUARDIAN_PROVIDED_LABELS: Final[tuple[str, ...]] = (
    "Do you wish to add another Guardian's details?",
    "Guardian Details",
    "Add Guardian",
    "Guardian Provided",
)

PRIMARY_CONTACT_FIELDS: Final[FieldMap] = {
    "type": ("Primary Contact",),
    "email": ("Other Email",),
    "mobile": (PhoneRef(ROLE_PRIMARY, "mobile"),),
}

EMERGENCY_CONTACT_FIELDS: Final[FieldMap] = {
    "name": ("Emergency Contact Name",),
    "mobile": (PhoneRef(ROLE_EMERGENCY, "mobile"),),
    "landline": (PhoneRef(ROLE_EMERGENCY, "landline"),),
    "email": ("Email",),
    "address_same_as_above": ("Emergency Contact Address - Same as above?",),
    "address": ("Alternative contact Address",),
}

DOCTOR_FIELDS: Final[FieldMap] = {
    "name": ("Doctors Name",),
    "landline": ("Doctors Landline", PhoneRef(ROLE_DOCTOR, "landline")),
    "mobile": ("Doctors Mobile", PhoneRef(ROLE_DOCTOR, "mobile")),
    "email": ("Doctors Email",),
    "address": ("Doctors Address",),
}

# =============================================================================
# Immunisations: vaccine question -> question asking for its date
# =============================================================================

IMMUNISATION_DATE_LABELS: Final[dict[str, str]] = {
    "(2 Months) 6 in 1 + MenB* + PCV +Rotavirus": "Please enter date of 6 in 1 + MenB* + PCV +Rotavirus",
    "(4 Months) 6 in 1 + MenB* + Rotavirus": "Please enter date of 6 in 1 + MenB* + Rotavirus",
    "(6 Months) 6 in 1+ Men C+ PCV Vaccination": "Please enter date of 6 in 1 + PCV + MenC",
    "(12 Months) MMR + MenB": "Please enter date of MMR + PCV Vaccination",
    "(13 Months) Hib/MenC + PCV": "Please enter date of Hib/MenC + PCV",
}

# =============================================================================
# Special needs
# =============================================================================
#
# Order matters: answers to the shared details question are handed out to
# the "Yes" entries in exactly this order.
#
# =============================================================================

SPECIAL_NEED_LABELS: Final[tuple[str, ...]] = (
    "Medical Condition(s)",
    "Additional needs e.g. physical, intellectual",
    "Hearing or speech difficulties",
    "Allergies e.g. food, medicine, other pollutants",
    "Specific cultural/dietary requirements",
    "Additional Medical Requirements",
)

SPECIAL_NEEDS_DETAILS_LABEL: Final = "As you answered 'Yes', we require additional information."
SPECIAL_NEED_DEFAULT: Final = "No"
