"""Data models for parsed enrollment forms."""

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

__all__ = [
    "Child",
    "Doctor",
    "EmergencyContact",
    "EnrollmentRecord",
    "Guardian",
    "Immunisation",
    "Parent",
    "PrimaryContact",
    "SpecialNeed",
]
