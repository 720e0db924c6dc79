"""Data models for a parsed enrollment form.

Field names are the JSON contract consumed by the form filler and export
tooling; do not rename them. Every string field defaults to "" so a record
always carries the full schema.
"""

from pydantic import BaseModel, Field


class Child(BaseModel):
    """The child being enrolled."""

    name: str = ""
    known_as: str = ""
    dob: str = ""
    gender: str = ""
    address: str = ""
    first_language: str = ""


class Contact(BaseModel):
    """Fields shared by every contact section."""

    name: str = ""
    mobile: str = ""
    landline: str = ""
    email: str = ""
    address: str = ""


class Parent(Contact):
    """A parent. ``address`` holds the resolved address."""

    address_same_as_above: str = ""


class Guardian(Contact):
    """An additional guardian."""

    provided: str = "No"
    address_same_as_above: str = ""
    note: str = ""


class PrimaryContact(BaseModel):
    """Who the creche should contact first."""

    type: str = ""
    email: str = ""
    mobile: str = ""


class EmergencyContact(Contact):
    """Alternative contact for emergencies."""

    address_same_as_above: str = ""


class Doctor(Contact):
    """The child's doctor."""


class Immunisation(BaseModel):
    """One vaccine from the immunisation schedule."""

    label: str
    received: str = ""
    date: str = ""


class SpecialNeed(BaseModel):
    """A special-needs question and its answer."""

    type: str
    provided: str = "No"
    details: str | None = None


class EnrollmentRecord(BaseModel):
    """Structured enrollment form extracted from one email."""

    creche_name: str = ""
    start_date: str = ""
    placement_type: str = ""
    term_hours: str = ""
    holiday_hours: str = ""
    notes: str = ""
    child: Child = Field(default_factory=Child)
    parents: list[Parent] = Field(default_factory=list, max_length=2)
    guardian: Guardian = Field(default_factory=Guardian)
    primary_contact: PrimaryContact = Field(default_factory=PrimaryContact)
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)
    doctor: Doctor = Field(default_factory=Doctor)
    immunisations: list[Immunisation] = Field(default_factory=list)
    special_needs: list[SpecialNeed] = Field(default_factory=list)
