"""
Database models package
"""
from app.models.enums import (
    FilingStatus,
    IncomeType,
    DeductionType,
    ComplexityLevel,
    Specialization,
    DocumentCategory,
    IntakeStep,
    SessionStatus,
    AppointmentStatus,
    AppointmentType,
    ReminderType,
    ReminderChannel,
)
from app.models.client import Client
from app.models.intake_session import IntakeSession
from app.models.checklist import DocumentChecklist
from app.models.checklist_item import ChecklistItem
from app.models.tax_professional import TaxProfessional
from app.models.appointment import Appointment
from app.models.reminder import Reminder

__all__ = [
    "FilingStatus",
    "IncomeType",
    "DeductionType",
    "ComplexityLevel",
    "Specialization",
    "DocumentCategory",
    "IntakeStep",
    "SessionStatus",
    "AppointmentStatus",
    "AppointmentType",
    "ReminderType",
    "ReminderChannel",
    "Client",
    "IntakeSession",
    "DocumentChecklist",
    "ChecklistItem",
    "TaxProfessional",
    "Appointment",
    "Reminder",
]
