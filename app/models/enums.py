"""
Enum definitions for database models
"""
import enum


class FilingStatus(str, enum.Enum):
    """Federal filing status"""
    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"
    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"


class IncomeType(str, enum.Enum):
    """Income-type tags inferred from intake answers"""
    WAGES_W2 = "wages_w2"
    SELF_EMPLOYMENT_1099NEC = "self_employment_1099nec"
    FREELANCE_1099MISC = "freelance_1099misc"
    GIG_ECONOMY = "gig_economy"
    RENTAL_INCOME = "rental_income"
    INVESTMENT_INCOME = "investment_income"
    DIVIDENDS = "dividends"
    CAPITAL_GAINS = "capital_gains"
    RETIREMENT_DISTRIBUTIONS = "retirement_distributions"
    SOCIAL_SECURITY = "social_security"
    UNEMPLOYMENT = "unemployment"
    ALIMONY_RECEIVED = "alimony_received"
    GAMBLING_WINNINGS = "gambling_winnings"
    CRYPTO_INCOME = "crypto_income"
    FOREIGN_INCOME = "foreign_income"
    OTHER = "other"


class DeductionType(str, enum.Enum):
    """Deduction tags inferred from intake answers"""
    MORTGAGE_INTEREST = "mortgage_interest"
    PROPERTY_TAXES = "property_taxes"
    STATE_LOCAL_TAXES = "state_local_taxes"
    CHARITABLE_DONATIONS = "charitable_donations"
    MEDICAL_EXPENSES = "medical_expenses"
    STUDENT_LOAN_INTEREST = "student_loan_interest"
    EDUCATOR_EXPENSES = "educator_expenses"
    HOME_OFFICE = "home_office"
    BUSINESS_EXPENSES = "business_expenses"
    HSA_CONTRIBUTIONS = "hsa_contributions"
    IRA_CONTRIBUTIONS = "ira_contributions"
    CONTRIBUTIONS_401K = "401k_contributions"
    CHILDCARE_EXPENSES = "childcare_expenses"
    ALIMONY_PAID = "alimony_paid"
    MOVING_EXPENSES = "moving_expenses"
    NONE = "none"


class ComplexityLevel(str, enum.Enum):
    """Complexity tiers, declared in ascending order"""
    SIMPLE = "simple"      # 0-20
    MODERATE = "moderate"  # 21-50
    COMPLEX = "complex"    # 51-80
    EXPERT = "expert"      # 81-100


class Specialization(str, enum.Enum):
    """Areas of expertise for tax professionals"""
    INDIVIDUAL = "individual"
    SELF_EMPLOYMENT = "self_employment"
    SMALL_BUSINESS = "small_business"
    INVESTMENTS = "investments"
    REAL_ESTATE = "real_estate"
    CRYPTO = "crypto"
    FOREIGN_INCOME = "foreign_income"
    ESTATE_PLANNING = "estate_planning"
    AUDIT_REPRESENTATION = "audit_representation"


class DocumentCategory(str, enum.Enum):
    """Checklist document categories"""
    IDENTITY = "identity"
    INCOME = "income"
    EXPENSES = "expenses"
    INVESTMENTS = "investments"
    PROPERTY = "property"
    BUSINESS = "business"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    OTHER = "other"


class IntakeStep(str, enum.Enum):
    """Intake script steps, declared in script order"""
    PERSONAL_INFO = "personal_info"
    FILING_STATUS = "filing_status"
    DEPENDENTS = "dependents"
    EMPLOYMENT = "employment"
    INCOME_TYPES = "income_types"
    DEDUCTIONS = "deductions"
    SPECIAL_SITUATIONS = "special_situations"
    DOCUMENT_UPLOAD = "document_upload"
    REVIEW = "review"
    COMPLETE = "complete"


class SessionStatus(str, enum.Enum):
    """Intake session status"""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class AppointmentStatus(str, enum.Enum):
    """Appointment lifecycle status"""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class AppointmentType(str, enum.Enum):
    """Meeting format"""
    VIRTUAL = "virtual"
    IN_PERSON = "in_person"


class ReminderType(str, enum.Enum):
    """Reminder kinds"""
    APPOINTMENT_CONFIRMATION = "appointment_confirmation"
    DOCUMENT_REMINDER = "document_reminder"
    APPOINTMENT_REMINDER_24H = "appointment_reminder_24h"
    APPOINTMENT_REMINDER_1H = "appointment_reminder_1h"
    FOLLOW_UP = "follow_up"


class ReminderChannel(str, enum.Enum):
    """Delivery channel"""
    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"
