"""
The intake questionnaire: step order and canned questions.
"""
from types import MappingProxyType
from typing import Optional
from app.core.config import settings
from app.models.enums import IntakeStep

INTAKE_STEPS = tuple(IntakeStep)

COMPLETION_MESSAGE = (
    "Congratulations! Your intake is complete. "
    "We will now generate your personalized document checklist."
)
RESUME_MESSAGE = "Let's continue where we left off."
MORE_DETAILS_MESSAGE = "Please provide more details."


def build_questions(tax_year: int) -> MappingProxyType:
    return MappingProxyType({
        IntakeStep.PERSONAL_INFO: (
            "What is your full legal name?",
            "What is your email address?",
            "What is your phone number?",
            "What is your date of birth?",
            "What is your current address?",
        ),
        IntakeStep.FILING_STATUS: (
            "What is your filing status? (Single, Married Filing Jointly, Married Filing Separately, "
            "Head of Household, Qualifying Widow/Widower)",
        ),
        IntakeStep.DEPENDENTS: (
            "Do you have any dependents to claim?",
            "For each dependent, please provide: name, relationship, date of birth, and months lived with you.",
        ),
        IntakeStep.EMPLOYMENT: (
            f"Who were your employers in {tax_year}?",
            "For each employer, were you a W-2 employee or 1099 contractor?",
            "Did you have any self-employment or freelance income?",
        ),
        IntakeStep.INCOME_TYPES: (
            "Besides employment, what other types of income did you receive? "
            "(investments, rental property, retirement distributions, etc.)",
        ),
        IntakeStep.DEDUCTIONS: (
            "Do you own a home and pay mortgage interest?",
            "Did you make any charitable donations?",
            "Do you have student loans?",
            "Did you contribute to retirement accounts (401k, IRA)?",
            "Do you have any business expenses or home office deductions?",
        ),
        IntakeStep.SPECIAL_SITUATIONS: (
            "Did you buy or sell cryptocurrency?",
            "Do you have any foreign bank accounts or foreign income?",
            "Did you buy or sell real estate?",
            "Did you have any major life changes (marriage, divorce, new baby, etc.)?",
        ),
        IntakeStep.DOCUMENT_UPLOAD: (
            "Please upload or confirm you have gathered all required documents from your checklist.",
        ),
        IntakeStep.REVIEW: (
            "Please review all your information and confirm it's accurate.",
        ),
        IntakeStep.COMPLETE: (),
    })


INTAKE_QUESTIONS = build_questions(settings.TAX_YEAR)


def next_step(step: IntakeStep) -> IntakeStep:
    """Following step; complete is terminal and maps to itself"""
    index = INTAKE_STEPS.index(step)
    return INTAKE_STEPS[min(index + 1, len(INTAKE_STEPS) - 1)]


def remaining_steps(step: IntakeStep) -> list:
    return list(INTAKE_STEPS[INTAKE_STEPS.index(step) + 1:])


def question_at(step: IntakeStep, answered: int) -> Optional[str]:
    """The question after `answered` answers in this step, or None once exhausted"""
    questions = INTAKE_QUESTIONS[step]
    return questions[answered] if answered < len(questions) else None


def question_being_answered(step: IntakeStep, answered: int) -> str:
    """Question an incoming answer belongs to; extra answers attach to the last one"""
    questions = INTAKE_QUESTIONS[step]
    if not questions:
        return ""
    return questions[min(answered, len(questions) - 1)]
