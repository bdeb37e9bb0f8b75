"""
Static staff directory seeded at startup
"""
from loguru import logger
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.enums import ComplexityLevel, Specialization
from app.models.tax_professional import TaxProfessional

STAFF_DIRECTORY = (
    {
        "id": "tp-001",
        "name": "Sarah Johnson",
        "email": "sarah.johnson@taxfirm.com",
        "specializations": [Specialization.INDIVIDUAL.value, Specialization.SELF_EMPLOYMENT.value],
        "max_complexity": ComplexityLevel.MODERATE,
        "current_load": 3,
        "max_daily_appointments": 8,
        "available": True,
        "rating": 4.8,
    },
    {
        "id": "tp-002",
        "name": "Michael Chen",
        "email": "michael.chen@taxfirm.com",
        "specializations": [Specialization.INVESTMENTS.value, Specialization.CRYPTO.value, Specialization.FOREIGN_INCOME.value],
        "max_complexity": ComplexityLevel.EXPERT,
        "current_load": 5,
        "max_daily_appointments": 6,
        "available": True,
        "rating": 4.9,
    },
    {
        "id": "tp-003",
        "name": "Emily Rodriguez",
        "email": "emily.rodriguez@taxfirm.com",
        "specializations": [Specialization.SMALL_BUSINESS.value, Specialization.SELF_EMPLOYMENT.value, Specialization.REAL_ESTATE.value],
        "max_complexity": ComplexityLevel.COMPLEX,
        "current_load": 4,
        "max_daily_appointments": 7,
        "available": True,
        "rating": 4.7,
    },
    {
        "id": "tp-004",
        "name": "James Wilson",
        "email": "james.wilson@taxfirm.com",
        "specializations": [Specialization.INDIVIDUAL.value],
        "max_complexity": ComplexityLevel.SIMPLE,
        "current_load": 6,
        "max_daily_appointments": 12,
        "available": True,
        "rating": 4.5,
    },
    {
        "id": "tp-005",
        "name": "Dr. Patricia Martinez",
        "email": "patricia.martinez@taxfirm.com",
        "specializations": [Specialization.ESTATE_PLANNING.value, Specialization.FOREIGN_INCOME.value, Specialization.AUDIT_REPRESENTATION.value],
        "max_complexity": ComplexityLevel.EXPERT,
        "current_load": 2,
        "max_daily_appointments": 4,
        "available": True,
        "rating": 5.0,
    },
)


async def seed_staff_directory(db: AsyncSession) -> int:
    """
    Insert the staff directory if the table is empty.

    Returns:
        Number of staff records inserted
    """
    result = await db.execute(select(func.count()).select_from(TaxProfessional))
    if result.scalar_one() > 0:
        return 0

    for record in STAFF_DIRECTORY:
        db.add(TaxProfessional(**{**record, "specializations": list(record["specializations"])}))
    await db.flush()

    logger.info(f"Seeded {len(STAFF_DIRECTORY)} tax professionals")
    return len(STAFF_DIRECTORY)
