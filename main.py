"""
Tax Intake Routing - conversational intake, document checklists and staff routing
FastAPI application entry point
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import IntakeServiceError, status_code_for
from app.core.logging import setup_logging
from app.api import appointments, checklist, clients, intake, reminders, tax_pros, tools

setup_logging(settings.PROJECT_NAME, settings.LOG_LEVEL, settings.LOG_JSON)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Pre-appointment tax intake, document checklists, reminders and tax professional routing",
    version=settings.VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(intake.router, prefix="/intake", tags=["intake"])
app.include_router(clients.router, prefix="/clients", tags=["clients"])
app.include_router(checklist.router, prefix="/clients", tags=["checklist"])
app.include_router(reminders.router, tags=["reminders"])
app.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
app.include_router(tax_pros.router, prefix="/tax-pros", tags=["tax-pros"])
app.include_router(tools.router, tags=["tools"])


@app.exception_handler(IntakeServiceError)
async def intake_service_error_handler(request: Request, exc: IntakeServiceError):
    status_code = status_code_for(exc)
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code}
    )


@app.on_event("startup")
async def startup_event():
    """Create tables and seed the staff directory"""
    await init_db(seed=settings.SEED_STAFF_DIRECTORY)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }


@app.get("/health")
async def health():
    """Detailed health check"""
    return {
        "status": "healthy",
        "database": "connected",
        "tax_year": settings.TAX_YEAR
    }
