import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.archive.router import router as archive_router
from app.api.v1.fiscal_years.router import router as fiscal_years_router
from app.api.v1.ledger.router import router as ledger_router
from app.api.v1.reports.router import router as reports_router
from app.api.v1.shareholders.router import router as shareholders_router
from app.api.v1.staff.router import router as staff_router
from app.api.v1.students.router import router as students_router
from app.core.config import settings


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="School Ledger Backend")

    # CORS: allow the office frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(fiscal_years_router)
    app.include_router(students_router)
    app.include_router(staff_router)
    app.include_router(ledger_router)
    app.include_router(shareholders_router)
    app.include_router(reports_router)
    app.include_router(archive_router)

    return app


app = create_app()
