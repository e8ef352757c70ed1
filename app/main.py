from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.assignments.router import router as assignments_router
from app.api.v1.auth.router import router as auth_router
from app.api.v1.classes.classes_router import router as classes_router
from app.api.v1.dashboard.router import router as dashboard_router
from app.api.v1.tutors.router import router as tutors_router
from app.core.config import settings
from app.core.logging_config import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="School Admin Portal")

    # CORS: allow the dashboard frontend to call the portal
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(classes_router)
    app.include_router(tutors_router)
    app.include_router(assignments_router)

    return app


app = create_app()
