import logging
import sys

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings

from staff.router import staff_router
from duty_roster.router import duty_roster_router
from assignment.router import assignment_router
from rest_record.router import rest_record_router
import models_bootstrap

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

openapi_tags = [
    {
        "name": "Assignments",
        "description": "Daily room/task assignment and slot eligibility",
    },
    {
        "name": "Rest Records",
        "description": "Rest and absence records, including generation from the duty roster",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title=settings.APP_NAME, openapi_tags=openapi_tags)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(staff_router, prefix="/api")
app.include_router(duty_roster_router, prefix="/api")
app.include_router(assignment_router, prefix="/api")
app.include_router(rest_record_router, prefix="/api")


# Storage failures the routers did not map themselves
@app.exception_handler(SQLAlchemyError)
def storage_error_handler(request: Request, exc: SQLAlchemyError):
    if isinstance(exc, IntegrityError):
        return JSONResponse(status_code=409, content={"detail": "record conflicts with an existing one"})
    logger.error("storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "storage unavailable, please retry"})


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}


def main():
    """Run the application using uvicorn."""
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
