# employee_records/main.py

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from employee_records.api.error_handlers import register_error_handlers
from employee_records.api.router import api_router
from employee_records.core.config import Settings, get_settings
from employee_records.core.logging import configure_logging
from employee_records.db.init_db import init_db
from employee_records.db.session import Database

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Employee Management API is running."


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.db
    init_db(database)
    logger.info("Database ready at %s", database.engine.url.render_as_string(hide_password=True))

    yield

    database.dispose()
    logger.info("Database connections closed")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CONTEXT ----------
    app.state.settings = settings
    app.state.db = Database(settings.database_url)

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    register_error_handlers(app, include_stack=settings.is_development)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def liveness():
        return LIVENESS_MESSAGE

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("employee_records.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
