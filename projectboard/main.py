"""
projectboard entry point.

On startup the persistence handle is opened, tables are created if missing
and the demo projects are seeded into an empty store. On shutdown the engine
is disposed before the process exits.
"""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from projectboard.api.error_handlers import register_error_handlers
from projectboard.api.v1.router import api_router, dev_router
from projectboard.bootstrap import ensure_demo_projects
from projectboard.config import Settings, settings
from projectboard.db.projects import ProjectRepository
from projectboard.db.session import Database, get_db
from logging import getLogger, Filter
import logging

logger = getLogger(__name__)
logger.setLevel(logging.INFO)


class HealthCheckFilter(Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.getMessage().find("/health") == -1


logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())

ROUTE_SUMMARY = (
    "Project management API is running.\n"
    "GET  /health\n"
    "GET  /health/db\n"
    "GET  /api/projects\n"
    "POST /api/auth/login {email,password}\n"
)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(
        title=app_settings.app_name, debug=app_settings.debug, redirect_slashes=False
    )

    @app.on_event("startup")
    async def startup_event():
        logger.info("--- Starting projectboard ---")

        database = Database(app_settings.database_url, echo=app_settings.debug)
        database.open()
        app.state.database = database

        try:
            await database.create_tables()
            if app_settings.seed_on_startup:
                async with database.session() as db:
                    await ensure_demo_projects(ProjectRepository(db))
        except Exception as e:
            logger.error(f"Startup failed: {e}", exc_info=True)
            await database.dispose()
            raise

        logger.info("--- projectboard startup completed ---")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("--- Server shutting down! ---")
        database: Database | None = getattr(app.state, "database", None)
        if database is not None:
            await database.dispose()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api")
    if app_settings.is_development:
        logger.info("Development mode: mounting /api/dev routes")
        app.include_router(dev_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return ROUTE_SUMMARY

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/health/db")
    async def health_check_db(db: AsyncSession = Depends(get_db)):
        if await ProjectRepository(db).health_check():
            return {"db": "ok"}
        return JSONResponse(status_code=500, content={"db": "failed"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
