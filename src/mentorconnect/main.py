import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import mentorconnect.models  # noqa: F401 (register all models with Base.metadata)
from mentorconnect.api.routes.availability import router as availability_router
from mentorconnect.api.routes.mentor_availability import router as mentor_availability_router
from mentorconnect.api.routes.schedules import router as schedules_router
from mentorconnect.config import get_settings
from mentorconnect.database import Base, async_session, engine
from mentorconnect.scheduling.seed import seed_default_schedules
from mentorconnect.scheduling.store import SqlRuleStore
from mentorconnect.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    # Create tables on startup (dev convenience; migrations for production)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.seed_default_schedules:
        async with async_session() as session:
            await seed_default_schedules(SqlRuleStore(session))
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="MentorConnect",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(availability_router)
    app.include_router(mentor_availability_router)
    app.include_router(schedules_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
