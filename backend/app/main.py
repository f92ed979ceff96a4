import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db import init_db
from app.routers import assessments, explanations, health, questionnaire, results, scoring

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=str(settings.log_level or "info").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db()
    logger.info("%s started (env=%s, llm_provider=%s)", settings.app_name, settings.app_env, settings.llm_provider)

    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(questionnaire.router, prefix="/api")
app.include_router(assessments.router, prefix="/api")
app.include_router(results.router, prefix="/api")
app.include_router(scoring.router, prefix="/api")
app.include_router(explanations.router, prefix="/api")
