# devflow/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devflow.config import settings
from devflow.core.db import init_db, close_db
from devflow.core.revalidation import RevalidationChannel
from devflow.api.v1.errors import register_error_handlers
from devflow.api.v1.routers import questions, users

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Process-wide revalidation channel; the rendering layer subscribes its listeners here
app.state.revalidation = RevalidationChannel()

def _log_revalidation(path: str) -> None:
    logger.info("[revalidate] %s", path)

app.state.revalidation.subscribe(_log_revalidation)

@app.on_event("startup")
async def on_startup():
    app.state.database = await init_db()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db(app.state.database)

# REST
app.include_router(questions.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
