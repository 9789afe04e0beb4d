import importlib
import logging
import uuid
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sentry_sdk.integrations.asgi import SentryAsgiMiddleware
from sqlalchemy.exc import SQLAlchemyError

from railbook.config import settings
from railbook.context import AppContext
from railbook.db.session import create_schema, engine, ping
from railbook.logging_setup import TRACE_ID_CTX, setup_logging
from railbook.metrics import SESSION_EVENTS
from railbook.session import Session, SessionEvent

logger = logging.getLogger(__name__)


def on_session_change(event: SessionEvent, session: Session):
    SESSION_EVENTS.labels(event=event.value).inc()
    logger.info("session %s", event.value.lower(), extra={"user_id": session.user_id})


@asynccontextmanager
async def lifespan(app: FastAPI):
    unsubscribe = app.state.context.sessions.on_change(on_session_change)
    if settings.CREATE_SCHEMA_ON_STARTUP:
        await create_schema()
    try:
        yield
    finally:
        unsubscribe()
        await engine.dispose()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.context = AppContext()

# initialize logging and Sentry
setup_logging(settings.APP_NAME, settings.LOG_LEVEL)
if settings.SENTRY_DSN:
    sentry_sdk.init(dsn=settings.SENTRY_DSN)
    app.add_middleware(SentryAsgiMiddleware)


@app.middleware("http")
async def add_trace_id(request: Request, call_next):
    trace_id = request.headers.get("x-trace-id") or str(uuid.uuid4())
    TRACE_ID_CTX.set(trace_id)
    response = await call_next(request)
    response.headers["X-Trace-Id"] = trace_id
    return response

# module name doubles as the url prefix
MODULES = [
    "auth",
    "trains",
    "bookings",
]


for mod in MODULES:
    pkg = importlib.import_module(f"railbook.modules.{mod}.router")
    app.include_router(pkg.router, prefix=f"/{mod}")


@app.get("/")
async def root():
    return {"app": settings.APP_NAME, "status": "ok"}


@app.get("/metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/ready")
async def ready():
    try:
        await ping()
    except SQLAlchemyError:
        logger.exception("readiness check failed")
        return Response(status_code=503, content="database unavailable")
    return {"status": "ready"}
