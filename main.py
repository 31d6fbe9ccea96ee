"""Application entry point for the NutriGuide API.

Defines the FastAPI app, middleware, exception handlers and the API
routers. The `lifespan` handler creates the tables and subscribes the event
logger before requests are served.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from api.plans import router as plans_router
from api.profiles import router as profiles_router
from api.progress import router as progress_router
from core.error_handlers import register_exception_handlers
from core.events import PLAN_GENERATED, PROGRESS_MILESTONE, PlanEvent, event_bus
from core.exceptions import DatabaseError
from core.logger import get_logger
from database import init_db, models
from database.deps import get_db_read

logger = get_logger("main")


def log_plan_event(event: PlanEvent) -> None:
    """Stand-in notification subscriber: writes every plan event to the log."""
    logger.info("Notification event %s: %s", event.name, event.payload)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    event_bus.subscribe(PLAN_GENERATED, log_plan_event)
    event_bus.subscribe(PROGRESS_MILESTONE, log_plan_event)
    yield
    event_bus.unsubscribe(PLAN_GENERATED, log_plan_event)
    event_bus.unsubscribe(PROGRESS_MILESTONE, log_plan_event)


app = FastAPI(title="NutriGuide API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If the database cannot be queried.
    """
    try:
        db.query(models.Profile).first()
        return {"status": "healthy", "database": "connected"}
    except Exception:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health_check")


app.include_router(profiles_router)
app.include_router(plans_router)
app.include_router(progress_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
