# ticketdesk/main.py
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.database import AsyncDatabase

from ticketdesk.core.config import get_settings
from ticketdesk.core.database import close_client, get_database, ping
from ticketdesk.core.errors import register_error_handlers
from ticketdesk.core.logging import configure_logging
from ticketdesk.ticket.routes import router as ticket_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # the store connection opens lazily on the first request that needs it
    yield
    await close_client()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(ticket_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


@app.get("/health/db", tags=["Health"])
async def health_db(database: AsyncDatabase = Depends(get_database)):
    await ping(database)
    return {"status": "ok", "database": database.name}
