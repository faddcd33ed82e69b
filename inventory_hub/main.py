"""FastAPI application entry point."""
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_hub.config import settings
from inventory_hub.database import engine, Base
from inventory_hub.errors import setup_exception_handlers
from inventory_hub.logging_config import RequestContextLogMiddleware, configure_logging
from inventory_hub.routes import admin, auth, inventories, items, search, user
import inventory_hub.models  # noqa: F401  registers tables on Base.metadata

configure_logging(settings.LOG_LEVEL)
logger = structlog.get_logger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Multi-user inventories with custom field schemas, search and admin tools",
    debug=settings.DEBUG,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextLogMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(inventories.router, prefix="/api")
app.include_router(items.router, prefix="/api")
app.include_router(search.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(user.router, prefix="/api")


@app.get("/")
async def root():
    """Service status."""
    return {
        "ok": True,
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
