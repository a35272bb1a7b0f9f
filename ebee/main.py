from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ebee.core.config import settings
from ebee.core.logging import LoggingMiddleware, get_logger, setup_logging
from ebee.db import database, models
from ebee.routers import (
    address, auth, bookings, cart, contacts, dispatches, feedbacks, fines, inventories,
    orders, payment, products, rentals, reports, services, users,
)
from ebee.utils.exceptions import register_exception_handlers
from ebee.utils.image_utils import configure_cloudinary

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in production; create_all covers local and test databases
    models.Base.metadata.create_all(bind=database.engine)
    configure_cloudinary()
    logger.info("Ebee API started", environment=settings.ENVIRONMENT)
    yield
    logger.info("Ebee API shutting down")


# Create app
app = FastAPI(title="Ebee API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)


@app.get("/health")
def health_check():
    """Basic health check endpoint"""
    return {"status": "healthy", "message": "Ebee API is running"}


@app.get("/")
def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Ebee API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

# Include routers
for router_module in (
    auth, users, products, cart, orders, payment, rentals, fines, bookings,
    services, dispatches, inventories, feedbacks, address, reports, contacts,
):
    app.include_router(router_module.router, prefix="/api")
