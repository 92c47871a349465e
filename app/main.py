import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import all models to ensure they're registered with SQLAlchemy Base
# This is needed for relationships between models in different files
from . import (
    models,  # noqa: F401
    models_invoice,  # noqa: F401
)
from .config import ALLOWED_ORIGINS, SEED_CATEGORIES_ON_STARTUP
from .database import Base, SessionLocal, engine
from .domain.bookings.router import router as bookings_router
from .domain.catalog.router import router as categories_router
from .domain.catalog.service import seed_categories
from .domain.invoices.router import router as invoices_router
from .domain.reviews.router import router as reviews_router
from .domain.settings.router import router as settings_router
from .domain.vendors.router import router as vendors_router
from .routes.auth import router as auth_router
from .routes.users import router as users_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created successfully")

    if SEED_CATEGORIES_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_categories(db)
        finally:
            db.close()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="eBhangar API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 Bad Request"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(categories_router)
app.include_router(bookings_router)
app.include_router(invoices_router)
app.include_router(reviews_router)
app.include_router(vendors_router)
app.include_router(settings_router)


@app.get("/")
def root():
    return {"message": "eBhangar API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
