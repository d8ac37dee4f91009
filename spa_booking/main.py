import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Import models so every table is registered with Base before create_all
from . import models  # noqa: F401
from .config import (
    ALLOWED_ORIGINS,
    API_PREFIX,
    IMAGE_URL_PREFIX,
    SECURITY_HEADERS_ENABLED,
    UPLOAD_DIR,
)
from .database import Base, engine
from .domain.accounts.router import router as accounts_router
from .domain.appointments.router import router as appointments_router
from .domain.blogs.router import router as blogs_router
from .domain.feedback.router import router as feedback_router
from .domain.payments.router import payment_method_router, transaction_router
from .domain.quiz.router import (
    answers_router,
    questions_router,
    scorebands_router,
    user_quiz_router,
)
from .domain.scheduling.router import shifts_router, slots_router, work_schedules_router
from .domain.services.router import router as services_router
from .domain.therapists.router import router as therapists_router
from .errors import register_exception_handlers
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created successfully")
    Path(UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Spa Booking API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(
        SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"]
    )
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,  # Session cookie
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(accounts_router, prefix=API_PREFIX)
app.include_router(services_router, prefix=API_PREFIX)
app.include_router(appointments_router, prefix=API_PREFIX)
app.include_router(blogs_router, prefix=API_PREFIX)
app.include_router(feedback_router, prefix=API_PREFIX)
app.include_router(shifts_router, prefix=API_PREFIX)
app.include_router(questions_router, prefix=API_PREFIX)
app.include_router(answers_router, prefix=API_PREFIX)
app.include_router(scorebands_router, prefix=API_PREFIX)
app.include_router(slots_router, prefix=API_PREFIX)
app.include_router(transaction_router, prefix=API_PREFIX)
app.include_router(payment_method_router, prefix=API_PREFIX)
app.include_router(therapists_router, prefix=API_PREFIX)
app.include_router(user_quiz_router, prefix=API_PREFIX)
app.include_router(work_schedules_router, prefix=API_PREFIX)

# Uploaded images; the directory is created on startup
app.mount(IMAGE_URL_PREFIX, StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="images")


@app.get("/")
def root():
    return {"message": "Spa Booking API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
