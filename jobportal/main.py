"""
Job Portal - Main Application

FastAPI backend with:
- MongoDB for accounts, jobs, applications and sessions
- Cookie sessions backed by the sessions collection
- Local disk storage for avatars and resumes

Run: uvicorn jobportal.main:app --reload
"""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from jobportal.api.routes import api_router
from jobportal.core.config import get_settings
from jobportal.core.errors import register_error_handlers
from jobportal.core.logging_config import configure_logging, get_logger
from jobportal.db.mongodb import init_mongo_indexes, ping_mongo

settings = get_settings()
configure_logging()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Portal",
    description="""
    A job board for job seekers and employers.

    ## Features
    - **Authentication**: cookie sessions for seekers and employers
    - **Profiles**: self-service edits with avatar upload
    - **Jobs**: employers post jobs, anyone can browse them
    - **Applications**: seekers apply once per job with a PDF resume
    - **Applicants**: employers review applicants grouped by job
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")

# Uploaded avatars and resumes (directories are created on first upload)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    init_mongo_indexes()
    logger.info("MongoDB indexes initialized")


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if ping_mongo() else "disconnected"
    }
