"""
Student ATS Portal - Main Application

FastAPI backend with:
- MongoDB for user profiles and the latest resume analysis
- An OpenAI-compatible LLM for resume scoring and skill suggestions
- YouTube Data API for course suggestions

Run: uvicorn ats_portal.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from ats_portal.api.routes import api_router
from ats_portal.core.config import get_settings
from ats_portal.core.errors import register_exception_handlers
from ats_portal.db.mongodb import close_mongo_connection, init_mongo_indexes, test_mongo_connection

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Student ATS Portal",
    description="""
    Student profiles, resume ATS scoring and course suggestions.

    ## Features
    - **Authentication**: signup and login for students (admin via sentinel account)
    - **Users**: profile read/update/delete, admin listing, CSV/JSON export
    - **Analysis**: resume vs. job description, ATS self-analysis, skill suggestions
    - **Courses**: YouTube tutorials for a role
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_connection()


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ats_portal.main:app", host="0.0.0.0", port=settings.port)
