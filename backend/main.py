import os # os needs to be imported before dotenv for getenv to work as expected in some cases
from dotenv import load_dotenv
load_dotenv() # Load .env file at the very beginning

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from torneos.db import init_db
from torneos.routes import auth, teams, health
from torneos.middleware.error_handler import ErrorHandlerMiddleware, register_error_handlers
import logging

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Tournament Management API",
    description="REST API for tournaments, teams and players",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Initialize Database
init_db(app)

@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup"""
    await app.state.db.create_schema()
    logger.info("Application startup completed")

@app.on_event("shutdown")
async def shutdown_event():
    """Release pooled connections on shutdown"""
    await app.state.db.dispose()
    logger.info("Application shutdown completed")

# Error handler first so CORS, added after it, wraps the error responses too
app.add_middleware(ErrorHandlerMiddleware)
register_error_handlers(app)

# Multiple origins can be provided via the CORS_ORIGINS environment variable, comma-separated.
cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]
logger.debug("Configuring CORS for origins: %s", cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])

@app.get("/")
async def root():
    return {
        "message": "Welcome to the Tournament Management API",
        "docs": "/docs",
        "health": "/health"
    }

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(teams.router, prefix="/equipos", tags=["Teams"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
