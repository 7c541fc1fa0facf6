from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bustrips.auth import get_current_user_id
from bustrips.auth import router as auth_router
from bustrips.config import Settings, get_settings
from bustrips.database import Database
from bustrips.log_config import configure_logging
from bustrips.manifests import router as manifests_router
from bustrips.passengers import router as passengers_router
from bustrips.trips import router as trips_router

logger = structlog.get_logger(__name__)

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the database handle lives for the app's lifespan"""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_url)
        if settings.CREATE_TABLES:
            database.create_all()
        app.state.database = database
        logger.info("database_ready", dialect=database.engine.dialect.name)
        try:
            yield
        finally:
            database.dispose()
    
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Bus trip and passenger roster API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    
    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    protected = [Depends(get_current_user_id)] if settings.REQUIRE_AUTH else []
    
    # Include routers
    app.include_router(
        auth_router,
        prefix=f"{settings.API_PREFIX}/auth",
        tags=["Authentication"]
    )
    
    app.include_router(
        manifests_router,
        prefix=f"{settings.API_PREFIX}/trips",
        tags=["Manifests"],
        dependencies=protected
    )
    
    app.include_router(
        trips_router,
        prefix=f"{settings.API_PREFIX}/trips",
        tags=["Trips"],
        dependencies=protected
    )
    
    app.include_router(
        passengers_router,
        prefix=f"{settings.API_PREFIX}/trips",
        tags=["Passengers"],
        dependencies=protected
    )
    
    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }
    
    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}
    
    return app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
