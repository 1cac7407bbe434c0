from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from inkwise.api.drafts import router as drafts_router
from inkwise.api.sessions import router as sessions_router
from inkwise.persistence import init_store, close_store
from inkwise.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup/shutdown."""
    settings.validate()
    
    # Database store, or in-memory fallback when DATABASE_URL is not set
    await init_store()
    
    yield
    
    await close_store()
    print("👋 Shutting down...")


app = FastAPI(lifespan=lifespan)

# Allow CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(drafts_router)
app.include_router(sessions_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "database": bool(settings.DATABASE_URL)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
