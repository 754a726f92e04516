"""
Declaration Advisor - Test cricket declaration simulation API
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.logging_config import configure_logging
from app.api.declaration import router as declaration_router

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Declaration Advisor",
    description="Monte Carlo declaration timing for Test cricket",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(declaration_router, prefix="/api")


@app.get("/")
def root():
    """Service banner"""
    return {
        "name": "Declaration Advisor API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
