"""Main FastAPI application"""
from fastapi import FastAPI
from formsync.middleware.cors import setup_cors
from formsync.middleware.error_handler import ErrorHandlerMiddleware
from formsync.config import get_settings
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Formsync API",
    description="Landing page lead forms synchronized into Keap CRM",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Path kept compatible with the landing page script
FUNCTIONS_PREFIX = "/.netlify/functions"

# Setup CORS; the submit route answers its own preflight with an empty 200
setup_cors(app, passthrough_paths=[f"{FUNCTIONS_PREFIX}/keap-submit"])

# Add error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "formsync",
        "keap": "configured" if settings.keap_access_token else "missing token"
    }

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Formsync API",
        "version": "1.0.0",
        "docs": "/docs"
    }

# Import and include routers
from formsync.routers import submit

app.include_router(submit.router, prefix=FUNCTIONS_PREFIX, tags=["Forms"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
