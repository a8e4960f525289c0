"""
Root and health routes for the Royal Shelf application
"""

from fastapi import APIRouter

from royalshelf.config import Config

router = APIRouter()


@router.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Royal Shelf",
        "source": Config.BASE_URL,
        "version": Config.VERSION,
        "docs": Config.DOCS_URL,
        "endpoints": {
            "popular": "/popular",
            "refresh": "/popular/refresh",
            "filter": "/popular/search?q=text",
            "search": "/search?query=text",
            "memorized": "/memorized"
        }
    }


@router.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "message": "API is running"
    }
