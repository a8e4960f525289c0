"""
Royal Shelf FastAPI application package
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from royalshelf.config import Config, get_catalog
from royalshelf.errors import CatalogError
from royalshelf.models import ErrorResponse
from royalshelf.routes.root import router as root_router
from royalshelf.routes.popular import router as popular_router
from royalshelf.routes.search import router as search_router
from royalshelf.routes.memorized import router as memorized_router


def create_app(warm_up: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if warm_up:
            catalog_factory = app.dependency_overrides.get(get_catalog, get_catalog)
            await run_in_threadpool(catalog_factory().warm_up)
        yield

    # Initialize FastAPI app
    app = FastAPI(
        title=Config.TITLE,
        description=Config.DESCRIPTION,
        version=Config.VERSION,
        docs_url=Config.DOCS_URL,
        redoc_url=Config.REDOC_URL,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.ALLOW_ORIGINS,
        allow_credentials=Config.ALLOW_CREDENTIALS,
        allow_methods=Config.ALLOW_METHODS,
        allow_headers=Config.ALLOW_HEADERS,
    )

    # Include routers
    app.include_router(root_router)
    app.include_router(popular_router)
    app.include_router(search_router)
    app.include_router(memorized_router)

    # Exception handlers
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        """Custom HTTP exception handler"""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                detail=str(exc.detail),
                error_type="HTTPException"
            ).model_dump()
        )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request, exc):
        """Map catalog failures to their HTTP status"""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                detail=str(exc),
                error_type=type(exc).__name__
            ).model_dump()
        )

    return app
