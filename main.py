#!/usr/bin/env python3
"""
Main entry point for the Royal Shelf application
"""

import uvicorn
from royalshelf import create_app
from royalshelf.config import Config, setup_logging

setup_logging()

# Create FastAPI application instance
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=Config.RELOAD
    )
