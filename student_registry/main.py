from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from student_registry.core.config import settings, masked_database_url
from student_registry.core.database import check_database_connection
from student_registry.core.handlers import register_exception_handlers
from student_registry.core.logging import logger
from student_registry.api.v1.router import api_router
from student_registry.web import pages


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.APP_VERSION}")
    logger.info(f"Database: {masked_database_url()}")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

register_exception_handlers(app)

# Registry page and its form target
app.include_router(pages.router, tags=["registry"])

# JSON API
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
def health():
    """
    Health check endpoint
    """
    return {
        "status": "ok",
        "database": check_database_connection()
    }


if __name__ == "__main__":
    uvicorn.run("student_registry.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
