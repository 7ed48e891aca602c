"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from optimizer.api.routes import router
from optimizer.config import CORS_ORIGINS, OUTPUT_FOLDER_NAME, logger as config_logger

logging.getLogger("uvicorn").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_logger.info("Image optimizer API started (output folder '%s')", OUTPUT_FOLDER_NAME)
    yield
    config_logger.info("Image optimizer API shutting down")


app = FastAPI(
    title="Image Optimizer API",
    description="Convert the images of a folder into resized WebP variants with progress tracking.",
    version="1.0.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


def serve() -> None:
    import uvicorn
    from optimizer.config import HOST, PORT
    uvicorn.run("optimizer.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    serve()
