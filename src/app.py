from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.database import sessionmanager
from src.logger import logger
from src.routes import router
from src.utils.exceptions import AppError, app_error_handler, validation_error_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        logger.info("Creating database tables")
        await sessionmanager.create_all()
    yield
    await sessionmanager.close()


app = FastAPI(
    title="Social API",
    description="Follow requests, friendships and blocks between users.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return {"message": "Social API is running!"}
