# telework/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from telework.core.config import settings
from telework.core.errors import TeleworkError
from telework.api.v1.api import api_router
from telework.api.v1.endpoints import auth
from telework.db import models, session
from telework.services.seed import seed_demo_data

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TeleworkError)
async def telework_error_handler(request: Request, exc: TeleworkError):
    logger.info("%s %s rejected (%s): %s", request.method, request.url.path, type(exc).__name__, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


# Business routes live under /api/v1, authentication under /auth
app.include_router(api_router, prefix=settings.API_V1_STR)
app.include_router(auth.router, prefix="/auth", tags=["Auth"])


@app.on_event("startup")
def startup_event():
    models.Base.metadata.create_all(bind=session.engine)
    if settings.SEED_DEMO_DATA:
        db = session.SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


@app.get("/")
def read_root():
    return {"message": "Welcome to the Telework Management API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
