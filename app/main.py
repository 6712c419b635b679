from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.db import dispose_engine
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.api.v1.patient import router as patient_router
from app.api.v1.medications import router as medications_router
from app.api.v1.prescriptions import router as prescriptions_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # cierra el pool al bajar el proceso
    await dispose_engine()


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)

# origins desde CORS_ORIGINS (.env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(patient_router, prefix="/api/v1")
app.include_router(medications_router, prefix="/api/v1")
app.include_router(prescriptions_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "ok"}
