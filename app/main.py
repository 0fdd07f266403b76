"""Spacefinders – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import Base, engine
from app.exceptions import register_exception_handlers
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from app.models import User, Address, Property, Booking, Complaint, Audit  # noqa: F401
from app.routers import admin, bookings, hosts, users

settings = get_settings()
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(users.router)
app.include_router(hosts.router)
app.include_router(bookings.router)
app.include_router(admin.router)


@app.on_event("startup")
def startup():
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logging.getLogger("uvicorn.error").warning("Database startup failed (tables skipped). Check DATABASE_URL and network. Error: %s", e)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
