"""API routes."""

from fastapi import APIRouter

from app.routes import students

api_router = APIRouter()

# Student management (CRUD)
api_router.include_router(students.router, prefix="/api/management", tags=["management"])
