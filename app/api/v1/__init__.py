from fastapi import APIRouter
from app.api.v1.endpoints import console

api_router = APIRouter()
api_router.include_router(console.router, prefix="/console", tags=["console"])
