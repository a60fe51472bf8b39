import logging
from fastapi import Depends, FastAPI
from app.api.v1 import api_router
from app.api.v1.endpoints.console import get_console
from app.client.student_list import StudentListClient
from app.config import settings
import os

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title=settings.app_name,
    description="Roster console that lists, creates, edits and deletes students through the students API",
    version="1.0.0"
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": "Welcome to Student Roster Console",
        "description": "Manage the student roster through the students API"
    }


@app.get("/health")
async def health_check(console: StudentListClient = Depends(get_console)):
    return {"status": "healthy", "backend": await console.check_backend()}


# Ensure logs directory exists
os.makedirs(settings.log_dir, exist_ok=True)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
