"""
Car Tinder Backend — Landing Page Route
=========================================

What:  GET / serves index.html from the configured static directory.
Why:   The frontend is plain HTML/JS shipped next to the API; the remaining
       assets are served by the StaticFiles fallback set up in main.py.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from cartinder.config import settings
from cartinder.exceptions import NotFoundError

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def landing_page() -> FileResponse:
    index = Path(settings.static_dir).resolve() / "index.html"
    if not index.is_file():
        raise NotFoundError(resource="landing page", context={"path": str(index)})
    return FileResponse(path=str(index), media_type="text/html")
