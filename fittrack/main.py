"""FastAPI application entry point."""
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fittrack.routers import charts, dashboard, health, workouts


app = FastAPI(title="FitTrack API")
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


@app.get("/", response_class=HTMLResponse, tags=["dashboard"])
async def dashboard_page(request: Request) -> HTMLResponse:
    """Dashboard page showing the summary cards."""
    return templates.TemplateResponse(request, "dashboard.html", {})


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(dashboard.router)
app.include_router(dashboard.duration_router)
app.include_router(charts.router)
app.include_router(workouts.router)
