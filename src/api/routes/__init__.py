from fastapi import FastAPI

from . import contact, dashboard, health, progress


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(dashboard.router)
    app.include_router(progress.router)
    app.include_router(contact.router)
