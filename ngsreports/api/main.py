"""FastAPI application for the ngsreports API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ngsreports import __version__
from ngsreports.api.routes import reports_router
from ngsreports.api.routes.reports import set_settings
from ngsreports.config import load_settings
from ngsreports.fastqc.decoders import registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = load_settings()
    set_settings(settings)
    app.state.settings = settings
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="ngsreports",
        description="API for parsing FastQC quality-control reports",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(reports_router)

    @app.get("/api/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/api/modules")
    async def modules():
        """List the module decoders and their required columns."""
        return registry.info()

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ngsreports.api.main:app",
        host="127.0.0.1",
        port=8000,
    )
