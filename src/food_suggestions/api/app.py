"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_suggestions.api.foods import router as foods_router
from food_suggestions.app_logging import configure_logging
from food_suggestions.containers import AppContainer
from food_suggestions.domain.errors import RankingError, UpstreamFetchFailedError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(foods_router)

    @app.exception_handler(RankingError)
    async def ranking_error_handler(
        request: Request, exc: RankingError
    ) -> JSONResponse:
        if isinstance(exc, UpstreamFetchFailedError):
            status_code = status.HTTP_502_BAD_GATEWAY
        else:
            status_code = status.HTTP_400_BAD_REQUEST
        logger.warning(
            "Request %s %s failed: %s", request.method, request.url.path, exc.code
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": {"code": exc.code, "message": str(exc)}},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
