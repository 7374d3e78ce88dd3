# inventory_tracker/api/app.py

"""FastAPI application serving the products resource."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory_tracker.api.controller.products_controller import router
from inventory_tracker.storage.product_store import ProductStore

logger = logging.getLogger("inventory_tracker.api")


async def _invalid_body_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report unparseable or mistyped bodies as envelope validation errors."""
    logger.info(
        "Rejected %s %s: %s", request.method, request.url.path, exc.errors(),
    )
    return JSONResponse(
        {"success": False, "error": "Invalid request body"},
        status_code=400,
    )


def create_app(store: ProductStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Document store to serve. A store at the configured
            ``Settings.DB_PATH`` is opened when omitted.
    """
    app = FastAPI(
        title="Inventory Tracker API",
        description="CRUD API for the product inventory",
        version="1.0.0",
    )
    app.state.store = store or ProductStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(
        RequestValidationError, _invalid_body_handler,  # type: ignore[arg-type]
    )
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
