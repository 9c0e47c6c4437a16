"""
main.py — FastAPI Entry Point for the Checkout Integration Service

This module builds the REST API that sits between the storefront and the
external providers (ToyyibPay for payments, EasyParcel for shipping).

Responsibilities:
    • Load and validate configuration at startup (fail fast)
    • Wire the provider clients and the order store into the application
    • Register the storefront and callback endpoints
    • Provide system health information

Run:
    python -m checkout_integration.main
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .clients import EasyParcelClient, ToyyibPayClient
from .config import Settings, load_settings
from .logging_config import get_logger, setup_logging
from .order_store import InMemoryOrderStore, OrderStore
from .routes import easyparcel_router, toyyib_router

log = get_logger(__name__)


def create_app(
        settings: Optional[Settings] = None,
        order_store: Optional[OrderStore] = None,
        toyyibpay: Optional[ToyyibPayClient] = None,
        easyparcel: Optional[EasyParcelClient] = None
) -> FastAPI:
    """
    Builds the FastAPI application.

    Args:
        settings (Settings, optional): Service configuration. Loaded from the
            environment when omitted, raising `ConfigurationError` if incomplete.
        order_store (OrderStore, optional): Order lookup used by the payment
            callback. Defaults to an `InMemoryOrderStore`.
        toyyibpay (ToyyibPayClient, optional): Payment gateway client.
        easyparcel (EasyParcelClient, optional): Shipping provider client.
            Clients are closed on shutdown only when built here.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or load_settings()

    owned_clients = []
    if toyyibpay is None:
        toyyibpay = ToyyibPayClient(settings)
        owned_clients.append(toyyibpay)
    if easyparcel is None:
        easyparcel = EasyParcelClient(settings)
        owned_clients.append(easyparcel)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Injected clients belong to the caller
        for client in owned_clients:
            client.close()

    app = FastAPI(title="Checkout Integration Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.order_store = order_store or InMemoryOrderStore()
    app.state.toyyibpay = toyyibpay
    app.state.easyparcel = easyparcel

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(toyyib_router)
    app.include_router(easyparcel_router)

    # Health Check Endpoint
    @app.get("/health")
    def health_check():
        """
        Simple health check endpoint for monitoring systems and container
        orchestrators.

        Returns:
            dict: A basic JSON object indicating service availability.
        """
        return {"status": "ok"}

    return app


def main():
    """Loads `.env`, configures logging and serves the application with uvicorn."""
    load_dotenv()
    setup_logging()
    settings = load_settings()
    log.info(f"Checkout integration service starting on port {settings.port}...")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
