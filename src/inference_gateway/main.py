from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from inference_gateway.api.routes import health_router, main_router
from inference_gateway.core import logging
from inference_gateway.core.config import Settings, get_settings
from inference_gateway.core.error_handling import (
    handle_client_error,
    handle_exception,
    handle_gateway_error,
    validation_exception_handler,
)
from inference_gateway.core.errors import ClientError, GatewayError
from inference_gateway.models.catalog import ModelCatalog
from inference_gateway.providers import ProviderManager
from inference_gateway.services.gateway import InferenceGateway


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[InferenceGateway] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.setup_logging(logging.LogConfig.build(settings.log_level, settings.log_dir))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            app.state.http_client = client
            if gateway is not None:
                app.state.gateway = gateway
            else:
                app.state.gateway = InferenceGateway(
                    ModelCatalog.load(), ProviderManager(settings, client)
                )
            logging.info("Inference gateway started")
            yield
        logging.info("Inference gateway stopped")

    app = FastAPI(title="Inference Gateway", lifespan=lifespan)

    # Credentials stay off so browsers receive a literal wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, handle_exception)

    app.include_router(health_router)
    app.include_router(main_router)
    return app


app = create_app()
