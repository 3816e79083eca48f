import logging
from contextlib import asynccontextmanager
from typing import Annotated

from dishka import AsyncContainer, FromComponent
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from dishka.integrations.fastapi import inject, setup_dishka

from chain.client import ChainClient
from chain.contracts import ContractRegistry, TokenStandard
from core.container import container
from core.exception_handler import (
    validation_exception_handler,
    http_exception_handler,
    custom_exception_handler
)
from core.exceptions import BaseCustomException
from core.logging.middleware import access_log_middleware
from core.logging.providers import LOGGER_NAME
from tokens.router import router as tokens_router

APP_NAME = "TokenHub API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Deploy, mint, burn and inspect ERC-20/721/1155 tokens on Sepolia"

logger = logging.getLogger(LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connect to the chain before serving and release resources on shutdown.

    Any failure to load settings, parse the signing key or reach the node
    is fatal and stops the process.
    """
    app_container: AsyncContainer = app.state.dishka_container
    try:
        await app_container.get(logging.Logger, component="logger")
        chain_client = await app_container.get(ChainClient, component="chain")
        await chain_client.ping()
    except Exception as e:
        logger.critical(f"Failed to connect: {e}")
        await app_container.close()
        raise

    yield

    await app_container.close()


def create_app(app_container: AsyncContainer, cors_origins: list[str] | None = None) -> FastAPI:
    """
    Build the FastAPI application around a dishka container.

    Parameters
    ----------
    app_container : AsyncContainer
        Container resolving settings, chain client and use cases
    cors_origins : list[str] | None
        Allowed browser origins

    Returns
    -------
    FastAPI
        Configured application
    """
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description=APP_DESCRIPTION,
        lifespan=lifespan
    )

    setup_dishka(app_container, app)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BaseCustomException, custom_exception_handler)
    app.add_exception_handler(Exception, custom_exception_handler)

    app.middleware("http")(access_log_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.include_router(tokens_router)

    @app.get("/")
    @inject
    async def root(registry: Annotated[ContractRegistry, FromComponent("chain")]):
        """
        Root endpoint.

        `deployable` tells operators which standards ship creation bytecode.
        The others need a compiled artifact in `CONTRACT_ARTIFACTS_DIR`.

        Returns
        -------
        dict
            Application information
        """
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": APP_DESCRIPTION,
            "endpoints": {
                "balance": "/api/balance/{erc20|erc721|erc1155}",
                "deploy": "/api/deploy/{erc20|erc721|erc1155}",
                "mint": "/api/mint/{erc20|erc721|erc1155}",
                "burn": "/api/burn/{erc20|erc721|erc1155}",
                "docs": "/docs"
            },
            "deployable": {
                standard.value: registry.get(standard).deployable for standard in TokenStandard
            },
            "deployNote": "standards marked false need a compiled artifact in CONTRACT_ARTIFACTS_DIR"
        }

    @app.get("/health")
    async def health():
        """
        Health check endpoint.

        Returns
        -------
        dict
            Health status
        """
        return {"status": "healthy", "version": APP_VERSION}

    return app


app = create_app(container)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8080)
