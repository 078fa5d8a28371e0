"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lib.amino import __version__
from lib.amino.api.routes import device, health
from lib.amino.config import AminoConfig, load_config
from lib.amino.device import AminoDevice
from lib.amino.logging import log_info, setup_logging


def create_app(
    config: AminoConfig | None = None,
    amino_device: AminoDevice | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Parameters
    ----------
    config : AminoConfig | None, optional
        Configuration, by default loaded from the environment
    amino_device : AminoDevice | None, optional
        Device to serve, by default built from ``config``

    Returns
    -------
    FastAPI
        Configured FastAPI app
    """
    config = config or load_config()
    setup_logging(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        json_output=config.log_json,
        log_file=config.log_file,
    )

    amino_device = amino_device or AminoDevice.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Close the device session on shutdown."""
        log_info("API started", device_ip=amino_device.host)
        yield
        amino_device.disconnect()
        log_info("API stopped", device_ip=amino_device.host)

    app = FastAPI(
        title="Amino Set-Top Box Monitor API",
        description="Statistics and controls for one Amino set-top box",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(device.router)
    app.include_router(health.router)

    device.set_device(amino_device)
    health.set_device(amino_device)

    return app


def main() -> None:
    """Main entry point for running the API server."""
    import uvicorn

    config = load_config()
    uvicorn.run(create_app(config=config), host=config.api_host, port=config.api_port)


if __name__ == "__main__":
    main()
