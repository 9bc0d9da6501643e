"""Main entry point for the system view service."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from sim import Sim
from sysview.api import create_fastapi_app
from sysview.config import ServiceSettings
from sysview.logging_config import setup_logging


def main():
    """Serve the system view; the SIM is started through the control routes."""
    load_dotenv(Path(__file__).resolve().parent / ".env")
    settings = ServiceSettings.from_env()

    setup_logging(
        log_level=settings.log_level,
        console_format=settings.log_format,
        engine_log_level=settings.engine_log_level,
    )

    sim = Sim(
        api_url=settings.api_url,
        rounds=settings.sim_rounds,
        interval=settings.sim_interval,
    )
    app = create_fastapi_app(sim=sim)

    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
