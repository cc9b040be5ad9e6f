import uvicorn

from retail_dashboard.core.config import config


def run() -> None:
    """Serve the dashboard app with uvicorn on the configured host and port."""
    uvicorn.run(
        "retail_dashboard.main:app",
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    run()
