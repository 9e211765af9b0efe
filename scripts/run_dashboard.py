"""
Run Dashboard API

Helper script to start the PayDash FastAPI server.
"""

import logging

import uvicorn
from paydash.config import config


def main():
    """Start the dashboard API."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("=" * 60)
    print("  PayDash API")
    print("  Starting FastAPI server...")
    print("=" * 60)
    print(f"\nService will run at: http://{config.host}:{config.port}")
    print(f"API docs available at: http://{config.host}:{config.port}/docs")
    print("\nPress Ctrl+C to stop\n")

    uvicorn.run(
        "paydash.server:app",
        host=config.host,
        port=config.port,
        reload=True,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
