"""
UI Server Entry Point

Starts the FastAPI server hosting the appointments page
"""

import logging

import uvicorn
from src.api.server import create_app
from src.config.settings import get_settings


def main():
    """Start UI server"""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app()

    print(f"\n🚀 Starting appointments UI on {settings.ui_host}:{settings.ui_port}")
    print(f"🔗 Backend:  {settings.api_base_url}")
    print(f"📖 API docs: http://{settings.ui_host}:{settings.ui_port}/docs\n")

    # Start server
    uvicorn.run(
        app,
        host=settings.ui_host,
        port=settings.ui_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
