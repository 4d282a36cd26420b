"""
Main application entry point
"""

import argparse
import asyncio
from src.api.task_api_client import TaskAPIClient
from src.services.dashboard import Dashboard
from src.utils.formatters import format_dashboard
from src.utils.logger import logger
from src.config.settings import settings


async def show_dashboard() -> str:
    """Load tasks once and render the dashboard as text"""
    async with TaskAPIClient() as client:
        if not client.is_authenticated:
            return "Not logged in. Sign in through the web dashboard first."
        dashboard = Dashboard(client)
        await dashboard.load()
        return format_dashboard(dashboard.stats, dashboard.task_cards(), dashboard.error)


def serve():
    """Run the web dashboard"""
    import uvicorn
    from src.web.main import app

    logger.info(f"Starting task dashboard on {settings.WEB_HOST}:{settings.WEB_PORT}")
    uvicorn.run(app, host=settings.WEB_HOST, port=settings.WEB_PORT)


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Task management dashboard")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "show"],
        default="serve",
        help="serve the web dashboard (default) or print tasks to the terminal",
    )
    args = parser.parse_args(argv)

    settings.validate()

    if args.command == "show":
        print(asyncio.run(show_dashboard()))
    else:
        serve()


if __name__ == "__main__":
    main()
