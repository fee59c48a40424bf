"""Main entry point for browsing a user's GitHub repositories.

This script is a thin text front end: it drives the pagination controller
the way a UI would, calling search() once and load_more() while more pages
are available.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from repo_pager.application.pagination_controller import PaginationController
from repo_pager.domain.models import SessionState
from repo_pager.infrastructure.github_rest_client import GitHubRestClient
from repo_pager.infrastructure.settings import load_settings

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="List a GitHub user's repositories page by page."
    )
    parser.add_argument("username", help="GitHub login to list repositories for")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=1,
        help="Maximum number of pages to fetch (default: 1, 0 for all)"
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Repositories per page (default: PAGE_SIZE or 30)"
    )
    return parser.parse_args(argv)


def log_transition(state: SessionState) -> None:
    """Log every published session snapshot."""
    if state.is_initial_load:
        logger.info(f"Loading repositories for {state.username}...")
    elif state.is_loading_more:
        logger.info(f"Loading page {state.current_page} ({state.repo_count} shown)...")
    elif state.error:
        logger.error(f"Error: {state.error}")
    else:
        logger.info(
            f"{state.repo_count} repositories loaded, "
            f"more available: {state.has_more}"
        )


def render(state: SessionState) -> None:
    """Print the accumulated repositories."""
    for repo in state.repos:
        if repo.description:
            print(f"{repo.name} - {repo.description}")
        else:
            print(repo.name)


async def main(argv: Optional[List[str]] = None) -> int:
    """Execute the browsing session.

    Returns:
        Process exit code, 1 when the session ended with an error
    """
    args = parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    page_size = args.page_size or settings.page_size
    github_client = GitHubRestClient.from_settings(settings)
    controller = PaginationController(github_client, page_size=page_size)
    controller.subscribe(log_transition)

    try:
        state = await controller.search(args.username)
        pages = 1
        while state.has_more and not state.error and (args.max_pages <= 0 or pages < args.max_pages):
            state = await controller.load_more()
            pages += 1
    finally:
        controller.cancel()
        await github_client.close()

    render(state)

    if state.error:
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
