import asyncio
import logging
from typing import List, Optional

import typer

from whereabouts.config import WhereaboutsConfig
from whereabouts.exceptions import WhereaboutsException
from whereabouts.logging_config import setup_logging
from whereabouts.oracle import HttpRelationshipOracle
from whereabouts.orchestrator import TaskOrchestrator, TaskResult


app = typer.Typer(help="Locate a person by walking the people/places oracles breadth-first.")
logger = logging.getLogger(__name__)


@app.command()
def run(
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level."),
    plain_logs: bool = typer.Option(False, "--plain-logs", help="Disable Rich log formatting."),
):
    """
    Fetch the seed note, extract people and places, search, and report the answer.
    """
    setup_logging(level=log_level, use_rich=not plain_logs)
    config = WhereaboutsConfig.from_env()
    try:
        result = asyncio.run(run_task_async(config))
    except WhereaboutsException as e:
        logger.error(e.message)
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    _print_result(result)


@app.command()
def search(
    names: List[str] = typer.Option([], "--name", "-n", help="Seed person name (repeatable)."),
    places: List[str] = typer.Option([], "--place", "-p", help="Seed place name (repeatable)."),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Name to look for. Defaults to TARGET_NAME."),
    report: bool = typer.Option(False, "--report", help="Submit the found location to the report endpoint."),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level."),
):
    """
    Search from explicit seed names and places, skipping the note and extraction.
    """
    setup_logging(level=log_level)
    config = WhereaboutsConfig.from_env()
    try:
        location = asyncio.run(search_async(config, list(names or []), list(places or []), target, report))
    except WhereaboutsException as e:
        logger.error(e.message)
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(location)


async def run_task_async(config: WhereaboutsConfig) -> TaskResult:
    api_key = config.require_api_key()
    async with HttpRelationshipOracle(config.base_url, api_key, timeout=config.http_timeout) as oracle:
        orchestrator = TaskOrchestrator.from_config(config, oracle)
        return await orchestrator.execute()


async def search_async(
    config: WhereaboutsConfig,
    names: List[str],
    places: List[str],
    target: Optional[str],
    report: bool,
) -> str:
    api_key = config.require_api_key()
    async with HttpRelationshipOracle(config.base_url, api_key, timeout=config.http_timeout) as oracle:
        orchestrator = TaskOrchestrator.from_config(config, oracle, with_seed=False, with_reporter=report)
        location = await orchestrator.run(names, places, target)
        outcome = orchestrator.last_outcome
        if outcome:
            logger.info(f"Requests: {outcome.request_count}, discovered places: {outcome.discovered_places}")
        return location


def _print_result(result: TaskResult):
    typer.echo("=== Search Results ===")
    typer.echo(f"Current location: {result.location}")
    typer.echo(f"Total API requests: {result.total_requests}")
    typer.echo(f"Original places: {result.original_places}")
    typer.echo(f"Discovered places: {result.discovered_places}")
    typer.echo(f"Processing time: {result.processing_time:.2f} seconds")
    if result.response is not None:
        typer.echo(f"Report response: {result.response}")


if __name__ == "__main__":
    app()
