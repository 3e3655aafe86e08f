"""
Resume Ranker CLI.
Ranks the PDF profiles of a local directory against a job description.
"""

import asyncio
import logging
from pathlib import Path

import click
import httpx

from config import settings
from models.responses import BatchResult
from services.batch_analyzer import TOP_CANDIDATES, BatchAnalyzer, BatchInputError, EmptyStorePolicy
from services.llm_client import build_llm_client
from services.llm_scorer import LLMScorer
from services.object_store import LocalDirectoryStore
from services.text_extractor import build_text_extractor


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


async def rank_profiles(profiles_dir: Path, job_description: str) -> BatchResult:
    """Analyse every profile in `profiles_dir` and return the ranking."""
    async with httpx.AsyncClient(timeout=settings.extraction_timeout_seconds) as http_client:
        analyzer = BatchAnalyzer(
            extractor=build_text_extractor(settings, http_client),
            scorer=LLMScorer(build_llm_client(settings)),
            store=LocalDirectoryStore(profiles_dir),
            inter_call_delay=settings.inter_call_delay_seconds,
            empty_store_policy=EmptyStorePolicy(settings.empty_store_policy),
        )
        return await analyzer.analyze_store(job_description)


def _print_ranking(result: BatchResult) -> None:
    click.echo(f"Analysed {result.total_analyzed} profile(s)")
    for position, candidate in enumerate(result.all_candidates, start=1):
        marker = "*" if position <= TOP_CANDIDATES else " "
        status = " [failed]" if candidate.failed else " [degraded]" if candidate.degraded else ""
        click.echo(
            f"{marker}{position:>3}. {candidate.overall_score:>3}/100  "
            f"{candidate.recommendation.value:<18}  {candidate.candidate_name} "
            f"({candidate.filename}){status}"
        )


@click.group()
def cli():
    """Resume Ranker - score candidate profiles against a job description."""


@cli.command()
@click.option(
    "--profiles-dir",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=lambda: settings.profiles_dir,
    show_default="PROFILES_DIR",
    help="Directory holding the candidate PDF files",
)
@click.option("--job-description", "-j", help="Job description text")
@click.option(
    "--job-description-file",
    "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the job description from a file",
)
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def rank(
    profiles_dir: Path,
    job_description: str | None,
    job_description_file: Path | None,
    as_json: bool,
    verbose: bool,
):
    """Rank the profiles in a directory and show the top candidates."""
    setup_logging(verbose)

    if job_description_file is not None:
        job_description = job_description_file.read_text(encoding="utf-8")
    if not job_description:
        raise click.UsageError("Provide --job-description or --job-description-file")

    try:
        result = asyncio.run(rank_profiles(Path(profiles_dir), job_description))
    except BatchInputError as e:
        raise click.UsageError(str(e))

    if as_json:
        click.echo(result.model_dump_json(indent=2))
    else:
        _print_ranking(result)


if __name__ == "__main__":
    cli()
