from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol

from .github_client import DEFAULT_API_URL, GitHubClient

logger = logging.getLogger(__name__)

JOBS_PER_PAGE = 100


class MalformedRepositoryError(ValueError):
    pass


class JobNotFoundError(LookupError):
    pass


class JobListingClient(Protocol):
    def paginate(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        per_page: int = 100,
        max_pages: int = 10,
        item_key: str | None = None,
    ) -> list[Any]: ...


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    owner: str
    name: str


@dataclass(frozen=True, slots=True)
class JobInfo:
    job_id: str
    job_name: str


def parse_repository(repository: str) -> RepositoryRef:
    parts = repository.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedRepositoryError(
            f"GITHUB_REPOSITORY environment variable is malformed: {repository}"
        )
    return RepositoryRef(owner=parts[0], name=parts[1])


def find_job(
    jobs: Iterable[Mapping[str, Any]], *, run_attempt: int, runner_name: str
) -> JobInfo:
    """Return the first job of `jobs` (in API order) run by `runner_name` on `run_attempt`."""
    for job in jobs:
        if job.get("run_attempt") == run_attempt and job.get("runner_name") == runner_name:
            return JobInfo(job_id=str(job["id"]), job_name=str(job["name"]))
    raise JobNotFoundError("no job found matching the criteria")


def resolve_job(
    *,
    token: str,
    owner: str | None,
    repository: str,
    run_id: int,
    run_attempt: int,
    runner_name: str,
    client: JobListingClient | None = None,
    api_url: str = DEFAULT_API_URL,
    max_pages: int = 1,
) -> JobInfo:
    """
    Identify the job currently executing on `runner_name`.

    Lists the jobs of workflow run `run_id` and matches on attempt number and
    runner name.

    - `owner` is superseded by the owner parsed from `repository`.
    - Only the first `max_pages` pages of 100 jobs are inspected; a matching job
      beyond them is reported as not found.
    """
    repo = parse_repository(repository)
    if owner and owner != repo.owner:
        logger.debug(
            "Repository owner %s differs from %s; using the latter", owner, repo.owner
        )

    path = f"/repos/{repo.owner}/{repo.name}/actions/runs/{run_id}/jobs"
    context = (
        nullcontext(client)
        if client is not None
        else GitHubClient(token=token, base_url=api_url)
    )
    with context as gh:
        jobs = gh.paginate(
            path, per_page=JOBS_PER_PAGE, max_pages=max_pages, item_key="jobs"
        )

    logger.debug("Fetched %d jobs for run %s", len(jobs), run_id)
    return find_job(jobs, run_attempt=run_attempt, runner_name=runner_name)
