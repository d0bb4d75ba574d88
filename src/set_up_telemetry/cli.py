from __future__ import annotations

import argparse
import logging
import os
from typing import Mapping

from .actions import WorkflowCommands, init_logging
from .build_info import get_build_info
from .config import ConfigurationError, load_action_config
from .github_client import GitHubApiError
from .jobs import JobListingClient, JobNotFoundError, MalformedRepositoryError, resolve_job
from .trace import generate_trace_id

ACTION_NAME = "set-up-telemetry"

logger = logging.getLogger(ACTION_NAME)


def main(
    argv: list[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    client: JobListingClient | None = None,
) -> int:
    parser = argparse.ArgumentParser(
        prog=ACTION_NAME,
        description="Derive the workflow trace ID and resolve the current job (GitHub Actions step).",
    )
    parser.add_argument(
        "--log-level", help="override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    )
    args = parser.parse_args(argv)

    if env is None:
        env = os.environ
    init_logging(level=args.log_level.upper() if args.log_level else None, env=env)
    commands = WorkflowCommands(env=env)

    build = get_build_info(env)
    logger.info(
        "Starting %s version: %s (%s) commit: %s",
        ACTION_NAME,
        build.version,
        build.date,
        build.commit,
    )

    try:
        config = load_action_config(env)
    except ConfigurationError as error:
        logger.error("%s", error)
        return 1

    trace_id = generate_trace_id(config.run_id, config.run_attempt)
    commands.set_output("trace-id", trace_id)
    logger.info("Trace ID: %s", trace_id)

    try:
        job = resolve_job(
            token=config.github_token,
            owner=config.repository_owner,
            repository=config.repository,
            run_id=config.run_id,
            run_attempt=config.run_attempt,
            runner_name=config.runner_name,
            client=client,
            api_url=config.api_url,
            max_pages=config.max_pages,
        )
    except (MalformedRepositoryError, GitHubApiError, JobNotFoundError) as error:
        logger.error("Error getting job info: %s", error)
        return 1

    commands.set_output("job-id", job.job_id)
    commands.set_output("job-name", job.job_name)
    logger.info("Job ID: %s, Job name: %s", job.job_id, job.job_name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
