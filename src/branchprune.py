"""branchprune - delete package versions published from a branch.

Once a branch is merged or deleted, the prerelease packages its CI builds
published are no longer needed. This entry point selects the packages to
inspect, enumerates their versions, filters the versions built from the
branch and deletes them one by one.
"""
import logging
import sys
import time

from args import parse_args
from cleanup.deleter import delete_versions
from cleanup.enumerator import enumerate_versions, flatten
from cleanup.report import RunReport
from cleanup.selector import select_packages
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import ConfigError, RunConfig, build_config
from constants import ExitCodes
from registry import RegistryError, get_client
from versioning.filter import filter_versions

logger = logging.getLogger(__name__)


def run_cleanup(config: RunConfig, client) -> RunReport:
    """Run Selector -> Enumerator -> Filter -> Deleter once.

    Raises:
        RegistryError: If package discovery fails.
    """
    deadline = time.monotonic() + config.timeout
    report = RunReport(match_pattern=config.match_pattern, dry_run=config.dry_run)

    report.packages = select_packages(client, config)
    if not report.packages:
        return report

    report.enumerations = enumerate_versions(client, report.packages)
    report.retained = filter_versions(flatten(report.enumerations), config.criteria())
    report.deletions = delete_versions(
        client, report.retained, dry_run=config.dry_run, deadline=deadline
    )
    return report


def _log_settings(config: RunConfig) -> None:
    logger.info("Organization: %s", config.organization)
    if config.discovery_mode:
        logger.info("Repository: %s", config.repository)
    logger.info("Package type: %s", config.package_type)
    logger.info("Branch: %s (token '%s')", config.branch_name, config.branch_token)
    logger.info(
        "Match pattern: '%s' (%s)", config.match_pattern, "strict" if config.strict_match else "loose"
    )
    if config.prerelease_only:
        logger.info("Only prerelease versions will be deleted.")
    if config.dry_run:
        logger.info("Dry run: nothing will be deleted.")


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    try:
        configure_logging(args.LOG_LEVEL, args.LOG_FILE)
    except OSError as e:
        sys.stderr.write(f"Log file {args.LOG_FILE} couldn't be opened: {e}\n")
        sys.exit(ExitCodes.FILE_ERROR.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    _log_settings(config)
    client = get_client(config)

    try:
        report = run_cleanup(config, client)
    except RegistryError as e:
        logger.error("Package discovery failed, aborting: %s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    report.log_summary()

    if config.output:
        try:
            report.export_json(config.output)
        except OSError as e:
            logger.error("JSON report couldn't be written to disk: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)

    if report.has_failures():
        logger.warning("One or more packages or versions could not be processed.")
        if config.error_on_warnings:
            logger.error("Warnings present, exiting with non-zero status code.")
            sys.exit(ExitCodes.EXIT_WARNINGS.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
