"""Argument parsing functionality for branchprune."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Flags left unset stay ``None`` so that environment variables and the
    config file can supply them.
    """
    parser = argparse.ArgumentParser(
        prog="branchprune",
        description=(
            "branchprune - Delete package versions published from a branch"
        ),
        add_help=True,
    )

    parser.add_argument("-b", "--branch-name",
                        dest="BRANCH_NAME",
                        help="Branch name or ref (refs/heads/... is stripped)",
                        action="store", type=str)
    parser.add_argument("-t", "--package-type",
                        dest="package_type",
                        help="Package type, i.e: npm, maven, nuget",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_PACKAGES)
    parser.add_argument("-p", "--package-name",
                        dest="PACKAGE_NAMES",
                        help=("Comma-separated package names to inspect. "
                              "When omitted, every package linked to the repository is inspected."),
                        action="store", type=str)
    parser.add_argument("--token",
                        dest="TOKEN",
                        help="Registry token (defaults to GITHUB_TOKEN)",
                        action="store", type=str)
    parser.add_argument("--organization",
                        dest="ORGANIZATION",
                        help="Organization owning the packages (defaults to the GITHUB_REPOSITORY owner)",
                        action="store", type=str)
    parser.add_argument("--repository",
                        dest="REPOSITORY",
                        help="Repository used to discover packages (defaults to the GITHUB_REPOSITORY name)",
                        action="store", type=str)

    match_group = parser.add_mutually_exclusive_group()
    match_group.add_argument("--strict",
                             dest="STRICT_MATCH",
                             help="Match '-<branch>.' in version labels (default)",
                             action="store_const", const=True)
    match_group.add_argument("--loose",
                             dest="STRICT_MATCH",
                             help="Match the bare branch token anywhere in version labels",
                             action="store_const", const=False)
    parser.add_argument("--prerelease-only",
                        dest="PRERELEASE_ONLY",
                        help="Only delete versions shaped like MAJOR.MINOR.PATCH-suffix",
                        action="store_const", const=True)
    parser.add_argument("--api",
                        dest="API",
                        help="Registry API to use (default: rest)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_APIS)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Report what would be deleted without deleting anything",
                        action="store_const", const=True)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"Overall run timeout in seconds (default: {Constants.RUN_TIMEOUT_SEC})",
                        action="store", type=int)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to a JSON run report",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if any package or version failed.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or YML)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
