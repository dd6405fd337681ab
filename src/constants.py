"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    # Alias of FILE_ERROR: both exit with 1.
    CONFIG_ERROR = 1
    CONNECTION_ERROR = 2
    EXIT_WARNINGS = 3


class PackageTypes(Enum):
    """Package types hosted by the registry.

    Args:
        Enum (string): Package ecosystems accepted by the registry API.
    """

    NPM = "npm"
    MAVEN = "maven"
    RUBYGEMS = "rubygems"
    DOCKER = "docker"
    NUGET = "nuget"
    CONTAINER = "container"


class RegistryApis(Enum):
    """Registry API shapes the cleanup can talk to."""

    REST = "rest"
    GRAPHQL = "graphql"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_PACKAGES = [p.value for p in PackageTypes]
    SUPPORTED_APIS = [a.value for a in RegistryApis]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    RUN_TIMEOUT_SEC = 600

    # Branch refs
    REF_PREFIX = "refs/heads/"

    # Registry API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
    GITHUB_API_VERSION = "2022-11-28"
    GITHUB_PACKAGE_DELETES_PREVIEW = "application/vnd.github.package-deletes-preview+json"
    REST_PER_PAGE = 50
    GRAPHQL_PAGE_SIZE = 100

    # Environment
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITHUB_REPOSITORY = "GITHUB_REPOSITORY"
    ENV_GITHUB_HEAD_REF = "GITHUB_HEAD_REF"
    ENV_GITHUB_ACTIONS = "GITHUB_ACTIONS"
    ENV_LOG_LEVEL = "BRANCHPRUNE_LOG_LEVEL"
    ENV_INPUT_PREFIX = "INPUT_"

    # Package types the GraphQL API can address (uppercased as PackageType enum values)
    GRAPHQL_PACKAGE_TYPES = [
        PackageTypes.NPM.value,
        PackageTypes.MAVEN.value,
        PackageTypes.RUBYGEMS.value,
        PackageTypes.DOCKER.value,
        PackageTypes.NUGET.value,
    ]
