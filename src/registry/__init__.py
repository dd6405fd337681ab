"""Package registry clients.

- rest.py: GitHub Packages REST API (numbered pages)
- graphql.py: GitHub Packages GraphQL API (cursor pages)
- pagination.py: the paged-fetch adapters shared by both clients

Both clients expose ``list_packages()``, ``list_versions(name)`` and
``delete_version(version)`` and raise RegistryError on failure.
"""

from constants import RegistryApis

from .errors import RegistryError  # noqa: F401
from .graphql import GitHubGraphQLClient
from .rest import GitHubRestClient


def get_client(config):
    """Build the registry client selected by config.api."""
    if config.api == RegistryApis.GRAPHQL.value:
        return GitHubGraphQLClient(config.organization, config.package_type, config.token)
    return GitHubRestClient(config.organization, config.package_type, config.token)


__all__ = [
    "RegistryError",
    "GitHubRestClient",
    "GitHubGraphQLClient",
    "get_client",
]
