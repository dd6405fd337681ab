"""Version enumeration across the selected packages."""

from __future__ import annotations

import logging
from typing import Iterable, List

from registry.errors import RegistryError
from versioning.models import EnumerationResult, PackageVersion

logger = logging.getLogger(__name__)


def enumerate_package(client, package_name: str) -> EnumerationResult:
    """Fetch every version of one package; failures become a result."""
    try:
        versions = client.list_versions(package_name)
    except RegistryError as exc:
        logger.warning(
            "An error occurred retrieving versions of package %s: %s", package_name, exc
        )
        return EnumerationResult(package_name=package_name, error=str(exc))

    if not versions:
        logger.info("No versions found for package %s.", package_name)
    else:
        logger.info("There are %d versions of package %s.", len(versions), package_name)
    return EnumerationResult(
        package_name=package_name,
        versions=sorted(versions, key=lambda v: v.version_label),
    )


def enumerate_versions(client, package_names: Iterable[str]) -> List[EnumerationResult]:
    """Enumerate each package in turn, sequentially."""
    return [enumerate_package(client, name) for name in package_names]


def flatten(results: Iterable[EnumerationResult]) -> List[PackageVersion]:
    """All versions from successful enumerations, in package order."""
    versions: List[PackageVersion] = []
    for result in results:
        versions.extend(result.versions)
    return versions
