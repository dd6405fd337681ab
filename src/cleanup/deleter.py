"""Best-effort deletion of selected versions.

Each version is deleted independently: a failure is logged as a warning and
recorded, and the next version is still attempted. There is no retry and no
rollback.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, List, Optional

from registry.errors import RegistryError
from versioning.models import DeletionResult, DeletionStatus, PackageVersion

logger = logging.getLogger(__name__)

REASON_DEADLINE = "run deadline exceeded"


def delete_version(client, version: PackageVersion, dry_run: bool = False) -> DeletionResult:
    """Delete one version and report the outcome."""
    if dry_run:
        logger.info(
            "[DRY-RUN] Would delete %s %s (%s)",
            version.package_name,
            version.version_label,
            version.version_id,
        )
        return DeletionResult(version, DeletionStatus.PLANNED)

    logger.info(
        "Deleting %s %s (%s)...", version.package_name, version.version_label, version.version_id
    )
    try:
        client.delete_version(version)
    except RegistryError as exc:
        logger.warning(
            "There was an error deleting %s %s (%s): %s",
            version.package_name,
            version.version_label,
            version.version_id,
            exc,
        )
        return DeletionResult(version, DeletionStatus.FAILED, str(exc))

    logger.info(
        "Finished deleting %s %s (%s).",
        version.package_name,
        version.version_label,
        version.version_id,
    )
    return DeletionResult(version, DeletionStatus.DELETED)


def delete_versions(
    client,
    versions: Iterable[PackageVersion],
    dry_run: bool = False,
    deadline: Optional[float] = None,
) -> List[DeletionResult]:
    """Delete versions in order.

    Args:
        client: Registry client exposing delete_version().
        versions: Versions selected by the filter.
        dry_run: Log instead of deleting.
        deadline: time.monotonic() value after which remaining versions are skipped.
    """
    results: List[DeletionResult] = []
    expired = False
    for version in versions:
        if not expired and deadline is not None and time.monotonic() >= deadline:
            expired = True
            logger.warning("Run deadline exceeded; remaining versions will not be deleted.")
        if expired:
            results.append(DeletionResult(version, DeletionStatus.SKIPPED, REASON_DEADLINE))
            continue
        results.append(delete_version(client, version, dry_run=dry_run))
    return results
