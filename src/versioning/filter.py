"""Version filter: decide which enumerated versions get deleted."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .models import FilterDecision, PackageVersion, SelectionCriteria
from .parser import is_prerelease

logger = logging.getLogger(__name__)

REASON_NOT_ALLOWED = "package is not in the requested package list"
REASON_NOT_PRERELEASE = "version is not a prerelease"
REASON_NO_MATCH = "version does not contain pattern"


def evaluate_version(version: PackageVersion, criteria: SelectionCriteria) -> FilterDecision:
    """Apply the predicates in order; the first failure is the reason."""
    allowed = criteria.explicit_package_names
    if allowed is not None and version.package_name not in allowed:
        return FilterDecision(version, False, REASON_NOT_ALLOWED)
    if criteria.require_prerelease and not is_prerelease(version.version_label):
        return FilterDecision(version, False, REASON_NOT_PRERELEASE)
    if criteria.match_pattern not in version.version_label:
        return FilterDecision(
            version, False, f"{REASON_NO_MATCH} '{criteria.match_pattern}'"
        )
    return FilterDecision(version, True)


def filter_versions(
    versions: Iterable[PackageVersion],
    criteria: SelectionCriteria,
) -> List[PackageVersion]:
    """Return the versions selected for deletion, in input order.

    Every rejected version is logged with its reason and the retained set is
    logged in full before returning.
    """
    logger.info(
        "Gathering versions with '%s' in the version label to delete...",
        criteria.match_pattern,
    )
    retained: List[PackageVersion] = []
    for version in versions:
        decision = evaluate_version(version, criteria)
        if decision.retained:
            retained.append(version)
        else:
            logger.info(
                "Version %s of %s will not be deleted: %s",
                version.version_label,
                version.package_name,
                decision.reason,
            )

    if not retained:
        logger.info("Finished gathering versions, there were no items to remove.")
    else:
        logger.info("Finished gathering versions, the following items will be removed:")
        for version in retained:
            logger.info(
                "  %s %s (%s)", version.package_name, version.version_label, version.version_id
            )
    return retained
