"""Run report: what was inspected, selected, deleted and skipped."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from versioning.models import (
    DeletionResult,
    DeletionStatus,
    EnumerationResult,
    PackageVersion,
)

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Aggregated outcome of one cleanup run."""
    match_pattern: str
    dry_run: bool = False
    packages: List[str] = field(default_factory=list)
    enumerations: List[EnumerationResult] = field(default_factory=list)
    retained: List[PackageVersion] = field(default_factory=list)
    deletions: List[DeletionResult] = field(default_factory=list)

    def versions_seen(self) -> int:
        return sum(len(e.versions) for e in self.enumerations)

    def failed_enumerations(self) -> List[EnumerationResult]:
        return [e for e in self.enumerations if not e.ok]

    def with_status(self, status: DeletionStatus) -> List[DeletionResult]:
        return [d for d in self.deletions if d.status is status]

    def has_failures(self) -> bool:
        return bool(self.failed_enumerations() or self.with_status(DeletionStatus.FAILED))

    def log_summary(self) -> None:
        """Log the end-of-run summary."""
        failed = self.with_status(DeletionStatus.FAILED)
        logger.info("Summary")
        logger.info("- pattern: %s", self.match_pattern)
        logger.info("- packages_inspected: %d", len(self.packages))
        logger.info("- packages_failed: %d", len(self.failed_enumerations()))
        logger.info("- versions_seen: %d", self.versions_seen())
        logger.info("- versions_selected: %d", len(self.retained))
        if self.dry_run:
            logger.info("- versions_planned: %d", len(self.with_status(DeletionStatus.PLANNED)))
        logger.info("- versions_deleted: %d", len(self.with_status(DeletionStatus.DELETED)))
        logger.info("- versions_failed: %d", len(failed))
        logger.info("- versions_skipped: %d", len(self.with_status(DeletionStatus.SKIPPED)))
        for e in self.failed_enumerations():
            logger.warning("Package %s could not be enumerated: %s", e.package_name, e.error)
        for d in failed:
            logger.warning(
                "Version %s of %s was not deleted: %s",
                d.version.version_label,
                d.version.package_name,
                d.reason,
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.match_pattern,
            "dryRun": self.dry_run,
            "packages": [
                {
                    "packageName": e.package_name,
                    "versionCount": len(e.versions),
                    "error": e.error,
                }
                for e in self.enumerations
            ],
            "selected": [_version_dict(v) for v in self.retained],
            "deletions": [
                dict(_version_dict(d.version), status=d.status.value, reason=d.reason)
                for d in self.deletions
            ],
            "totals": {
                "packages": len(self.packages),
                "versionsSeen": self.versions_seen(),
                "selected": len(self.retained),
                **{s.value: len(self.with_status(s)) for s in DeletionStatus},
            },
        }

    def export_json(self, path: str) -> None:
        """Write the report to path.

        Raises:
            OSError: If the file cannot be written.
        """
        with open(path, "w", encoding="utf-8") as file:
            json.dump(self.to_dict(), file, ensure_ascii=False, indent=4)
        logger.info("JSON report has been successfully exported at: %s", path)


def _version_dict(version: PackageVersion) -> Dict[str, Any]:
    return {
        "packageName": version.package_name,
        "version": version.version_label,
        "id": version.version_id,
    }
