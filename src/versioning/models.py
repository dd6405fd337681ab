"""Data models for package versions, selection criteria and run results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional


@dataclass(frozen=True)
class PackageVersion:
    """A single published version as reported by the registry."""
    package_name: str
    version_label: str
    version_id: Any  # opaque, assigned by the registry


@dataclass(frozen=True)
class PackageInfo:
    """A package owned by the organization and its linked repository."""
    name: str
    repository: Optional[str]


@dataclass(frozen=True)
class SelectionCriteria:
    """Inputs to the version filter, derived once per run."""
    match_pattern: str
    strict_mode: bool = True
    require_prerelease: bool = False
    explicit_package_names: Optional[FrozenSet[str]] = None


@dataclass(frozen=True)
class FilterDecision:
    """Outcome of evaluating one version against the selection criteria."""
    version: PackageVersion
    retained: bool
    reason: Optional[str] = None


@dataclass
class EnumerationResult:
    """Versions fetched for one package, or the reason fetching failed."""
    package_name: str
    versions: List[PackageVersion] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DeletionStatus(Enum):
    """Terminal state of a version handed to the deleter."""
    DELETED = "deleted"
    FAILED = "failed"
    SKIPPED = "skipped"
    PLANNED = "planned"


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of one delete attempt."""
    version: PackageVersion
    status: DeletionStatus
    reason: Optional[str] = None
