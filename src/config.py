"""Run configuration.

Builds the immutable RunConfig for one cleanup run. Values are resolved
with precedence CLI > environment > YAML config file > defaults. The
environment covers GitHub Actions inputs (``INPUT_<NAME>``) and the
runner's own variables (GITHUB_TOKEN, GITHUB_REPOSITORY, GITHUB_HEAD_REF).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml

from constants import Constants, RegistryApis
from versioning.models import SelectionCriteria
from versioning.parser import build_match_pattern, normalize_branch, parse_package_names

logger = logging.getLogger(__name__)

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")


class ConfigError(Exception):
    """Raised when the run cannot be configured."""


@dataclass(frozen=True)
class RunConfig:  # pylint: disable=too-many-instance-attributes
    """Settings for one cleanup run."""
    token: str
    organization: str
    repository: Optional[str]
    package_type: str
    package_names: Tuple[str, ...]
    branch_name: str
    branch_token: str
    match_pattern: str
    strict_match: bool = True
    prerelease_only: bool = False
    api: str = RegistryApis.REST.value
    dry_run: bool = False
    timeout: int = Constants.RUN_TIMEOUT_SEC
    output: Optional[str] = None
    error_on_warnings: bool = False

    @property
    def discovery_mode(self) -> bool:
        return not self.package_names

    def criteria(self) -> SelectionCriteria:
        """Selection criteria handed to the version filter."""
        return SelectionCriteria(
            match_pattern=self.match_pattern,
            strict_mode=self.strict_match,
            require_prerelease=self.prerelease_only,
            explicit_package_names=frozenset(self.package_names) if self.package_names else None,
        )


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML file.

    A ``branchprune`` section is used when present, otherwise the top-level
    mapping. Keys may use dashes or underscores.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    section = data.get("branchprune", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Config file {path}: 'branchprune' must be a mapping")
    logger.debug("Loaded settings from %s", path)
    return {str(k).replace("-", "_").lower(): v for k, v in section.items()}


def _input(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Read a GitHub Actions input; unset and blank inputs are None."""
    key = Constants.ENV_INPUT_PREFIX + name.replace(" ", "_").upper()
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _as_bool(value: Any, name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def _as_names(value: Any) -> Sequence[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return parse_package_names(str(value))


def build_config(args: Any, environ: Optional[Mapping[str, str]] = None) -> RunConfig:
    """Resolve every setting and validate the result.

    Raises:
        ConfigError: If a required setting is missing or invalid.
    """
    env = os.environ if environ is None else environ
    conf = load_config_file(getattr(args, "CONFIG", None))

    repo_owner, repo_name = None, None
    github_repository = env.get(Constants.ENV_GITHUB_REPOSITORY, "")
    if "/" in github_repository:
        repo_owner, repo_name = github_repository.split("/", 1)

    token = _first(
        getattr(args, "TOKEN", None),
        _input(env, "github-token"),
        env.get(Constants.ENV_GITHUB_TOKEN) or None,
        conf.get("token"),
    )
    if not token:
        raise ConfigError("A registry token is required (--token, INPUT_GITHUB-TOKEN or GITHUB_TOKEN).")

    organization = _first(
        getattr(args, "ORGANIZATION", None),
        _input(env, "organization"),
        conf.get("organization"),
        repo_owner,
    )
    if not organization:
        raise ConfigError("An organization is required (--organization or GITHUB_REPOSITORY).")

    repository = _first(
        getattr(args, "REPOSITORY", None),
        _input(env, "repository"),
        conf.get("repository"),
        repo_name,
    )

    package_type = _first(
        getattr(args, "package_type", None),
        _input(env, "package-type"),
        conf.get("package_type"),
    )
    if not package_type:
        raise ConfigError("A package type is required (--package-type).")
    package_type = str(package_type).strip().lower()
    if package_type not in Constants.SUPPORTED_PACKAGES:
        raise ConfigError(
            f"Unsupported package type '{package_type}'; expected one of "
            + ", ".join(Constants.SUPPORTED_PACKAGES)
        )

    package_names = tuple(_as_names(_first(
        getattr(args, "PACKAGE_NAMES", None),
        _input(env, "package-name"),
        conf.get("package_name"),
        conf.get("package_names"),
    )))
    if not package_names and not repository:
        raise ConfigError(
            "A repository is required to discover packages when no package names are given."
        )

    branch_name = _first(
        getattr(args, "BRANCH_NAME", None),
        _input(env, "branch-name"),
        conf.get("branch_name"),
        env.get(Constants.ENV_GITHUB_HEAD_REF) or None,
    )
    branch_name = str(branch_name or "").strip()
    if not branch_name:
        raise ConfigError("A non-empty branch name is required (--branch-name).")
    branch_token = normalize_branch(branch_name)
    if not branch_token:
        raise ConfigError(f"Branch ref '{branch_name}' does not name a branch.")

    strict_match = _as_bool(_first(
        getattr(args, "STRICT_MATCH", None),
        _input(env, "strict-match"),
        conf.get("strict_match"),
    ), "strict-match")
    strict_match = True if strict_match is None else strict_match

    prerelease_only = bool(_as_bool(_first(
        getattr(args, "PRERELEASE_ONLY", None),
        _input(env, "prerelease-only"),
        conf.get("prerelease_only"),
    ), "prerelease-only"))

    api = str(_first(
        getattr(args, "API", None),
        _input(env, "api"),
        conf.get("api"),
        RegistryApis.REST.value,
    )).strip().lower()
    if api not in Constants.SUPPORTED_APIS:
        raise ConfigError(f"Unsupported registry API '{api}'")
    if api == RegistryApis.GRAPHQL.value and package_type not in Constants.GRAPHQL_PACKAGE_TYPES:
        raise ConfigError(f"Package type '{package_type}' is not available through the GraphQL API")

    dry_run = bool(_as_bool(_first(
        getattr(args, "DRY_RUN", None),
        _input(env, "dry-run"),
        conf.get("dry_run"),
    ), "dry-run"))

    timeout_raw = _first(
        getattr(args, "TIMEOUT", None),
        _input(env, "timeout"),
        conf.get("timeout"),
        Constants.RUN_TIMEOUT_SEC,
    )
    try:
        timeout = int(timeout_raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout: {timeout_raw!r}") from e
    if timeout <= 0:
        raise ConfigError("Timeout must be a positive number of seconds")

    return RunConfig(
        token=str(token),
        organization=str(organization),
        repository=str(repository) if repository else None,
        package_type=package_type,
        package_names=package_names,
        branch_name=branch_name,
        branch_token=branch_token,
        match_pattern=build_match_pattern(branch_token, strict_match),
        strict_match=strict_match,
        prerelease_only=prerelease_only,
        api=api,
        dry_run=dry_run,
        timeout=timeout,
        output=_first(getattr(args, "OUTPUT", None), conf.get("output")),
        error_on_warnings=bool(
            getattr(args, "ERROR_ON_WARNINGS", False) or _as_bool(conf.get("error_on_warnings"), "error-on-warnings")
        ),
    )
