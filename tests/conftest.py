"""Shared fixtures."""

from unittest.mock import MagicMock

import pytest

from config import RunConfig
from versioning.parser import build_match_pattern, normalize_branch


@pytest.fixture
def make_config():
    """Factory for RunConfig values with sensible defaults."""
    def _make(**overrides):
        branch = overrides.pop("branch_name", "feature/x")
        strict = overrides.pop("strict_match", True)
        token = normalize_branch(branch)
        values = dict(
            token="secret",
            organization="my-org",
            repository="my-repo",
            package_type="npm",
            package_names=(),
            branch_name=branch,
            branch_token=token,
            match_pattern=build_match_pattern(token, strict),
            strict_match=strict,
        )
        values.update(overrides)
        return RunConfig(**values)
    return _make


@pytest.fixture
def client():
    """A registry client double."""
    return MagicMock()
