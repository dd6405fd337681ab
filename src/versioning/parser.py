"""Branch and version label parsing.

Turns a branch ref into the token used to recognise versions published by
that branch's CI builds, and classifies version labels as prereleases.
"""

import re
from typing import List

from constants import Constants

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9-]")
# Unanchored: the numeric core may appear anywhere in the label.
_PRERELEASE = re.compile(r"\d+\.\d+\.\d+-.+")


def normalize_branch(ref: str) -> str:
    """Return an identifier-safe token for a branch ref.

    Strips a leading ``refs/heads/`` and replaces every character outside
    ``[A-Za-z0-9-]`` with ``-``. Never raises; may return an empty string.
    """
    ref = ref or ""
    if ref.startswith(Constants.REF_PREFIX):
        ref = ref[len(Constants.REF_PREFIX):]
    return _UNSAFE_CHARS.sub("-", ref)


def build_match_pattern(token: str, strict: bool = True) -> str:
    """Build the substring searched for in version labels.

    Strict mode bounds the token as ``-<token>.`` so that ``feature-1`` does
    not match versions built from ``feature-10``.
    """
    if strict:
        return f"-{token}."
    return token


def is_prerelease(label: str) -> bool:
    """Return True if label contains a ``MAJOR.MINOR.PATCH-suffix`` version."""
    if not label:
        return False
    return _PRERELEASE.search(label) is not None


def parse_package_names(raw: str) -> List[str]:
    """Split a comma-separated package list, trimming and de-duplicating.

    Order of first appearance is preserved.
    """
    names: List[str] = []
    for part in (raw or "").split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names
