"""Package selection: which packages get inspected for branch versions."""

from __future__ import annotations

import logging
from typing import List

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


def select_packages(client, config) -> List[str]:
    """Return the package names to inspect.

    Explicit names are used verbatim and the registry is not queried.
    Otherwise every package of the configured type owned by the
    organization is listed and those linked to config.repository are kept.

    Raises:
        RegistryError: If discovery fails; the run cannot continue.
    """
    if config.package_names:
        names = list(config.package_names)
        logger.info("Inspecting the requested packages: %s", ", ".join(names))
        return names

    logger.info(
        "Discovering %s packages in %s linked to repository %s...",
        config.package_type,
        config.organization,
        config.repository,
    )
    packages = client.list_packages()
    wanted = (config.repository or "").lower()
    names = sorted(
        p.name for p in packages
        if p.repository is not None and p.repository.lower() == wanted
    )
    if is_debug_enabled(logger):
        logger.debug(
            "Package discovery finished",
            extra=extra_context(
                event="decision",
                component="selector",
                action="discover",
                count=len(packages),
                outcome="empty" if not names else "non_empty",
            )
        )
    if not names:
        logger.info(
            "No packages found for repository %s in %s.", config.repository, config.organization
        )
        return []
    logger.info("Found %d package(s): %s", len(names), ", ".join(names))
    return names
