"""GitHub Packages REST client.

Lists package versions and organization packages through the numbered-page
REST endpoints and deletes versions by numeric id.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import HttpRequestError, safe_delete, safe_get
from common.logging_utils import safe_url
from versioning.models import PackageInfo, PackageVersion

from .errors import RegistryError
from .pagination import OffsetPager, Page

logger = logging.getLogger(__name__)


class GitHubRestClient:
    """REST client scoped to one organization and package type."""

    context = "rest"

    def __init__(
        self,
        org: str,
        package_type: str,
        token: str,
        base_url: Optional[str] = None,
        page_size: int = Constants.REST_PER_PAGE,
    ):
        self.org = org
        self.package_type = package_type
        self.token = token
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.pager = OffsetPager(page_size)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": Constants.GITHUB_API_VERSION,
        }

    def _package_url(self, package_name: str) -> str:
        return (
            f"{self.base_url}/orgs/{quote(self.org, safe='')}/packages/"
            f"{self.package_type}/{quote(package_name, safe='')}"
        )

    def _get_page(self, url: str, page: int, page_size: int, params=None) -> Any:
        query = dict(params or {})
        query.update({"per_page": page_size, "page": page})
        try:
            res = safe_get(url, context=self.context, headers=self._get_headers(), params=query)
        except HttpRequestError as exc:
            raise RegistryError(str(exc)) from exc
        if res.status_code != 200:
            raise RegistryError(
                f"An error occurred retrieving page {page} of {safe_url(url)}: "
                f"HTTP {res.status_code}",
                status_code=res.status_code,
            )
        try:
            data = json.loads(res.text)
        except json.JSONDecodeError as exc:
            raise RegistryError(f"Couldn't decode JSON from {safe_url(url)}") from exc
        if not isinstance(data, list):
            raise RegistryError(f"Unexpected payload from {safe_url(url)}")
        return data

    def list_versions(self, package_name: str) -> List[PackageVersion]:
        """Return every version of package_name.

        A package the registry does not know yields an empty list.
        """
        url = f"{self._package_url(package_name)}/versions"

        def fetch_page(page: int, page_size: int) -> Page:
            return Page(items=self._get_page(url, page, page_size))

        try:
            items = self.pager.collect(fetch_page)
        except RegistryError as exc:
            if exc.status_code == 404:
                logger.warning(
                    "Package %s (%s) was not found in %s",
                    package_name,
                    self.package_type,
                    self.org,
                )
                return []
            raise
        try:
            return [
                PackageVersion(package_name=package_name, version_label=item["name"], version_id=item["id"])
                for item in items
            ]
        except (KeyError, TypeError, AttributeError) as exc:
            raise RegistryError(f"Unexpected payload listing versions of {package_name}: {exc!r}") from exc

    def list_packages(self) -> List[PackageInfo]:
        """Return every package of the configured type owned by the org."""
        url = f"{self.base_url}/orgs/{quote(self.org, safe='')}/packages"

        def fetch_page(page: int, page_size: int) -> Page:
            return Page(items=self._get_page(url, page, page_size, {"package_type": self.package_type}))

        packages = []
        for item in self.pager.collect(fetch_page):
            try:
                repository = item.get("repository") or {}
                packages.append(PackageInfo(name=item["name"], repository=repository.get("name")))
            except (KeyError, TypeError, AttributeError) as exc:
                raise RegistryError(f"Unexpected payload listing packages of {self.org}: {exc!r}") from exc
        return packages

    def delete_version(self, version: PackageVersion) -> None:
        """Delete one version; raises RegistryError when the registry refuses."""
        url = f"{self._package_url(version.package_name)}/versions/{version.version_id}"
        try:
            res = safe_delete(url, context=self.context, headers=self._get_headers())
        except HttpRequestError as exc:
            raise RegistryError(str(exc)) from exc
        if res.status_code not in (200, 202, 204):
            message = _error_message(res.text)
            raise RegistryError(
                f"HTTP {res.status_code}" + (f": {message}" if message else ""),
                status_code=res.status_code,
            )


def _error_message(text: str) -> Optional[str]:
    """Pull the ``message`` field out of a GitHub error body."""
    try:
        body = json.loads(text or "")
    except json.JSONDecodeError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None
