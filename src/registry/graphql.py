"""GitHub Packages GraphQL client.

Lists packages and versions through cursor-linked connections and deletes
versions by node id with the ``deletePackageVersion`` mutation.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from constants import Constants
from common.http_client import HttpRequestError, safe_post
from versioning.models import PackageInfo, PackageVersion

from .errors import RegistryError
from .pagination import CursorPager, Page

logger = logging.getLogger(__name__)

VERSIONS_QUERY = """
query($org: String!, $name: String!, $type: PackageType!, $first: Int!, $after: String) {
  organization(login: $org) {
    packages(first: 1, names: [$name], packageType: $type) {
      nodes {
        name
        versions(first: $first, after: $after) {
          nodes { id version }
          pageInfo { hasNextPage endCursor }
        }
      }
    }
  }
}
"""

PACKAGES_QUERY = """
query($org: String!, $type: PackageType!, $first: Int!, $after: String) {
  organization(login: $org) {
    packages(first: $first, after: $after, packageType: $type) {
      nodes {
        name
        repository { name }
      }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

DELETE_MUTATION = """
mutation($id: ID!) {
  deletePackageVersion(input: {packageVersionId: $id}) { success }
}
"""


class _PackageNotFound(Exception):
    pass


class GitHubGraphQLClient:
    """GraphQL client scoped to one organization and package type."""

    context = "graphql"

    def __init__(
        self,
        org: str,
        package_type: str,
        token: str,
        url: Optional[str] = None,
        page_size: int = Constants.GRAPHQL_PAGE_SIZE,
    ):
        self.org = org
        self.package_type = package_type
        self.token = token
        self.url = url or Constants.GITHUB_GRAPHQL_URL
        self.pager = CursorPager(page_size)

    def _get_headers(self, preview: bool = False) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        if preview:
            headers["Accept"] = Constants.GITHUB_PACKAGE_DELETES_PREVIEW
        return headers

    def _execute(self, query: str, variables: Dict[str, Any], preview: bool = False) -> Dict[str, Any]:
        """Run one GraphQL operation and return its ``data`` member."""
        payload = json.dumps({"query": query, "variables": variables})
        try:
            res = safe_post(
                self.url,
                context=self.context,
                data=payload,
                headers=self._get_headers(preview),
            )
        except HttpRequestError as exc:
            raise RegistryError(str(exc)) from exc
        if res.status_code != 200:
            raise RegistryError(f"GraphQL request failed: HTTP {res.status_code}", status_code=res.status_code)
        try:
            body = json.loads(res.text)
        except json.JSONDecodeError as exc:
            raise RegistryError("Couldn't decode GraphQL response") from exc
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            raise RegistryError(f"GraphQL errors: {messages}")
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise RegistryError("GraphQL response carried no data")
        return data

    def _organization(self, data: Dict[str, Any]) -> Dict[str, Any]:
        org = data.get("organization")
        if not org:
            raise RegistryError(f"Organization {self.org} was not found")
        return org

    def list_versions(self, package_name: str) -> List[PackageVersion]:
        """Return every version of package_name.

        A package the registry does not know yields an empty list.
        """
        def fetch_page(cursor: Optional[str], page_size: int) -> Page:
            data = self._execute(
                VERSIONS_QUERY,
                {
                    "org": self.org,
                    "name": package_name,
                    "type": self.package_type.upper(),
                    "first": page_size,
                    "after": cursor,
                },
            )
            org = self._organization(data)
            try:
                nodes = org["packages"]["nodes"]
                if not nodes:
                    raise _PackageNotFound()
                return _page(nodes[0]["versions"])
            except (KeyError, TypeError, AttributeError, IndexError) as exc:
                raise RegistryError(
                    f"Unexpected payload listing versions of {package_name}: {exc!r}"
                ) from exc

        try:
            items = self.pager.collect(fetch_page)
        except _PackageNotFound:
            logger.warning(
                "Package %s (%s) was not found in %s", package_name, self.package_type, self.org
            )
            return []
        try:
            return [
                PackageVersion(package_name=package_name, version_label=node["version"], version_id=node["id"])
                for node in items
            ]
        except (KeyError, TypeError) as exc:
            raise RegistryError(
                f"Unexpected payload listing versions of {package_name}: {exc!r}"
            ) from exc

    def list_packages(self) -> List[PackageInfo]:
        """Return every package of the configured type owned by the org."""
        def fetch_page(cursor: Optional[str], page_size: int) -> Page:
            data = self._execute(
                PACKAGES_QUERY,
                {
                    "org": self.org,
                    "type": self.package_type.upper(),
                    "first": page_size,
                    "after": cursor,
                },
            )
            org = self._organization(data)
            try:
                return _page(org["packages"])
            except (KeyError, TypeError, AttributeError) as exc:
                raise RegistryError(f"Unexpected payload listing packages of {self.org}: {exc!r}") from exc

        result = []
        for node in self.pager.collect(fetch_page):
            try:
                repository = node.get("repository") or {}
                result.append(PackageInfo(name=node["name"], repository=repository.get("name")))
            except (KeyError, TypeError, AttributeError) as exc:
                raise RegistryError(f"Unexpected payload listing packages of {self.org}: {exc!r}") from exc
        return result

    def delete_version(self, version: PackageVersion) -> None:
        """Delete one version; raises RegistryError when the registry refuses."""
        data = self._execute(DELETE_MUTATION, {"id": version.version_id}, preview=True)
        outcome = data.get("deletePackageVersion") or {}
        if not outcome.get("success"):
            raise RegistryError(f"Registry did not confirm deletion of {version.version_id}")


def _page(connection: Dict[str, Any]) -> Page:
    """Read a connection's nodes and pageInfo into a Page."""
    info = connection.get("pageInfo") or {}
    return Page(
        items=connection.get("nodes") or [],
        has_next=bool(info.get("hasNextPage")),
        cursor=info.get("endCursor"),
    )
