"""Tests for the GitHub Packages GraphQL client."""

import json
from unittest.mock import MagicMock, patch

import pytest

from constants import Constants
from registry.errors import RegistryError
from registry.graphql import GitHubGraphQLClient
from versioning.models import PackageInfo, PackageVersion


def make_response(body, status_code=200):
    res = MagicMock()
    res.status_code = status_code
    res.text = json.dumps(body)
    return res


def versions_body(nodes, has_next=False, cursor=None):
    return {"data": {"organization": {"packages": {"nodes": [{
        "name": "pkg",
        "versions": {
            "nodes": nodes,
            "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
        },
    }]}}}}


def sent_variables(mock_post, index):
    return json.loads(mock_post.call_args_list[index][1]["data"])["variables"]


def make_client(page_size=100):
    return GitHubGraphQLClient("my-org", "npm", "secret", url="https://api.test/graphql", page_size=page_size)


class TestListVersions:
    """Test GitHubGraphQLClient.list_versions."""

    @patch('registry.graphql.safe_post')
    def test_follows_cursor(self, mock_safe_post):
        mock_safe_post.side_effect = [
            make_response(versions_body([{"id": "PV_1", "version": "1.0.0-a.1"}], True, "Y3Vy")),
            make_response(versions_body([{"id": "PV_2", "version": "1.0.0-a.2"}], False, "Y3Vz")),
        ]

        versions = make_client().list_versions("pkg")

        assert versions == [
            PackageVersion("pkg", "1.0.0-a.1", "PV_1"),
            PackageVersion("pkg", "1.0.0-a.2", "PV_2"),
        ]
        first = sent_variables(mock_safe_post, 0)
        second = sent_variables(mock_safe_post, 1)
        assert first["after"] is None
        assert first["type"] == "NPM"
        assert first["name"] == "pkg"
        assert first["first"] == 100
        assert second["after"] == "Y3Vy"

    @patch('registry.graphql.safe_post')
    def test_missing_package_yields_no_versions(self, mock_safe_post):
        mock_safe_post.return_value = make_response(
            {"data": {"organization": {"packages": {"nodes": []}}}}
        )

        assert make_client().list_versions("ghost") == []

    @patch('registry.graphql.safe_post')
    def test_graphql_errors_raise(self, mock_safe_post):
        mock_safe_post.return_value = make_response(
            {"data": None, "errors": [{"message": "Resource not accessible by integration"}]}
        )

        with pytest.raises(RegistryError, match="not accessible"):
            make_client().list_versions("pkg")

    @patch('registry.graphql.safe_post')
    def test_unknown_organization_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response({"data": {"organization": None}})

        with pytest.raises(RegistryError, match="my-org"):
            make_client().list_versions("pkg")

    @patch('registry.graphql.safe_post')
    def test_http_error_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response({}, status_code=502)

        with pytest.raises(RegistryError) as excinfo:
            make_client().list_versions("pkg")
        assert excinfo.value.status_code == 502

    @patch('registry.graphql.safe_post')
    def test_null_packages_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response({"data": {"organization": {"packages": None}}})

        with pytest.raises(RegistryError, match="Unexpected payload"):
            make_client().list_versions("pkg")

    @patch('registry.graphql.safe_post')
    def test_version_without_id_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response(versions_body([{"version": "1.0.0-a.1"}]))

        with pytest.raises(RegistryError, match="Unexpected payload"):
            make_client().list_versions("pkg")


class TestListPackages:
    """Test GitHubGraphQLClient.list_packages."""

    @patch('registry.graphql.safe_post')
    def test_reads_packages_with_repository(self, mock_safe_post):
        mock_safe_post.side_effect = [
            make_response({"data": {"organization": {"packages": {
                "nodes": [{"name": "pkg-a", "repository": {"name": "repo"}}],
                "pageInfo": {"hasNextPage": True, "endCursor": "abc"},
            }}}}),
            make_response({"data": {"organization": {"packages": {
                "nodes": [{"name": "pkg-b", "repository": None}],
                "pageInfo": {"hasNextPage": False, "endCursor": None},
            }}}}),
        ]

        packages = make_client().list_packages()

        assert packages == [PackageInfo("pkg-a", "repo"), PackageInfo("pkg-b", None)]
        assert sent_variables(mock_safe_post, 1)["after"] == "abc"

    @patch('registry.graphql.safe_post')
    def test_null_packages_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response({"data": {"organization": {"packages": None}}})

        with pytest.raises(RegistryError, match="Unexpected payload"):
            make_client().list_packages()


class TestDeleteVersion:
    """Test GitHubGraphQLClient.delete_version."""

    @patch('registry.graphql.safe_post')
    def test_sends_mutation_with_preview_header(self, mock_safe_post):
        mock_safe_post.return_value = make_response(
            {"data": {"deletePackageVersion": {"success": True}}}
        )

        make_client().delete_version(PackageVersion("pkg", "1.0.0-a.1", "PV_1"))

        kwargs = mock_safe_post.call_args[1]
        assert kwargs["headers"]["Accept"] == Constants.GITHUB_PACKAGE_DELETES_PREVIEW
        assert "deletePackageVersion" in json.loads(kwargs["data"])["query"]
        assert sent_variables(mock_safe_post, 0) == {"id": "PV_1"}

    @patch('registry.graphql.safe_post')
    def test_unconfirmed_delete_raises(self, mock_safe_post):
        mock_safe_post.return_value = make_response(
            {"data": {"deletePackageVersion": {"success": False}}}
        )

        with pytest.raises(RegistryError):
            make_client().delete_version(PackageVersion("pkg", "1.0.0-a.1", "PV_1"))
