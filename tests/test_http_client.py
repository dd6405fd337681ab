"""Tests for the shared HTTP helpers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from common.http_client import HttpRequestError, safe_delete, safe_get, safe_post
from constants import Constants


@patch('common.http_client.requests.get')
def test_safe_get_passes_timeout(mock_get):
    mock_get.return_value = MagicMock(status_code=200)

    res = safe_get("https://api.test/x", context="rest", headers={"A": "b"})

    assert res.status_code == 200
    mock_get.assert_called_once_with(
        "https://api.test/x", timeout=Constants.REQUEST_TIMEOUT, headers={"A": "b"}
    )


@patch('common.http_client.requests.get')
def test_timeout_becomes_request_error(mock_get):
    mock_get.side_effect = requests.Timeout("slow")

    with pytest.raises(HttpRequestError, match="timed out"):
        safe_get("https://api.test/x", context="rest")


@patch('common.http_client.requests.post')
def test_connection_error_becomes_request_error(mock_post):
    mock_post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(HttpRequestError, match="graphql connection error"):
        safe_post("https://api.test/graphql", context="graphql", data="{}")


@patch('common.http_client.requests.delete')
def test_safe_delete_returns_error_statuses(mock_delete):
    mock_delete.return_value = MagicMock(status_code=404)

    assert safe_delete("https://api.test/x/1", context="rest").status_code == 404
