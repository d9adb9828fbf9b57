"""Shared fixtures for Zephyr client tests."""

from unittest.mock import patch

import pytest

from mcp_zephyr.zephyr import ZephyrConfig, ZephyrFetcher, build_profile


@pytest.fixture
def data_center_config():
    return ZephyrConfig(url="https://jira.example.com", api_token="dc-token-123456")


@pytest.fixture
def cloud_config():
    return ZephyrConfig(url="https://acme.atlassian.net", api_token="cloud-token-123456")


def _make_fetcher(config):
    with (
        patch("mcp_zephyr.zephyr.client.AtlassianRestAPI"),
        patch("mcp_zephyr.zephyr.client.configure_ssl_verification"),
    ):
        return ZephyrFetcher(config=config, profile=build_profile(config))


@pytest.fixture
def zephyr_fetcher(data_center_config):
    """ZephyrFetcher for a Data Center backend whose REST client is a MagicMock."""
    return _make_fetcher(data_center_config)


@pytest.fixture
def cloud_zephyr_fetcher(cloud_config):
    """ZephyrFetcher for a Cloud backend whose REST client is a MagicMock."""
    return _make_fetcher(cloud_config)
