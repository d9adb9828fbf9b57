"""Tests for backend detection and profile building."""

from unittest.mock import patch

import pytest

from mcp_zephyr.exceptions import ConfigurationError
from mcp_zephyr.zephyr import (
    BackendProfile,
    DeploymentType,
    ZephyrConfig,
    build_profile,
    detect_deployment_type,
)
from mcp_zephyr.zephyr.constants import CLOUD_API_BASE


@pytest.mark.parametrize("override", [None, "datacenter", "DATACENTER", "bogus"])
def test_detect_cloud_url_wins_over_override(override):
    assert (
        detect_deployment_type("https://acme.atlassian.net", override)
        is DeploymentType.CLOUD
    )


def test_detect_cloud_url_is_case_insensitive():
    assert detect_deployment_type("https://ACME.Atlassian.NET/") is DeploymentType.CLOUD


@pytest.mark.parametrize(
    "override,expected",
    [
        ("cloud", DeploymentType.CLOUD),
        (" Cloud ", DeploymentType.CLOUD),
        ("datacenter", DeploymentType.DATA_CENTER),
        ("DataCenter", DeploymentType.DATA_CENTER),
        (None, DeploymentType.DATA_CENTER),
        ("", DeploymentType.DATA_CENTER),
    ],
)
def test_detect_with_override(override, expected):
    assert detect_deployment_type("https://jira.internal.acme.com", override) is expected


def test_detect_unknown_override_warns_and_defaults(caplog):
    result = detect_deployment_type("https://jira.internal.acme.com", "server")

    assert result is DeploymentType.DATA_CENTER
    assert "Ignoring unrecognised deployment type override" in caplog.text


def test_detect_without_url_defaults_to_data_center():
    assert detect_deployment_type(None) is DeploymentType.DATA_CENTER


def test_build_profile_requires_url():
    with pytest.raises(ConfigurationError, match="base URL required"):
        build_profile(ZephyrConfig(api_token="token"))


def test_build_profile_requires_credential_without_network_call():
    with (
        patch("requests.Session.request") as mock_request,
        pytest.raises(ConfigurationError, match="credential required"),
    ):
        build_profile(ZephyrConfig(url="https://jira.example.com"))

    mock_request.assert_not_called()


def test_build_profile_data_center():
    profile = build_profile(
        ZephyrConfig(url="https://jira.example.com/jira", api_token="token")
    )

    assert isinstance(profile, BackendProfile)
    assert profile.deployment_type is DeploymentType.DATA_CENTER
    assert profile.is_cloud is False
    assert profile.base_url == "https://jira.example.com/jira"
    assert profile.endpoint("testcase") == "rest/atm/1.0/testcase"
    assert profile.endpoint("testcase_search") == "rest/atm/1.0/testcase/search"
    assert profile.endpoint("folder") == "rest/atm/1.0/folder"
    assert profile.endpoint("testrun_item", key="PROJ-C1") == "rest/atm/1.0/testrun/PROJ-C1"


def test_build_profile_cloud_uses_fixed_api_host():
    profile = build_profile(
        ZephyrConfig(url="https://acme.atlassian.net", api_token="token")
    )

    assert profile.deployment_type is DeploymentType.CLOUD
    assert profile.is_cloud is True
    assert profile.base_url == CLOUD_API_BASE
    assert profile.base_url != "https://acme.atlassian.net"
    assert profile.endpoint("testcase") == "testcases"
    assert profile.endpoint("testcase_search") == "testcases/search"
    assert profile.endpoint("testrun") == "testruns"
    assert profile.endpoint("folder") == "folders"
    assert (
        profile.endpoint("testrun_results", key="PROJ-C2")
        == "testruns/PROJ-C2/testresults"
    )


def test_build_profile_override_forces_cloud():
    profile = build_profile(
        ZephyrConfig(
            url="https://jira.internal.acme.com",
            api_token="token",
            deployment_type="cloud",
        )
    )

    assert profile.base_url == CLOUD_API_BASE


@pytest.mark.parametrize(
    "url", ["https://acme.atlassian.net", "https://jira.example.com"]
)
def test_build_profile_auth_headers_are_bearer_triple(url):
    profile = build_profile(ZephyrConfig(url=url, api_token="secret"))

    assert dict(profile.auth_headers) == {
        "Authorization": "Bearer secret",
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def test_profile_is_immutable():
    profile = build_profile(ZephyrConfig(url="https://jira.example.com", api_token="t"))

    with pytest.raises(AttributeError):
        profile.base_url = "https://other.example.com"  # type: ignore[misc]
    with pytest.raises(TypeError):
        profile.auth_headers["Authorization"] = "Bearer other"  # type: ignore[index]


def test_endpoint_quotes_path_parameters():
    profile = build_profile(ZephyrConfig(url="https://jira.example.com", api_token="t"))

    assert (
        profile.endpoint("testcase_item", key="PROJ-T1/../x")
        == "rest/atm/1.0/testcase/PROJ-T1%2F..%2Fx"
    )
    with pytest.raises(KeyError):
        profile.endpoint("unknown")
