"""
Pytest configuration and fixtures for Menu Validator tests.

Provides temporary configuration files, sample page documents and a
mock HTTP transport serving those pages.
"""

import json
import tempfile
from pathlib import Path
from typing import Generator
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
import yaml


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for validator configuration files.

    Yields:
        Path to temporary configuration directory
    """
    with tempfile.TemporaryDirectory(prefix="menu_validator_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def validator_config() -> dict:
    """Sample validator configuration."""
    return {
        "api_url": "http://localhost:8000/challenges.json?id=1",
        "timeout_seconds": 5,
        "log_level": "DEBUG",
        "per_branch_validity": True,
    }


@pytest.fixture
def validator_config_file(temp_config_dir: Path, validator_config: dict) -> Path:
    """
    Create a temporary validator configuration file.

    Returns:
        Path to the configuration file
    """
    config_path = temp_config_dir / "validator-config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(validator_config, f)
    return config_path


@pytest.fixture
def clean_environment(monkeypatch) -> None:
    """
    Remove Menu Validator environment variables to ensure test isolation.
    """
    for var in (
        "MENU_VALIDATOR_API_URL",
        "MENU_VALIDATOR_LOG_LEVEL",
        "MENU_VALIDATOR_CONFIG_PATH",
    ):
        monkeypatch.delenv(var, raising=False)


# ============================================================================
# Menu Data Fixtures
# ============================================================================


@pytest.fixture
def mock_api_url() -> str:
    """Menu endpoint URL used with the mock transport."""
    return "http://localhost:8000/challenges.json?id=1"


@pytest.fixture
def menu_pages() -> list[dict]:
    """
    Three pages of menus, three per page.

    Root 1 is a proper tree (1 -> 2 -> 4, 1 -> 3), root 5 loops back on
    itself (5 -> 6 -> 7 -> 5) and root 8 has no children.
    """
    pagination = {"per_page": 3, "total": 8}
    return [
        {
            "menus": [
                {"id": 1, "data": "House", "child_ids": [2, 3]},
                {"id": 2, "data": "Kitchen", "parent_id": 1, "child_ids": [4]},
                {"id": 3, "data": "Garage", "parent_id": 1, "child_ids": []},
            ],
            "pagination": {"current_page": 1, **pagination},
        },
        {
            "menus": [
                {"id": 4, "data": "Oven", "parent_id": 2, "child_ids": []},
                {"id": 5, "data": "Company", "child_ids": [6]},
                {"id": 6, "data": "Payroll", "parent_id": 5, "child_ids": [7]},
            ],
            "pagination": {"current_page": 2, **pagination},
        },
        {
            "menus": [
                {"id": 7, "data": "Payroll Loop", "parent_id": 6, "child_ids": [5]},
                {"id": 8, "data": "Settings", "child_ids": []},
            ],
            "pagination": {"current_page": 3, **pagination},
        },
    ]


@pytest.fixture
def expected_report() -> dict:
    """Report expected for menu_pages."""
    return {
        "valid_menus": [
            {"root_id": 1, "children": [2, 4]},
            {"root_id": 1, "children": [3]},
            {"root_id": 8, "children": []},
        ],
        "invalid_menus": [
            {"root_id": 5, "children": [6, 7, 5]},
        ],
    }


@pytest.fixture
def menu_file(tmp_path: Path, menu_pages: list[dict]) -> Path:
    """Local JSON file holding all pages."""
    path = tmp_path / "menus.json"
    path.write_text(json.dumps(menu_pages))
    return path


@pytest.fixture
def requested_pages() -> list[int]:
    """Page numbers requested through the mock transport, in order."""
    return []


@pytest.fixture
def menu_transport(menu_pages: list[dict], requested_pages: list[int]) -> httpx.MockTransport:
    """
    httpx transport serving menu_pages by their 'page' query parameter.

    Unknown pages answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        query = parse_qs(urlsplit(str(request.url)).query)
        page = int(query.get("page", ["1"])[0])
        requested_pages.append(page)
        if 1 <= page <= len(menu_pages):
            return httpx.Response(200, json=menu_pages[page - 1])
        return httpx.Response(404, json={"detail": "Not found"})

    return httpx.MockTransport(handler)
