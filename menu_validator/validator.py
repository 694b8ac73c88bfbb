"""
Validation runner.

Ties the pieces together: load menus (endpoint or local file), build the
graph, classify every path and time the run.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import httpx

from menu_validator.api_client import DEFAULT_TIMEOUT, MenuApiClient
from menu_validator.classification import ClassificationResult
from menu_validator.ingestion import (
    MenuCollection,
    fetch_all_menus,
    load_graph,
    load_menu_file,
)
from menu_validator.path_enumerator import enumerate_paths

logger = logging.getLogger(__name__)


# ============================================================================
# Logging Setup
# ============================================================================


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup logging for the validator.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("menu_validator")


# ============================================================================
# Runner
# ============================================================================


@dataclass
class ValidationRun:
    """Outcome of one validation run."""
    source: str
    collection: MenuCollection
    result: ClassificationResult
    duration_seconds: float


def validate_collection(
    collection: MenuCollection,
    per_branch_validity: bool = False,
) -> ClassificationResult:
    """Classify the menus of an already loaded collection."""
    graph = load_graph(collection)
    return enumerate_paths(graph, per_branch_validity=per_branch_validity)


def run_validation(
    url: Optional[str] = None,
    input_path: Optional[Union[str, Path]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    per_branch_validity: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> ValidationRun:
    """
    Load menus from the endpoint or a local file and classify them.

    Exactly one of url and input_path must be given.

    Raises:
        ValueError: If neither or both sources are given
        ApiError: If fetching from the endpoint fails
        MenuParseError: If the local file is malformed
    """
    if (url is None) == (input_path is None):
        raise ValueError("Exactly one of url or input_path is required")

    start = time.monotonic()
    if input_path is not None:
        source = str(input_path)
        collection = load_menu_file(input_path)
    else:
        source = url
        with MenuApiClient(url, timeout=timeout, transport=transport) as client:
            collection = fetch_all_menus(client)

    result = validate_collection(collection, per_branch_validity=per_branch_validity)
    duration = time.monotonic() - start
    logger.info(f"Validated menus from {source} in {duration:.2f}s")

    return ValidationRun(
        source=source,
        collection=collection,
        result=result,
        duration_seconds=duration,
    )
