"""
Menu Validator - cycle detection for paginated menu hierarchies.

This package fetches menu records from a paginated JSON endpoint, assembles
them into a parent/child graph and classifies every root-to-terminal path
as valid (acyclic) or invalid (cyclic).

Key modules:
- graph: MenuGraph adjacency model
- path_enumerator: depth-first path enumeration and cycle detection
- classification: ClassificationResult accumulator
- parser: decoding of page documents into MenuRecord objects
- api_client: HTTP client for the paginated menu endpoint
- ingestion: page aggregation and graph loading
- report / report_renderer: JSON and HTML output
- config: YAML/environment configuration
"""

import os
import re
import subprocess
from typing import Optional


def _run_git_command(args: list[str]) -> Optional[str]:
    """Run a Git command and return its output."""
    try:
        result = subprocess.run(
            ['git'] + args,
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
            cwd=os.path.dirname(os.path.abspath(__file__)),
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return None


def _get_version_from_git() -> Optional[str]:
    """
    Get version from Git tags.

    Version Format:
    - Tagged releases: "v1.2.3"
    - Development builds: "v1.2.3-dev.5+a1b2c3d"
    """
    describe = _run_git_command(['describe', '--tags', '--long'])
    if not describe:
        return None

    # "v1.2.3-0-ga1b2c3d" or "v1.2.3-5-ga1b2c3d"
    match = re.match(r'^(.+?)-(\d+)-g([a-f0-9]+)$', describe)
    if not match:
        return None

    tag, commits_since, commit_hash = match.groups()
    if int(commits_since) == 0:
        return tag
    return f"{tag}-dev.{commits_since}+{commit_hash}"


def _get_version() -> str:
    """
    Get version with priority: MENU_VALIDATOR_VERSION env var > Git tags > fallback.
    """
    env_version = os.environ.get('MENU_VALIDATOR_VERSION')
    if env_version:
        return env_version

    git_version = _get_version_from_git()
    if git_version:
        return git_version

    return 'v0.1.0'


__version__ = _get_version()
