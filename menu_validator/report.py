"""
JSON report serialization.

Output format:

    {
        "valid_menus": [{"root_id": 1, "children": [2, 4, 6]}],
        "invalid_menus": [{"root_id": 2, "children": [4, 2]}]
    }
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from menu_validator.classification import ClassificationResult


def build_report(result: ClassificationResult) -> Dict[str, Any]:
    """Report document with both groups in discovery order."""
    return result.to_dict()


def to_json(result: ClassificationResult, indent: Optional[int] = None) -> str:
    """Serialize a classification result to JSON text."""
    return json.dumps(build_report(result), indent=indent)


def write_report(
    result: ClassificationResult,
    output_path: Union[str, Path],
    indent: Optional[int] = 2,
) -> Path:
    """
    Write the JSON report to a file.

    Writes to a temporary file first, then renames it over the target.

    Returns:
        Path of the written report
    """
    output_path = Path(output_path)
    temp_path = f"{output_path}.tmp"
    try:
        with open(temp_path, 'w', encoding='utf-8') as f:
            f.write(to_json(result, indent=indent))
            f.write("\n")
        os.replace(temp_path, output_path)
    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
    return output_path
