"""JSON exporter for package sets (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from deps.model import PackageSet


def to_json(
    packages: PackageSet,
    root: Path,
    include_sources: bool = False,
    indent: int = 2,
) -> str:
    """
    Convert a package set to JSON format.

    Args:
        packages: The packages to export.
        root: Project root for relative source paths.
        include_sources: If True, list the file each package was first
                        found in.
        indent: JSON indentation level.

    Returns:
        JSON string of the form {"packages": [...]}.
    """
    entries: List[Any] = []
    for path in packages:
        if include_sources:
            entries.append({
                "import_path": path,
                "source_file": _get_path_str(packages.first_source(path), root),
            })
        else:
            entries.append(path)

    data: Dict[str, Any] = {"packages": entries}
    return json.dumps(data, indent=indent)


def _get_path_str(path: Optional[Path], root: Path) -> Optional[str]:
    """Get the string representation of a path."""
    if path is None:
        return None
    try:
        rel_path = path.resolve().relative_to(root.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        return str(path).replace("\\", "/")
