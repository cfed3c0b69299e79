"""YAML manifest exporter listing packages for the dependency manager."""

from typing import Any, Dict, List

import yaml

from deps.model import PackageSet


DEFAULT_VCS = "git"


def package_entry(import_path: str, vcs: str = DEFAULT_VCS) -> Dict[str, str]:
    """
    Describe one package the way the manifest expects it.

    The source path is derived from the import path only; nothing is
    fetched or checked.
    """
    return {
        "import_path": import_path,
        "source_path": f"https://{import_path}",
        "vcs": vcs,
    }


def to_manifest(packages: PackageSet, vcs: str = DEFAULT_VCS) -> str:
    """
    Convert a package set to a YAML manifest.

    Example output::

        packages:
        - import_path: github.com/pztrn/flagger
          source_path: https://github.com/pztrn/flagger
          vcs: git
    """
    entries: List[Dict[str, Any]] = [package_entry(path, vcs) for path in packages]
    dumped = yaml.safe_dump({"packages": entries}, default_flow_style=False, sort_keys=False)
    return dumped.rstrip("\n")
