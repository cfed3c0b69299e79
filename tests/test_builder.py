"""Tests for building package sets from project trees."""

import logging
import pytest
from pathlib import Path
import tempfile

from scanner.builder import build_from_config, build_package_set, scan_project
from scanner.classifier import registry_policy
from scanner.config import load_config
from scanner.errors import ConfigurationError, FileReadError


GROUPED = """package main

import (
    "fmt"
    "github.com/foo/bar"
    // "github.com/should/be/skipped"
    "github.com/baz/qux"
)

func main() {}
"""

BUILTIN_ONLY = """package util

import (
    "fmt"
    "net/http"
    "strings"
)
"""


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestBuildPackageSet:
    """Tests for build_package_set."""

    def test_grouped_block(self):
        """Test the grouped block example."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", GROUPED)

            packages = build_package_set(root)

            assert packages.result() == ["github.com/foo/bar", "github.com/baz/qux"]

    def test_single_import(self):
        """Test a single-line import outside any block."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", 'package main\n\nimport "github.com/solo/pkg"\n')

            packages = build_package_set(root)

            assert packages.result() == ["github.com/solo/pkg"]

    def test_builtin_only(self):
        """Test that a project with only builtin imports yields nothing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "util/util.go", BUILTIN_ONLY)
            _write(root, "main.go", 'package main\n\nimport "fmt"\n')

            assert build_package_set(root).result() == []

    def test_block_comment(self):
        """Test that an import inside a block comment is ignored."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", 'package main\n\n/* import "github.com/hidden/pkg" */\n')

            assert build_package_set(root).result() == []

    def test_dedup_across_files(self):
        """Test that duplicates across files appear once, first file wins."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _write(root, "a.go", 'import (\n\t"github.com/one/one"\n\t"github.com/two/two"\n)\n')
            _write(root, "b/b.go", 'import (\n\t"github.com/three/three"\n\t"github.com/one/one"\n)\n')
            _write(root, "c.go", 'import "github.com/two/two"\n')

            packages = build_package_set(root)

            assert packages.result() == [
                "github.com/one/one",
                "github.com/two/two",
                "github.com/three/three",
            ]
            assert packages.first_source("github.com/one/one") == root / "a.go"
            assert packages.first_source("github.com/three/three") == root / "b" / "b.go"

    def test_vendor_contributes_nothing(self):
        """Test that vendored files are not scanned."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", 'import "github.com/foo/bar"\n')
            _write(root, "vendor/github.com/foo/bar/bar.go", 'import "github.com/vendored/dep"\n')

            assert build_package_set(root).result() == ["github.com/foo/bar"]

    def test_policy(self):
        """Test using a registry allow-list policy."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", 'import (\n\t"github.com/foo/bar"\n\t"example.org/x/y"\n)\n')

            packages = build_package_set(root, policy=registry_policy(["github.com"]))

            assert packages.result() == ["github.com/foo/bar"]

    def test_idempotent(self):
        """Test that scanning twice gives the same ordered result."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "a.go", GROUPED)
            _write(root, "b.go", 'import "github.com/solo/pkg"\n')

            assert build_package_set(root) == build_package_set(root)

    def test_missing_root(self):
        """Test that a missing root fails before scanning."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigurationError):
                build_package_set(Path(tmpdir) / "missing")

    def test_unreadable_file_aborts(self):
        """Test that one unreadable file fails the whole scan."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "a.go", 'import "github.com/foo/bar"\n')
            (root / "b.go").write_bytes(b"\xff\xfe\x00")

            with pytest.raises(FileReadError):
                build_package_set(root)

    def test_unreadable_file_skipped(self, caplog):
        """Test the explicit skip policy for unreadable files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "a.go", 'import "github.com/foo/bar"\n')
            (root / "b.go").write_bytes(b"\xff\xfe\x00")
            _write(root, "c.go", 'import "github.com/baz/qux"\n')

            with caplog.at_level(logging.WARNING):
                packages = build_package_set(root, skip_unreadable=True)

            assert packages.result() == ["github.com/foo/bar", "github.com/baz/qux"]
            assert "Skipping unreadable file" in caplog.text

    def test_debug_does_not_change_result(self, caplog):
        """Test that debug only adds log output."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", GROUPED)

            quiet = build_package_set(root)
            with caplog.at_level(logging.DEBUG):
                loud = build_package_set(root, debug=True)

            assert quiet == loud
            assert "Got 1 files" in caplog.text
            assert "Found import: github.com/foo/bar" in caplog.text
            assert "Found 2 unique packages" in caplog.text

    def test_no_debug_output_by_default(self, caplog):
        """Test that nothing is logged without debug."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", GROUPED)

            with caplog.at_level(logging.DEBUG):
                build_package_set(root)

            assert caplog.text == ""


class TestScanProject:
    """Tests for scan_project."""

    def test_scan_project_returns_result(self):
        """Test that the top-level scan returns the package list."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _write(root, "main.go", GROUPED)
            _write(root, "third_party/lib.go", 'import "github.com/third/party"\n')

            config = load_config(root, exclude_dirs=["third_party"])

            assert scan_project(config) == ["github.com/foo/bar", "github.com/baz/qux"]

    def test_build_from_config(self):
        """Test that the configured registries and exclusions are applied."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            _write(root, "main.go", GROUPED)
            _write(root, "extra.go", 'import "example.org/x/y"\n')
            _write(root, "testdata/fixture.go", 'import "github.com/fixture/pkg"\n')

            config = load_config(root, exclude_dirs=["testdata"], registries=["github.com"])
            packages = build_from_config(config)

            assert packages.result() == ["github.com/foo/bar", "github.com/baz/qux"]
            assert packages.first_source("github.com/foo/bar") == root / "main.go"
