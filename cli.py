#!/usr/bin/env python3
"""
depscan CLI

A tool for scanning a Go project for externally hosted imports and listing
them, deduplicated, for a dependency manifest.
"""

import argparse
import logging
import sys
from pathlib import Path

from scanner.builder import build_from_config
from scanner.config import load_config
from scanner.errors import ScanError
from exporters import to_text, to_json, to_manifest

logger = logging.getLogger("depscan")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="depscan",
        description="List the externally hosted imports of a Go project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  depscan .                            # Scan current directory, one path per line
  depscan ~/go/src/myapp -f json       # JSON output
  depscan . -f manifest -o deps.yaml   # YAML manifest written to file
  depscan . --exclude-dir testdata     # Skip testdata/ as well as vendor/
  depscan . --registry github.com gopkg.in  # Only accept these hosts
  depscan . --debug                    # Log every file and import found
        """,
    )

    # Positional arguments
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root directory (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "manifest"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--with-sources",
        action="store_true",
        help="Include the file each package was first found in (json only)",
    )

    # Scanning options
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Configuration file (default: depscan.yaml in the project root, if present)",
    )

    parser.add_argument(
        "--ext",
        type=str,
        default=None,
        help="Source file extension to scan (default: .go)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to exclude in addition to vendor",
    )

    parser.add_argument(
        "--registry",
        nargs="+",
        default=None,
        help="Only treat imports hosted on these domains as external",
    )

    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        default=None,
        help="Skip files that cannot be read instead of aborting the scan",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Activate debug mode. Will print many more log lines",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(
            parsed.root,
            config_file=parsed.config,
            debug=parsed.debug,
            extension=parsed.ext,
            exclude_dirs=parsed.exclude_dir,
            registries=parsed.registry,
            skip_unreadable=parsed.skip_unreadable,
        )
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.debug:
        logger.debug("Debug mode activated!")

    try:
        packages = build_from_config(config)
    except ScanError as e:
        print(f"Error scanning project: {e}", file=sys.stderr)
        return 1

    # Generate output
    if parsed.format == "json":
        output = to_json(
            packages=packages,
            root=config.project_path,
            include_sources=parsed.with_sources,
        )
    elif parsed.format == "manifest":
        output = to_manifest(packages)
    else:  # text (default)
        output = to_text(packages)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n" if output else "", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    elif output:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
