# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for gavbundle.

This is the single root command; every operation is a subcommand. The global
options (--config, --log-level, --dry-run) are inherited by every subcommand
through argparse's parent parser mechanism.

Usage:
    gavbundle <subcommand> [options]
    gavbundle bundle --config release.yaml
    gavbundle publish --config release.yaml
    gavbundle verify --bundle target/custom-publishing/custom-deployment-bundle.zip
    gavbundle info
"""

import argparse
import sys

from gavbundle.cli.commands import handle_bundle, handle_info, handle_publish, handle_verify
from gavbundle.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    A separate parent parser (with add_help=False) keeps help text from
    colliding between the parent and the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Report what would be done without writing or uploading anything.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """
    Register all subcommands with their handler functions.

    Each subcommand gets the global options from the parent parser and sets
    its handler via set_defaults(func=...).
    """
    commands = [
        ("bundle", "Build the combined deployment bundle.", handle_bundle),
        ("publish", "Build, upload and wait for the deployment.", handle_publish),
        ("verify", "Verify the checksum entries of a bundle.", handle_verify),
        ("info", "Display environment information.", handle_info),
    ]

    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler, output=None, bundle=None)

    for name in ("bundle", "publish"):
        subparsers.choices[name].add_argument(
            "--output",
            type=str,
            default=None,
            help="Write the bundle here instead of the configured output path.",
        )

    subparsers.choices["verify"].add_argument(
        "--bundle",
        type=str,
        default=None,
        help="Path of the bundle archive to verify.",
    )


def main() -> None:
    """
    Main CLI entrypoint; this is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="gavbundle",
        description="gavbundle — signed, checksummed release bundles for Maven-style artifacts.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
