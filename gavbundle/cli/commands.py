# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the gavbundle CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. Failures are reported as a single structured ERROR record naming the
offending project, file or field; nothing is printed directly.
"""

import argparse
import logging
import os
from pathlib import Path

from gavbundle.artifacts.models import BundleResult
from gavbundle.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from gavbundle.config.exceptions import ConfigError
from gavbundle.config.loader import load_config
from gavbundle.config.schema import GavBundleConfig
from gavbundle.logging.logger import configure_logging, get_logger
from gavbundle.release.exceptions import (
    BundleError,
    DescriptorError,
    MissingArtifactError,
)
from gavbundle.runtime.bootstrap import bootstrap


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
    require_config: bool = False,
) -> tuple[int, GavBundleConfig | None, logging.Logger]:
    """
    The shared setup every command needs: load config, run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    logger = get_logger(f"gavbundle.cli.{command_name}")

    if args.config is None:
        configure_logging(args.log_level or "INFO")
        if require_config:
            logger.error("A --config file is required", extra={"command": command_name})
            return USER_ERROR, None, logger
        logger.debug("No config provided, running with defaults", extra={"command": command_name})
        return SUCCESS, None, logger

    try:
        config = load_config(Path(args.config))
    except ConfigError as err:
        configure_logging(args.log_level or "INFO")
        logger.error(
            "Configuration error",
            extra={"command": command_name, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    bootstrap(config.global_config, log_level_override=args.log_level)
    return SUCCESS, config, logger


def _failure_exit_code(err: Exception, logger: logging.Logger, command_name: str) -> int:
    """Map a pipeline exception onto an exit code and log it once."""
    if isinstance(err, ConfigError):
        logger.error("Configuration error", extra={"command": command_name, "error": str(err)})
        return CONFIG_ERROR
    if isinstance(err, (DescriptorError, MissingArtifactError)):
        logger.error("Validation failed", extra={"command": command_name, "error": str(err)})
        return VALIDATION_ERROR
    if isinstance(err, BundleError):
        logger.error(f"{command_name.capitalize()} failed", extra={"command": command_name, "error": str(err)})
        return RUNTIME_ERROR
    logger.error(
        "Runtime error",
        extra={"command": command_name, "error": str(err)},
        exc_info=True,
    )
    return RUNTIME_ERROR


def _build(args: argparse.Namespace, config: GavBundleConfig) -> BundleResult:
    from gavbundle.release.packaging.packager import create_bundle

    output = Path(args.output) if getattr(args, "output", None) else None
    return create_bundle(
        config,
        base_dir=Path(args.config).resolve().parent,
        output=output,
    )


def _log_bundle_result(logger: logging.Logger, result: BundleResult) -> None:
    for project in result.projects:
        logger.info(
            "Bundled project",
            extra={
                "coordinates": str(project.coordinates),
                "entries": project.entry_count,
                "warnings": len(project.warnings),
            },
        )
    logger.info(
        "Bundle complete",
        extra={
            "bundle": str(result.bundle_path),
            "entries": result.entry_count,
            "sha256": result.sha256,
        },
    )


def handle_bundle(args: argparse.Namespace) -> int:
    """Build the combined bundle described by the config."""
    exit_code, config, logger = _load_and_bootstrap(args, "bundle", require_config=True)
    if exit_code != SUCCESS:
        return exit_code
    assert config is not None

    if config.bundle is None:
        logger.error("Config has no 'bundle' section", extra={"config": args.config})
        return CONFIG_ERROR

    if args.dry_run:
        logger.info(
            "Dry run — would bundle projects",
            extra={"projects": list(config.bundle.projects), "output": args.output or config.bundle.output},
        )
        return SUCCESS

    try:
        result = _build(args, config)
    except Exception as err:
        return _failure_exit_code(err, logger, "bundle")

    _log_bundle_result(logger, result)
    return SUCCESS


def handle_publish(args: argparse.Namespace) -> int:
    """Build the bundle, upload it as one deployment and wait for its state."""
    exit_code, config, logger = _load_and_bootstrap(args, "publish", require_config=True)
    if exit_code != SUCCESS:
        return exit_code
    assert config is not None

    if config.bundle is None or config.publish is None:
        logger.error(
            "Config needs both 'bundle' and 'publish' sections",
            extra={"config": args.config},
        )
        return CONFIG_ERROR

    publish = config.publish
    username = os.environ.get(publish.username_env)
    password = os.environ.get(publish.password_env)
    if not username or not password:
        logger.error(
            "Publishing credentials not set",
            extra={"username_env": publish.username_env, "password_env": publish.password_env},
        )
        return CONFIG_ERROR

    if args.dry_run:
        logger.info(
            "Dry run — would bundle and publish",
            extra={"projects": list(config.bundle.projects), "base_url": publish.base_url},
        )
        return SUCCESS

    try:
        result = _build(args, config)
    except Exception as err:
        return _failure_exit_code(err, logger, "publish")

    _log_bundle_result(logger, result)

    from gavbundle.publishing.client import CentralPortalClient

    deployment_name = publish.deployment_name or str(result.projects[0].coordinates)
    client = CentralPortalClient(
        base_url=publish.base_url,
        username=username,
        password=password,
        token_auth=publish.token_auth,
    )
    try:
        deployment_id = client.upload(result.bundle_path, deployment_name, publish.auto_publish)
        logger.info(
            "Deployed bundle",
            extra={"deployment_id": deployment_id, "projects": len(result.projects)},
        )
        client.wait_for_state(
            deployment_id,
            publish.wait_until,
            max_seconds=publish.wait_max_seconds,
            interval_seconds=publish.polling_interval_seconds,
        )
    except Exception as err:
        return _failure_exit_code(err, logger, "publish")
    finally:
        client.close()

    logger.info("Publish complete", extra={"deployment_id": deployment_id, "state": publish.wait_until})
    return SUCCESS


def handle_verify(args: argparse.Namespace) -> int:
    """Check the checksum entries of an existing bundle."""
    exit_code, config, logger = _load_and_bootstrap(args, "verify")
    if exit_code != SUCCESS:
        return exit_code

    from gavbundle.release.checksums.integrity import verify_bundle
    from gavbundle.utils.hashing import DEFAULT_ALGORITHMS

    if args.bundle is not None:
        bundle_path = Path(args.bundle)
    elif config is not None and config.bundle is not None:
        bundle_path = Path(args.config).resolve().parent / config.bundle.output
    else:
        logger.error("No bundle given; pass --bundle or a config with a 'bundle' section")
        return USER_ERROR

    algorithms = DEFAULT_ALGORITHMS
    if config is not None and config.bundle is not None:
        algorithms = tuple(config.bundle.checksum_algorithms)

    try:
        result = verify_bundle(bundle_path, algorithms=algorithms)
    except Exception as err:
        return _failure_exit_code(err, logger, "verify")

    if not result.is_valid:
        logger.error(
            "Bundle verification failed",
            extra={
                "bundle": str(bundle_path),
                "mismatches": result.mismatches,
                "missing": result.missing_files,
                "errors": result.errors,
            },
        )
        return VALIDATION_ERROR

    logger.info(
        "Bundle verified",
        extra={"bundle": str(bundle_path), "checked": result.checked_count},
    )
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Display version and environment information."""
    configure_logging(args.log_level or "INFO")
    logger = get_logger("gavbundle.cli.info")

    from gavbundle import __version__
    from gavbundle.runtime.environment import get_system_info

    system_info = get_system_info()

    logger.info(
        "System information",
        extra={
            "gavbundle_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "config": args.config,
        },
    )
    return SUCCESS
