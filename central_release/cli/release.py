"""Command-line entry point for the Central Portal release workflow."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from central_release.config import load_config, parse_overrides
from central_release.errors import CentralReleaseError
from central_release.pipeline import ReleasePipeline
from central_release.publish.controller import DeploymentController
from central_release.publish.uploader import BundleUploader
from central_release.schemas.config import CentralConfig
from central_release.secrets import CredentialResolver

DEFAULT_CONFIG_NAMES = ("gradle.properties", "central-release.yaml", "central-release.yml")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handlers = {
        "prepare": _handle_prepare,
        "bundle": _handle_bundle,
        "upload": _handle_upload,
        "publish": _handle_publish,
        "status": _handle_status,
        "release": _handle_release,
        "drop": _handle_drop,
        "secrets": _handle_secrets,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.error(f"Unknown command '{args.command}'")
        return 1
    try:
        return handler(args)
    except CentralReleaseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Properties or YAML config file (default: gradle.properties if present).")
    common.add_argument("--workspace-root")
    common.add_argument("--env-file", help="Extra .env file consulted for credentials.")
    common.add_argument(
        "-P",
        "--property",
        action="append",
        dest="properties",
        metavar="KEY=VALUE",
        help="Override a config value, e.g. -P mavenCentral.version=1.2.0 (repeatable).",
    )
    common.add_argument("--verbose", action="store_true")

    parser = argparse.ArgumentParser(
        prog="central-release",
        description="Package, upload and release artifacts through the Maven Central Portal.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    prepare = subparsers.add_parser("prepare", parents=[common], help="Stage artifacts and checksums.")
    bundle = subparsers.add_parser("bundle", parents=[common], help="Stage artifacts and build the bundle zip.")
    publish = subparsers.add_parser(
        "publish",
        parents=[common],
        help="Run the whole pipeline: local publish, prepare, bundle, upload.",
    )
    for sub in (prepare, bundle, publish):
        sub.add_argument(
            "--skip-local-publish",
            action="store_true",
            help="Do not run the configured local publish command first.",
        )

    subparsers.add_parser("upload", parents=[common], help="Upload the existing bundle zip.")

    for name, help_text in (
        ("status", "Show the status of a deployment."),
        ("release", "Publish a validated deployment."),
        ("drop", "Drop a deployment."),
    ):
        sub = subparsers.add_parser(name, parents=[common], help=help_text)
        sub.add_argument("--deployment-id", help="Deployment id (default: the id saved by the last upload).")

    subparsers.add_parser("secrets", parents=[common], help="Report where publisher credentials resolve from.")
    return parser


def _handle_prepare(args: argparse.Namespace) -> int:
    config = _load(args)
    result = _pipeline(config, args).prepare()
    _print_json(result.to_dict())
    return 0


def _handle_bundle(args: argparse.Namespace) -> int:
    config = _load(args)
    result = _pipeline(config, args).bundle()
    _print_json(result.to_dict())
    return 0


def _handle_publish(args: argparse.Namespace) -> int:
    config = _load(args)
    result = _pipeline(config, args).run()
    _print_json(result.to_dict())
    return 0


def _handle_upload(args: argparse.Namespace) -> int:
    config = _load(args)
    result = BundleUploader(config).upload()
    _print_json(result.to_dict())
    return 0


def _handle_status(args: argparse.Namespace) -> int:
    config = _load(args)
    report = DeploymentController(config).status(args.deployment_id)
    print(f"Deployment status ({report.deployment_id}):")
    print(report.raw)
    if report.formatted:
        print()
        print("Formatted status:")
        print(report.formatted)
    return 0


def _handle_release(args: argparse.Namespace) -> int:
    config = _load(args)
    result = DeploymentController(config).release(args.deployment_id)
    _print_json(result.to_dict())
    return 0


def _handle_drop(args: argparse.Namespace) -> int:
    config = _load(args)
    result = DeploymentController(config).drop(args.deployment_id)
    _print_json(result.to_dict())
    return 0


def _handle_secrets(args: argparse.Namespace) -> int:
    resolver = _credentials(args, _resolve_workspace(args.workspace_root))
    payload = {"secrets": resolver.describe_all()}
    _print_json(payload)
    return 0


def _load(args: argparse.Namespace) -> CentralConfig:
    workspace = _resolve_workspace(args.workspace_root)
    config_path = _resolve_path(args.config, workspace) if args.config else _default_config(workspace)
    return load_config(
        config_path,
        workspace_root=workspace,
        overrides=parse_overrides(args.properties),
        credentials=_credentials(args, workspace),
    )


def _credentials(args: argparse.Namespace, workspace: Path) -> CredentialResolver:
    env_file = _resolve_path(args.env_file, workspace) if args.env_file else None
    return CredentialResolver(env_file)


def _pipeline(config: CentralConfig, args: argparse.Namespace) -> ReleasePipeline:
    return ReleasePipeline(
        config,
        workspace_root=_resolve_workspace(args.workspace_root),
        skip_local_publish=args.skip_local_publish,
    )


def _default_config(workspace: Path) -> Optional[Path]:
    for name in DEFAULT_CONFIG_NAMES:
        candidate = workspace / name
        if candidate.exists():
            return candidate
    return None


def _resolve_workspace(value: Optional[str]) -> Path:
    return Path(value).resolve() if value else Path.cwd()


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))
