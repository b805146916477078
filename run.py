#!/usr/bin/env python3
"""
Compass Provider — Operator entry point.

Drives the compass_component and compass_component_link lifecycle operations
against a live Compass site from the command line. Configuration is read
from a .env file / environment (COMPASS_EMAIL, COMPASS_API_TOKEN,
COMPASS_BASE_URL, COMPASS_TENANT, COMPASS_AUTH_SCHEME); results print as JSON.

Usage:
    python run.py tenant acme
    python run.py component create --name svc-a --type SERVICE
    python run.py component read <component-id>
    python run.py component delete <component-id>
    python run.py link create --component-id <id> --name Repo --type REPOSITORY --url https://...
    python run.py link read <component-id>:<link-id>
    python run.py link delete <component-id>:<link-id>
    python run.py --debug ...      # Verbose output
    python run.py --version        # Show version
    python run.py --env /path ...  # Use alternate .env file
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from compass_provider import (
    CompassProviderError,
    ProviderConfig,
    ResourceData,
    configure_provider,
    parse_import_id,
)

# Read version from the repo-root VERSION file (e.g., "0.1.0").
VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compass Provider - Manage Atlassian Compass components and links"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--tenant", help="Override COMPASS_TENANT")
    parser.add_argument("--base-url", help="Override COMPASS_BASE_URL")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    commands = parser.add_subparsers(dest="command")

    tenant = commands.add_parser("tenant", help="Resolve a tenant name to its cloud id")
    tenant.add_argument("name", help="Tenant name or site hostname")

    component = commands.add_parser("component", help="compass_component operations")
    component_ops = component.add_subparsers(dest="operation", required=True)
    create = component_ops.add_parser("create", help="Create a component")
    create.add_argument("--name", required=True)
    create.add_argument("--type", required=True, help="SERVICE, LIBRARY, APPLICATION, ...")
    create.add_argument("--description", default="")
    create.add_argument("--owner-id", default="")
    create.add_argument("--cloud-id", default="")
    for op in ("read", "delete"):
        sub = component_ops.add_parser(op, help=f"{op.capitalize()} a component")
        sub.add_argument("id", help="Component id")

    link = commands.add_parser("link", help="compass_component_link operations")
    link_ops = link.add_subparsers(dest="operation", required=True)
    create = link_ops.add_parser("create", help="Create a component link")
    create.add_argument("--component-id", required=True)
    create.add_argument("--name", required=True)
    create.add_argument("--type", required=True, help="DOCUMENT, REPOSITORY, DASHBOARD, ...")
    create.add_argument("--url", required=True)
    create.add_argument("--object-id", default="")
    create.add_argument("--cloud-id", default="")
    for op in ("read", "delete"):
        sub = link_ops.add_parser(op, help=f"{op.capitalize()} a component link")
        sub.add_argument("id", help="component_id:link_id")

    return parser


def run_command(provider, args) -> dict:
    """Execute one parsed command and return the resulting state."""
    if args.command == "tenant":
        return {"tenant": args.name, "cloud_id": provider.client.resolve_cloud_id(args.name)}

    if args.command == "component":
        resource = provider.resource("compass_component")
        if args.operation == "create":
            data = ResourceData.from_config({
                "name": args.name,
                "type": args.type,
                "description": args.description,
                "owner_id": args.owner_id,
                "cloud_id": args.cloud_id,
            })
            return resource.create(data).to_state()
        if args.operation == "read":
            return resource.import_state(args.id).to_state()
        return resource.delete(ResourceData(id=args.id)).to_state()

    resource = provider.resource("compass_component_link")
    if args.operation == "create":
        data = ResourceData.from_config({
            "component_id": args.component_id,
            "name": args.name,
            "type": args.type,
            "url": args.url,
            "object_id": args.object_id,
            "cloud_id": args.cloud_id,
        })
        return resource.create(data).to_state()
    if args.operation == "read":
        return resource.import_state(args.id).to_state()
    component_id, link_id = parse_import_id(args.id)
    data = ResourceData(id=link_id, attributes={"component_id": component_id})
    return resource.delete(data).to_state()


def main(argv=None) -> int:
    """Parse CLI arguments and run one lifecycle operation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"compass-provider {VERSION}")
        return 0

    if not args.command:
        parser.print_help()
        return 1

    # Show the underlying HTTP traffic as well when debugging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    config = ProviderConfig.from_env(
        env_file=args.env,
        tenant=args.tenant,
        base_url=args.base_url,
        debug=True if args.debug else None,
    )

    errors = config.validate()
    if errors:
        print("\nConfiguration Errors:")
        for err in errors:
            print(f"  - {err}")
        return 1

    try:
        provider = configure_provider(config)
        result = run_command(provider, args)
    except CompassProviderError as e:
        print(f"\n  ERROR: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
