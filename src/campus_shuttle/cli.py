"""Admin CLI for inspecting the campus shuttle configuration."""

import json
import sys
from typing import Any

from pydantic import ValidationError

from campus_shuttle.adapters.config import (
    AppConfig,
    StaticCampusLocationProvider,
    UserRosterLoader,
)
from campus_shuttle.adapters.memory import InMemoryUserDirectory


def describe_config(config: AppConfig) -> dict[str, Any]:
    """Summarize the effective configuration. Bearer tokens are never included."""
    campus = StaticCampusLocationProvider.from_config(config).get_campus_location()
    users = InMemoryUserDirectory(UserRosterLoader.load(config)).list_users()
    return {
        "campus": {
            "name": campus.name,
            "address": campus.address,
            "latitude": campus.latitude,
            "longitude": campus.longitude,
        },
        "server": {"host": config.host, "port": config.port},
        "rateLimitPerMinute": config.rate_limit_per_minute,
        "users": [{"id": user.id, "role": user.role.value} for user in users],
    }


def check_config(format_json: bool = False) -> int:
    """Validate configuration and print a summary. Returns the process exit code."""
    try:
        summary = describe_config(AppConfig())
    except (ValidationError, ValueError, FileNotFoundError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    if format_json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0

    campus = summary["campus"]
    print(f"Campus: {campus['name']} ({campus['latitude']}, {campus['longitude']})")
    if campus["address"]:
        print(f"Address: {campus['address']}")
    print(f"Server: {summary['server']['host']}:{summary['server']['port']}")
    print(f"Write rate limit: {summary['rateLimitPerMinute']}/min per caller")
    print(f"\nUsers ({len(summary['users'])}):")
    for user in summary["users"]:
        print(f"  {user['id']} ({user['role']})")
    if not any(user["role"] == "admin" for user in summary["users"]):
        print("\nWarning: no admin users configured.", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Campus Shuttle Admin Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate config.toml and the CAMPUS_* environment
  campus-shuttle-admin check-config

  # Same, as JSON
  campus-shuttle-admin check-config --json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    check_parser = subparsers.add_parser(
        "check-config", help="Validate configuration and list the user roster"
    )
    check_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "check-config":
        return check_config(format_json=args.json)
    return 1


def cli_main() -> None:
    """Synchronous entry point for the admin command."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
