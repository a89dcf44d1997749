# Command-line entry point: factory-secrets
#
# Small admin tool over AutoSecretStore:
#   factory-secrets status
#   factory-secrets get NAME
#   factory-secrets set NAME [--value VALUE]   (prompts when --value omitted)
#   factory-secrets delete NAME
#
# Exit codes: 0 ok, 1 secret not found, 2 any other error.

import argparse
import getpass
import sys

from . import __version__
from .config import VALID_TIERS, load_config
from .errors import SecretNotFound, SecretStoreError
from .logging_config import configure_logging
from .store import AutoSecretStore

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factory-secrets",
        description="Manage Factory secrets (OS keyring or encrypted files)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Read settings from this .env file if it exists (default: .env)",
    )
    parser.add_argument(
        "--tier",
        choices=VALID_TIERS,
        help="Override FACTORY_SECRETS_TIER",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"factory-secrets v{__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show which storage tier is active")

    get_cmd = sub.add_parser("get", help="Print a secret")
    get_cmd.add_argument("name")

    set_cmd = sub.add_parser("set", help="Store a secret")
    set_cmd.add_argument("name")
    set_cmd.add_argument("--value", help="Secret value (prompted if omitted)")

    del_cmd = sub.add_parser("delete", help="Remove a secret")
    del_cmd.add_argument("name")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        configure_logging(args.log_level)
        config = load_config(env_file=args.env_file)
        if args.tier:
            config.tier = args.tier
        store = AutoSecretStore(config)

        if args.command == "status":
            print(f"Secret storage: {store.describe()}")
            if store.using_fallback:
                print("OS keyring unavailable; using encrypted file fallback")
        elif args.command == "get":
            print(store.get(args.name))
        elif args.command == "set":
            value = args.value
            if value is None:
                value = getpass.getpass(f"Value for {args.name}: ")
            store.set(args.name, value)
            print(f"Stored {args.name}")
        elif args.command == "delete":
            store.delete(args.name)
            print(f"Deleted {args.name}")
    except SecretNotFound as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (SecretStoreError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
