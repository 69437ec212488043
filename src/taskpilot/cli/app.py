"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from taskpilot import (
    ConfigError,
    ConversionError,
    IdentityError,
    ManifestLoadError,
    TaskAlreadyExistsError,
    TaskValidationError,
    TransportError,
)


def main(argv: list[str] | None = None) -> int:
    import taskpilot.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "sync":
            cli.asyncio.run(cli._run_sync(args))
        elif args.command == "list":
            cli.asyncio.run(cli._run_list(args))
        return 0
    except (ConfigError, ManifestLoadError, TaskValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except TaskAlreadyExistsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except (TransportError, ConversionError, IdentityError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
