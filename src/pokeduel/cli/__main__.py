"""Entry point for the `pokeduel` command and `python -m pokeduel.cli`."""

import sys

import click


def main(args: list[str] | None = None) -> int:
    """Main entry point for the pokeduel CLI."""
    if args is None:
        args = sys.argv[1:]

    if not args or args[0] in ["-h", "--help", "help"]:
        print_help()
        return 0

    command = args[0]

    if command == "version":
        print_version()
        return 0
    elif command == "serve":
        from pokeduel.adapters.web.cli import run_server

        return run_click(run_server, "pokeduel serve", args[1:])
    elif command == "duel":
        from pokeduel.cli.duel import duel

        return run_click(duel, "pokeduel duel", args[1:])
    else:
        print(f"Unknown command: {command}")
        print_help()
        return 1


def print_help() -> None:
    """Print CLI help message."""
    print(
        """pokeduel - Random creature battles backed by PokeAPI

Usage:
    pokeduel <command> [options]

Commands:
    version     Show version information
    serve       Run the web server
    duel        Run a single battle in the terminal
    help        Show this help message

Options:
    -h, --help  Show help message
"""
    )


def print_version() -> None:
    """Print version information."""
    from pokeduel import __version__

    print(f"pokeduel {__version__}")


def run_click(command: click.Command, prog_name: str, args: list[str]) -> int:
    """Run a click command without letting it exit the interpreter."""
    try:
        command.main(args=args, prog_name=prog_name, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        print("Aborted")
        return 1
    except SystemExit as e:
        return e.code or 0  # type: ignore


if __name__ == "__main__":
    sys.exit(main())
