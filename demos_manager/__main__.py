"""
Main entry point for the demos-manager application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from demos_manager.cli.app import app
from demos_manager.cli.formatters import format_error_with_suggestions
from demos_manager.exceptions import CacheClearError, DemosManagerError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("demos_manager")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(0)
    except CacheClearError as e:
        console.print(f"\n{format_error_with_suggestions(e, {'stage': 'cache clear'})}")
        console.print(
            "[yellow]Close any program holding the cache open and run the command again. "
            "A clear required at startup is retried on the next [cyan]start[/cyan].[/yellow]"
        )
        sys.exit(1)
    except DemosManagerError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
