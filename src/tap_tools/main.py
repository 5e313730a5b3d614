"""Main CLI entry point for tap-tools.

Provides the console-script entry point; all command handling lives in
``tap_tools.cli``.
"""

import sys

import uvloop

from tap_tools.cli import CLIRunner
from tap_tools.logger import flush_all_handlers, get_logger

logger = get_logger(__name__)


async def async_main() -> int:
    """Run the CLI asynchronously and return its exit status."""
    logger.debug("CLI started")
    runner = CLIRunner()
    exit_code = await runner.run()
    logger.debug("CLI finished with status %d", exit_code)
    return exit_code


def main() -> None:
    """Run the CLI application on a uvloop event loop."""
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        exit_code = 1
    except Exception:
        logger.exception("Unexpected error")
        exit_code = 1
    finally:
        flush_all_handlers()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
