"""Error conversion shared by CLI commands."""

import logging
from contextlib import contextmanager

import click

from optcalc.sdk import ConfigError

logger = logging.getLogger(__name__)


@contextmanager
def user_errors(action: str):
    """Turn errors raised inside a command into a single ClickException.

    Config problems keep their own message; anything else is reported as
    an unexpected error, with the traceback logged at DEBUG (--verbose).
    Click's own exceptions pass through untouched.
    """
    try:
        yield
    except (click.ClickException, click.exceptions.Abort, click.exceptions.Exit):
        raise
    except ConfigError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        logger.debug(f"{action} failed", exc_info=True)
        raise click.ClickException(f"Unexpected error: {e}")
