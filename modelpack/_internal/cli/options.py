import functools
import sys

import click

from modelpack._internal.constants import FILE_SIZE_THRESHOLD, MAX_NUM_FILE_GROUPS
from modelpack._internal.logging import init_logger


def common_options(f):
    options = [
        click.option(
            "--debug",
            is_flag=True,
            default=False,
            expose_value=False,
            is_eager=True,
            help="Show logs for debugging.",
            callback=_debug_flag_callback,
        ),
    ]
    return functools.reduce(lambda x, opt: opt(x), options, f)


def layer_options(f):
    options = [
        click.option(
            "--num-groups",
            "-g",
            type=click.IntRange(min=1),
            default=MAX_NUM_FILE_GROUPS,
            show_default=True,
            help="Number of layers small files are spread over",
        ),
        click.option(
            "--threshold",
            "-t",
            type=click.IntRange(min=0),
            default=FILE_SIZE_THRESHOLD,
            show_default=True,
            help="Size in bytes above which a file or directory gets its own layer",
        ),
        click.option(
            "--exclude",
            "-e",
            "exclude_files",
            multiple=True,
            help="Pattern (gitignore syntax) of top-level entries not to copy",
        ),
    ]
    # Reversed so that options are listed in the order above
    return functools.reduce(lambda x, opt: opt(x), reversed(options), f)


def _debug_flag_callback(ctx, param, debug: bool):
    if debug:
        init_logger("DEBUG")
        sys.excepthook = sys.__excepthook__
