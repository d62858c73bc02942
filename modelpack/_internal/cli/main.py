import sys

import click

from modelpack._internal.logging import init_logger, log_exception
from modelpack._versions import pkg_version

from .commands import dockerfile, layers
from .options import common_options


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    str(pkg_version),
    prog_name="modelpack",
)
@common_options
def cli():
    """
    Generate Dockerfiles for model services.
    """
    pass


cli.add_command(dockerfile)
cli.add_command(layers)


def main():
    sys.excepthook = _excepthook
    init_logger("INFO")
    cli()


def _excepthook(exctype, value, tb):
    log_exception(exctype=exctype, exc=value, tb=tb, show_modelpack_exc_tb=False)
