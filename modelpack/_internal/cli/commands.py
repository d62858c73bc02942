import typing as t
from pathlib import Path

import click
from tabulate import tabulate

from modelpack._internal.configs import Config, load_config
from modelpack._internal.constants import DEFAULT_CONFIG_FILE_NAME
from modelpack._internal.containerize import (
    DockerfileGenerator,
    build_copy_instructions,
    list_workspace_entries,
    plan_layers,
)
from modelpack._internal.logging import log_info, log_warning
from modelpack._internal.utils.console import print_success

from .options import common_options, layer_options


@click.command()
@click.argument(
    "dir",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
)
@click.option(
    "--config-file",
    "-f",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to the config file (default: <DIR>/{DEFAULT_CONFIG_FILE_NAME})",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the Dockerfile to this path instead of stdout",
)
@click.option(
    "--group-files/--no-group-files",
    default=True,
    show_default=True,
    help="Copy files in separate layers grouped by size, or all at once",
)
@click.option(
    "--keep-staged-files",
    is_flag=True,
    default=False,
    help=(
        "Keep generated files referenced by the Dockerfile (e.g. requirements.txt). "
        "Required to run 'docker build' with the generated Dockerfile"
    ),
)
@layer_options
@common_options
def dockerfile(
    dir: Path,
    config_file: t.Optional[Path],
    output: t.Optional[Path],
    group_files: bool,
    keep_staged_files: bool,
    num_groups: int,
    threshold: int,
    exclude_files: t.Tuple[str, ...],
):
    """
    Generate a Dockerfile for a model

    DIR: Build root directory
    (default: '.')
    """
    config = _load_config(dir, config_file)
    generator = DockerfileGenerator(
        config,
        build_dir=dir,
        group_files=group_files,
        num_groups=num_groups,
        threshold=threshold,
        exclude_files=exclude_files,
    )
    try:
        content = generator.generate()
        if output:
            output.write_text(content + "\n")
            print_success(f"Wrote Dockerfile to '{output}'")
        else:
            click.echo(content)
    finally:
        if keep_staged_files:
            if generator.staged_files_dir:
                log_info(f"Staged files are kept in '{generator.staged_files_dir}'")
        else:
            generator.cleanup()


@click.command()
@click.argument(
    "dir",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
)
@layer_options
@common_options
def layers(
    dir: Path,
    num_groups: int,
    threshold: int,
    exclude_files: t.Tuple[str, ...],
):
    """
    Show how files in a build directory are split into image layers

    DIR: Build root directory
    (default: '.')
    """
    entries = list_workspace_entries(dir, exclude_files=exclude_files)
    plan = plan_layers(num_groups, threshold, entries)
    if plan.num_groups == 0:
        log_warning(f"No files to copy in '{dir}'")
        return

    table = []
    for i, inst in enumerate(build_copy_instructions(plan)):
        table.append([i, inst.dest.as_posix(), "\n".join(inst.sources)])
    click.echo(tabulate(table, headers=["Layer", "Destination", "Sources"]))


def _load_config(build_dir: Path, config_file: t.Optional[Path]) -> Config:
    if config_file is not None:
        return load_config(config_file)

    default_path = build_dir / DEFAULT_CONFIG_FILE_NAME
    if default_path.exists():
        return load_config(default_path)

    log_warning(f"'{DEFAULT_CONFIG_FILE_NAME}' not found in '{build_dir}'. Using defaults.")
    return Config()
