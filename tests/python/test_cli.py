import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from modelpack import exceptions
from modelpack._internal.cli.main import cli
from modelpack._internal.logging import init_logger


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_log_level():
    init_logger("INFO")
    yield
    init_logger("INFO")


def test_dockerfile_command(runner: CliRunner, make_workspace, build_dir: Path):
    make_workspace({"predict.py": 10, "weights.bin": 1000})
    (build_dir / "modelpack.yaml").write_text(
        'build:\n  python_version: "3.9"\n  python_packages:\n    - requests\n'
    )
    result = runner.invoke(cli, ["dockerfile", str(build_dir), "--threshold", "100"])

    assert result.exit_code == 0, result.output
    assert "FROM python:3.9" in result.output
    assert "COPY weights.bin /src" in result.output
    assert "COPY modelpack.yaml predict.py /src" in result.output
    assert list((build_dir / ".modelpack" / "tmp").glob("build*")) == []


def test_dockerfile_command_without_grouping(runner: CliRunner, make_workspace, build_dir: Path):
    make_workspace({"predict.py": 10})
    result = runner.invoke(cli, ["dockerfile", str(build_dir), "--no-group-files"])
    assert result.exit_code == 0, result.output
    assert "COPY . /src" in result.output


def test_dockerfile_command_writes_output(
    runner: CliRunner, make_workspace, build_dir: Path, tmp_path: Path
):
    make_workspace({"predict.py": 10})
    config_path = tmp_path / "other.yaml"
    config_path.write_text("build:\n  gpu: true\n  python_packages:\n    - numpy\n")
    output = tmp_path / "Dockerfile"

    result = runner.invoke(
        cli,
        [
            "dockerfile",
            str(build_dir),
            "-f",
            str(config_path),
            "-o",
            str(output),
            "--keep-staged-files",
        ],
    )

    assert result.exit_code == 0, result.output
    content = output.read_text()
    assert content.startswith("# syntax = docker/dockerfile:1.2\nFROM nvidia/cuda:")
    assert content.endswith("COPY predict.py /src\n")
    staged = list((build_dir / ".modelpack" / "tmp").glob("build*/requirements.txt"))
    assert len(staged) == 1
    assert staged[0].read_text() == "numpy\n"


def test_dockerfile_command_with_invalid_run(runner: CliRunner, build_dir: Path):
    (build_dir / "modelpack.yaml").write_text('build:\n  run:\n    - "echo a\\necho b"\n')
    result = runner.invoke(cli, ["dockerfile", str(build_dir)])
    assert result.exit_code != 0
    assert isinstance(result.exception, exceptions.BuildConfigError)


def test_dockerfile_command_rejects_zero_groups(runner: CliRunner, build_dir: Path):
    result = runner.invoke(cli, ["dockerfile", str(build_dir), "--num-groups", "0"])
    assert result.exit_code == 2


def test_layers_command(runner: CliRunner, make_workspace, build_dir: Path):
    make_workspace({"a.py": 1, "b.py": 1, "c.py": 1, "weights.bin": 1000, "src/m.py": 1})
    result = runner.invoke(
        cli, ["layers", str(build_dir), "-t", "100", "-g", "2", "--exclude", "c.py"]
    )

    assert result.exit_code == 0, result.output
    assert "weights.bin" in result.output
    assert "/src/src" in result.output
    assert "c.py" not in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["layers", "{dir}", "--debug"],
        ["--debug", "layers", "{dir}"],
        ["--debug", "dockerfile", "{dir}"],
    ],
)
def test_debug_flag_enables_debug_logs(runner: CliRunner, make_workspace, build_dir: Path, args):
    make_workspace({"a.py": 1})
    result = runner.invoke(cli, [arg.format(dir=build_dir) for arg in args])

    assert result.exit_code == 0, result.output
    assert "a.py" in result.output
    assert logging.getLogger("modelpack").level == logging.DEBUG


def test_log_level_is_info_without_debug_flag(runner: CliRunner, make_workspace, build_dir: Path):
    make_workspace({"a.py": 1})
    result = runner.invoke(cli, ["layers", str(build_dir)])

    assert result.exit_code == 0, result.output
    assert logging.getLogger("modelpack").level == logging.INFO
