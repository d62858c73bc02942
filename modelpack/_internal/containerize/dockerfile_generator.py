import json
import typing as t
from pathlib import Path

import jinja2

from modelpack import exceptions
from modelpack._internal.configs import Config
from modelpack._internal.constants import (
    DEFAULT_CUDA_VERSION,
    DEFAULT_CUDNN_VERSION,
    FILE_SIZE_THRESHOLD,
    MAX_NUM_FILE_GROUPS,
)
from modelpack._internal.logging import log_debug, log_info

from .base_images import BaseImage, CUDAImage, PythonImage
from .copy_instructions import render_copy_instructions
from .layer_planner import LayerPlan, plan_layers
from .pkg_manager import RequirementsTxt
from .runtime_wheel import RuntimeWheel
from .staging import StagingDir
from .template_args import TemplateArgs
from .workspace import list_workspace_entries


class DockerfileGenerator:
    """
    Generate a Dockerfile for the model in ``build_dir``.

    Auxiliary files are written to a staging dir inside ``build_dir``, so the
    generator should be closed (or used as a context manager) once the image
    is built.
    """

    def __init__(
        self,
        config: Config,
        build_dir: Path,
        group_files: bool = True,
        num_groups: int = MAX_NUM_FILE_GROUPS,
        threshold: int = FILE_SIZE_THRESHOLD,
        runtime_wheel: t.Optional[RuntimeWheel] = None,
        exclude_files: t.Iterable[str] = (),
    ):
        self.config = config
        self.build_dir = Path(build_dir).resolve()
        self.group_files = group_files
        self.num_groups = num_groups
        self.threshold = threshold
        self.runtime_wheel = runtime_wheel
        self.exclude_files = list(exclude_files)
        self._staging: t.Optional[StagingDir] = None
        self._j2_env = jinja2.Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
            loader=jinja2.FileSystemLoader(Path(__file__).parent / "templates", followlinks=True),
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.cleanup()

    @property
    def staging(self) -> StagingDir:
        if self._staging is None:
            self._staging = StagingDir.create(self.build_dir)
        return self._staging

    @property
    def staged_files_dir(self) -> t.Optional[Path]:
        return self._staging.abs_path if self._staging else None

    def generate(self) -> str:
        base = self.generate_base()
        copy_workspace = self.copy_workspace()
        dockerfile = "\n".join(_filter_empty([base, copy_workspace]))
        log_debug(
            "Dockerfile:\n" + "\n".join(["  " + line for line in dockerfile.split("\n") if line]),
            pretty=False,
        )
        return dockerfile

    def generate_base(self) -> str:
        args = self.build_template_args()
        log_debug("Dockerfile template args:\n" + str(args), pretty=False)
        log_info(f"[bold]Use GPU: {args.device == 'gpu'}[/bold]")
        log_info(f"[bold]Base image: [green]{args.image.name}[/green][/bold]")
        log_info(f"[bold]Python version: [green]{args.python_version}[/green][/bold]")

        cmd = json.dumps(["python", "-m", args.server_module])
        return "\n".join(
            _filter_empty(
                [
                    f"# syntax = {args.dockerfile_syntax}",
                    f"FROM {args.image.name}",
                    self._render("preamble.j2"),
                    self._render("install_tini.j2", tini_version=args.tini_version),
                    self._render("install_python.j2", python_version=args.python_version)
                    if args.install_python
                    else "",
                    self._install_runtime_wheel(args),
                    self._render("apt_install.j2", system_packages=args.system_packages)
                    if args.system_packages
                    else "",
                    self._install_requirements(args),
                    "\n".join("RUN " + command for command in args.run_commands),
                    f"WORKDIR {args.workdir}",
                    f"EXPOSE {args.port}",
                    f"CMD {cmd}",
                ]
            )
        )

    def build_template_args(self) -> TemplateArgs:
        build_config = self.config.build

        image: BaseImage
        if build_config.gpu:
            image = CUDAImage(
                cuda_ver=build_config.cuda or DEFAULT_CUDA_VERSION,
                cudnn_ver=build_config.cudnn or DEFAULT_CUDNN_VERSION,
            )
        else:
            image = PythonImage(ver=build_config.python_version)

        requirements_txt = RequirementsTxt()
        for requirement_str in build_config.python_packages:
            requirements_txt.add_requirement_str(requirement_str)

        return TemplateArgs(
            image=image,
            device="gpu" if build_config.gpu else "cpu",
            system_packages=list(build_config.system_packages),
            run_commands=self._build_run_commands(),
            python_version=build_config.python_version,
            install_python=build_config.gpu,
            pip_index_url=build_config.pip_index_url,
            requirements_txt=requirements_txt.build(),
            server_module=self.config.server_module,
        )

    def plan_layers(self) -> t.Optional[LayerPlan]:
        """Returns ``None`` if grouping files is disabled."""
        if not self.group_files:
            return None
        entries = list_workspace_entries(self.build_dir, exclude_files=self.exclude_files)
        return plan_layers(self.num_groups, self.threshold, entries)

    def copy_workspace(self) -> str:
        return render_copy_instructions(self.plan_layers())

    def cleanup(self) -> None:
        if self._staging is not None:
            self._staging.cleanup()
            self._staging = None

    def _build_run_commands(self) -> t.List[str]:
        build_config = self.config.build
        commands = []
        for command in build_config.run + build_config.pre_install:
            command = command.strip()
            if "\n" in command:
                raise exceptions.BuildConfigError(
                    "One of the commands in 'run' contains a new line, which won't work. "
                    "You need to create a new list item in YAML prefixed with '-' "
                    "for each command.\n\n"
                    f"This is the offending line: {command}"
                )
            commands.append(command)
        return commands

    def _install_runtime_wheel(self, args: TemplateArgs) -> str:
        if self.runtime_wheel is None:
            return ""
        copy_lines, path_in_container = self.staging.write(
            self.runtime_wheel.filename, self.runtime_wheel.content
        )
        return self._render(
            "pip_install.j2",
            copy_lines=copy_lines,
            index_url=args.pip_index_url,
            pip_args=[path_in_container],
        )

    def _install_requirements(self, args: TemplateArgs) -> str:
        if not args.requirements_txt.strip():
            return ""
        copy_lines, path_in_container = self.staging.write(
            "requirements.txt", args.requirements_txt
        )
        return self._render(
            "pip_install.j2",
            copy_lines=copy_lines,
            index_url=args.pip_index_url,
            pip_args=["-r", path_in_container],
        )

    def _render(self, template_name: str, **kwargs) -> str:
        template = self._j2_env.get_template(name=template_name)
        return template.render(**kwargs).strip()


def _filter_empty(sections: t.List[str]) -> t.List[str]:
    return [s for s in sections if s]
