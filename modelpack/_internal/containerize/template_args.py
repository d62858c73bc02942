import typing as t
from pathlib import PurePosixPath

import attrs
from packaging.version import Version

from modelpack._internal.constants import (
    DOCKERFILE_SYNTAX,
    SERVER_PORT,
    TINI_VERSION,
    WORKING_DIR_IN_CONTAINER,
)

from .base_images import BaseImage


@attrs.define(kw_only=True)
class TemplateArgs:
    # Docker
    dockerfile_syntax: str = DOCKERFILE_SYNTAX
    image: BaseImage
    tini_version: str = TINI_VERSION

    # System
    device: str
    system_packages: t.List[str] = attrs.field(factory=list)
    run_commands: t.List[str] = attrs.field(factory=list)

    # Python
    python_version: Version
    install_python: bool = attrs.field(default=False)
    pip_index_url: t.Optional[str] = attrs.field(default=None)
    requirements_txt: str = ""

    # Serving
    workdir: PurePosixPath = attrs.field(default=WORKING_DIR_IN_CONTAINER)
    port: int = attrs.field(default=SERVER_PORT)
    server_module: str
