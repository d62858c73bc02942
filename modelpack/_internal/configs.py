import typing as t
from pathlib import Path

import yaml
from packaging.version import InvalidVersion, Version
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from modelpack._internal.constants import (
    DEFAULT_SERVER_MODULE,
    MAX_SUPPORTED_PYTHON_VER,
    MIN_SUPPORTED_PYTHON_VER,
)
from modelpack.exceptions import ModelConfigError


def _parse_version(v: t.Any) -> t.Optional[Version]:
    if v is None or isinstance(v, Version):
        return v
    if isinstance(v, (int, float)):
        v = str(v)
    if not isinstance(v, str):
        raise ValueError(f"Should be 'str', not '{type(v)}'.")
    try:
        return Version(v)
    except InvalidVersion:
        raise ValueError(f"invalid version: {v}")


# TODO warn about ignored fields instead of silently dropping them
class BuildConfig(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    gpu: bool = False
    python_version: Version = Field(default_factory=lambda: Version("3.10"))
    cuda: t.Optional[Version] = None
    cudnn: t.Optional[Version] = None

    system_packages: t.List[str] = Field(default_factory=list)
    python_packages: t.List[str] = Field(default_factory=list)
    pip_index_url: t.Optional[str] = None
    run: t.List[str] = Field(default_factory=list)
    # Kept for configs written before 'run' existed
    pre_install: t.List[str] = Field(default_factory=list)

    @field_validator("python_version", "cuda", "cudnn", mode="before")
    @classmethod
    def convert_version(cls, v: t.Any):
        return _parse_version(v)

    @field_validator("python_version")
    @classmethod
    def validate_py_ver(cls, v: Version):
        major_minor = Version(f"{v.major}.{v.minor}")
        if v < MIN_SUPPORTED_PYTHON_VER or major_minor > MAX_SUPPORTED_PYTHON_VER:
            raise ValueError(
                f"unsupported Python version: {str(v)}. "
                "modelpack supports Python version "
                f"from {MIN_SUPPORTED_PYTHON_VER} to {MAX_SUPPORTED_PYTHON_VER}"
            )
        return v

    @model_validator(mode="after")
    def validate_cuda_requires_gpu(self):
        if not self.gpu and (self.cuda is not None or self.cudnn is not None):
            raise ValueError("'cuda' and 'cudnn' require 'gpu' to be set")
        return self


class Config(BaseModel):
    build: BuildConfig = Field(default_factory=BuildConfig)
    server_module: str = DEFAULT_SERVER_MODULE


def load_config(path: Path) -> Config:
    if not path.exists():
        raise ModelConfigError(f"Config file not found: {path}")
    if not path.is_file():
        raise ModelConfigError(f"Not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ModelConfigError(f"Failed to parse '{path}':\n{e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ModelConfigError(f"Expected a mapping at the top level of '{path}'")

    try:
        return Config.model_validate(raw)
    except ValidationError as e:
        raise ModelConfigError(f"Invalid config '{path}':\n{e}") from e
