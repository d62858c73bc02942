from pathlib import PurePosixPath

from packaging.version import Version

# Also the number of extra image layers on top of the base layers
MAX_NUM_FILE_GROUPS = 1

# 200 MB in decimal units. Older docs called this "100 MB"; the value is what counts.
FILE_SIZE_THRESHOLD = 200 * 1000 * 1000

DEFAULT_CONFIG_FILE_NAME = "modelpack.yaml"
DEFAULT_SERVER_MODULE = "cog.server.http"
DEFAULT_CUDA_VERSION = Version("11.8")
DEFAULT_CUDNN_VERSION = Version("8")
DEFAULT_UBUNTU_VERSION = Version("22.04")

DOCKERFILE_SYNTAX = "docker/dockerfile:1.2"
TINI_VERSION = "v0.19.0"
SERVER_PORT = 5000

WORKING_DIR_IN_CONTAINER = PurePosixPath("/src")
STAGED_FILES_DIR_IN_CONTAINER = PurePosixPath("/tmp")
STAGING_ROOT_REL_PATH = PurePosixPath(".modelpack/tmp")

MIN_SUPPORTED_PYTHON_VER = Version("3.7")
MAX_SUPPORTED_PYTHON_VER = Version("3.12")
