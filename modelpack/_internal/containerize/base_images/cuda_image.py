import attrs
from packaging.version import Version

from modelpack._internal.constants import (
    DEFAULT_CUDA_VERSION,
    DEFAULT_CUDNN_VERSION,
    DEFAULT_UBUNTU_VERSION,
)

from .base_image import BaseImage


@attrs.frozen(order=True)
class CUDAImage(BaseImage):
    cuda_ver: Version = DEFAULT_CUDA_VERSION
    cudnn_ver: Version = DEFAULT_CUDNN_VERSION
    ubuntu_ver: Version = DEFAULT_UBUNTU_VERSION

    @staticmethod
    def get_repository():
        return "nvidia/cuda"

    def get_tag(self):
        tag = (
            f"{self.cuda_ver}-cudnn{self.cudnn_ver}-devel-"
            f"ubuntu{self.ubuntu_ver.major}.{self.ubuntu_ver.minor:02}"
        )
        return tag
