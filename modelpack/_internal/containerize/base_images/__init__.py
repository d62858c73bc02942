from .base_image import BaseImage
from .cuda_image import CUDAImage
from .python_image import PythonImage

__all__ = ["BaseImage", "CUDAImage", "PythonImage"]
