import attrs
from packaging.version import Version

from .base_image import BaseImage


@attrs.frozen(order=True)
class PythonImage(BaseImage):
    ver: Version

    @staticmethod
    def get_repository():
        return "python"

    def get_tag(self):
        return str(self.ver)
