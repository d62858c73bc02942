from abc import ABC, abstractmethod

import attrs


@attrs.frozen
class BaseImage(ABC):
    @abstractmethod
    def get_repository(self) -> str:
        pass

    @abstractmethod
    def get_tag(self) -> str:
        pass

    @property
    def name(self) -> str:
        return self.get_repository() + ":" + self.get_tag()
