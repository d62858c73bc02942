import typing as t

import attrs
from packaging.requirements import InvalidRequirement, Requirement

from modelpack.exceptions import PipPackageParseError


@attrs.define
class RequirementsTxt:
    _pkg_requirements: t.List[Requirement] = attrs.field(factory=list, init=False)

    @property
    def is_empty(self):
        return len(self._pkg_requirements) == 0

    def add_requirement_str(self, requirement_str: str):
        requirement_str = requirement_str.strip()
        try:
            requirement = Requirement(requirement_str)
        except InvalidRequirement as e:
            raise PipPackageParseError(f"'{requirement_str}': {e}") from e
        self._pkg_requirements.append(requirement)

    def build(self) -> str:
        if self.is_empty:
            return ""

        requirements_txt = ""
        for requirement in self._pkg_requirements:
            requirements_txt += f"{requirement}\n"
        return requirements_txt
