import json
import typing as t
from pathlib import PurePosixPath

import attrs

from modelpack._internal.constants import WORKING_DIR_IN_CONTAINER
from modelpack._internal.logging import log_warning

from .layer_planner import LayerPlan

# Docker expands these in COPY sources even in the JSON form
_EXPANDED_CHARS = frozenset("$*?[\\")


@attrs.frozen
class CopyInstruction:
    sources: t.Tuple[str, ...]
    dest: PurePosixPath

    def render(self) -> str:
        args = list(self.sources) + [self.dest.as_posix()]
        if any(_needs_json_form(arg) for arg in args):
            return "COPY " + json.dumps(args)
        return "COPY " + " ".join(args)


def build_copy_instructions(
    plan: LayerPlan, dest: PurePosixPath = WORKING_DIR_IN_CONTAINER
) -> t.List[CopyInstruction]:
    """
    Build COPY instructions for a layer plan.

    Names are not escaped. A name with a character Docker treats as a
    variable or a wildcard may match other files or none, so a warning is
    logged for it.
    """
    for name in plan.iter_entry_names():
        if _EXPANDED_CHARS.intersection(name):
            log_warning(
                f"'{name}' may not be copied as is: Docker expands '$' and wildcards",
                pretty=False,
            )

    instructions = [CopyInstruction(sources=tuple(group), dest=dest) for group in plan.file_groups]
    for group in plan.folder_groups:
        # Keep the directory name, since COPY copies the contents of a directory
        instructions.extend(CopyInstruction(sources=(name,), dest=dest / name) for name in group)
    return instructions


def render_copy_instructions(
    plan: t.Optional[LayerPlan], dest: PurePosixPath = WORKING_DIR_IN_CONTAINER
) -> str:
    """
    Render a layer plan as COPY instructions.

    If ``plan`` is ``None``, grouping is disabled and the whole build
    directory is copied by one instruction.
    """
    if plan is None:
        return CopyInstruction(sources=(".",), dest=dest).render()
    return "\n".join(inst.render() for inst in build_copy_instructions(plan, dest))


def _needs_json_form(arg: str) -> bool:
    return any(c.isspace() for c in arg) or '"' in arg
