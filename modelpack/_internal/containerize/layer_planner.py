import typing as t

import attrs

from modelpack import exceptions
from modelpack._internal.logging import log_debug

from .workspace import WorkspaceEntry, classify_by_size

Group = t.Tuple[str, ...]


@attrs.frozen
class LayerPlan:
    # Each file group is copied by a single instruction.
    file_groups: t.Tuple[Group, ...] = ()
    # Each entry of a folder group is copied by its own instruction.
    folder_groups: t.Tuple[Group, ...] = ()

    @property
    def num_groups(self) -> int:
        return len(self.file_groups) + len(self.folder_groups)

    def iter_entry_names(self) -> t.Iterator[str]:
        for group in self.file_groups:
            yield from group
        for group in self.folder_groups:
            yield from group


def plan_layers(
    num_groups: int, threshold: int, entries: t.Sequence[WorkspaceEntry]
) -> LayerPlan:
    """
    Divide workspace entries into groups, each of which becomes an image layer.

    Large files go into one group and large and small directories into one
    group each. Small files are spread over ``num_groups`` groups of equal
    size, with the remainder appended to the last group. If there are no more
    small files than ``num_groups``, each small file gets its own group.
    """
    if num_groups < 1:
        raise exceptions.InvalidConfiguration(
            f"The number of file groups should be at least 1, not {num_groups}"
        )

    buckets = classify_by_size(threshold, entries)
    file_groups: t.List[Group] = []
    folder_groups: t.List[Group] = []

    if buckets.large_files:
        file_groups.append(buckets.large_files)
    if buckets.large_dirs:
        folder_groups.append(buckets.large_dirs)
    if buckets.small_dirs:
        folder_groups.append(buckets.small_dirs)

    smalls = buckets.small_files
    num_smalls = len(smalls)
    if num_smalls <= num_groups:
        file_groups.extend((f,) for f in smalls)
    else:
        # TODO: Even splitting still leaves large groups of small files slow to
        # deploy, and edits across groups rebuild every touched layer.
        files_per_group = num_smalls // num_groups
        for i in range(num_groups):
            start = i * files_per_group
            # The last group takes the remainder
            end = start + files_per_group if i < num_groups - 1 else num_smalls
            file_groups.append(smalls[start:end])

    plan = LayerPlan(file_groups=tuple(file_groups), folder_groups=tuple(folder_groups))
    log_debug(f"Layer plan: {plan}", pretty=False)
    return plan
