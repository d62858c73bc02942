from modelpack._internal.configs import BuildConfig, Config, load_config
from modelpack._internal.containerize import (
    DockerfileGenerator,
    LayerPlan,
    RuntimeWheel,
    SizeBuckets,
    WorkspaceEntry,
    classify_by_size,
    list_workspace_entries,
    plan_layers,
    render_copy_instructions,
)

from ._versions import pkg_version as __version__

__all__ = [
    "BuildConfig",
    "Config",
    "DockerfileGenerator",
    "LayerPlan",
    "RuntimeWheel",
    "SizeBuckets",
    "WorkspaceEntry",
    "classify_by_size",
    "list_workspace_entries",
    "load_config",
    "plan_layers",
    "render_copy_instructions",
    "__version__",
]
