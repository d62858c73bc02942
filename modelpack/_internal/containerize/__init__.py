from .copy_instructions import CopyInstruction, build_copy_instructions, render_copy_instructions
from .dockerfile_generator import DockerfileGenerator
from .layer_planner import LayerPlan, plan_layers
from .runtime_wheel import RuntimeWheel
from .workspace import SizeBuckets, WorkspaceEntry, classify_by_size, list_workspace_entries

__all__ = [
    "CopyInstruction",
    "DockerfileGenerator",
    "LayerPlan",
    "RuntimeWheel",
    "SizeBuckets",
    "WorkspaceEntry",
    "build_copy_instructions",
    "classify_by_size",
    "list_workspace_entries",
    "plan_layers",
    "render_copy_instructions",
]
