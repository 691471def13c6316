# app/components - Reusable UI components
from .model_viewer import render_3d_model
from .parts_panel import render_parts_panel
from .placement_controls import (
    render_length_tools,
    render_anchor_picker,
    render_direction_controls,
    render_selection_controls,
)
from .generation_inputs import render_generation_inputs

__all__ = [
    'render_3d_model',
    'render_parts_panel',
    'render_length_tools',
    'render_anchor_picker',
    'render_direction_controls',
    'render_selection_controls',
    'render_generation_inputs',
]
