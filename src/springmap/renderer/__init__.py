"""Output formats for a scanned ProjectStructure."""

from springmap.renderer.structure import (
    load_structure,
    render_json,
    render_yaml,
    structure_from_dict,
    structure_to_dict,
)

__all__ = [
    "load_structure",
    "render_json",
    "render_yaml",
    "structure_from_dict",
    "structure_to_dict",
]
