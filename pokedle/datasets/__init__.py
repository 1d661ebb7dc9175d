from .validator import validate_namelist, pretty_summary
from .io import read_lines, write_lines, canonical_name, load_names, DEFAULT_NAMES_PATH

__all__ = [
    "validate_namelist", "pretty_summary",
    "read_lines", "write_lines", "canonical_name", "load_names", "DEFAULT_NAMES_PATH",
]
