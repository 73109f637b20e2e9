"""
Default values and closed enumerations for the resume structure.

Provides shared defaults used by:
- normalizer.py (field limits, allowed preferences)
- templating/formatting.py (accent colors)
- storage (the example document every server starts with)
"""

from pathlib import Path
from typing import Any, Dict, Union

from omegaconf import OmegaConf

from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument

ALLOWED_TEMPLATES = ("minimalist", "modern")

ACCENT_COLORS = {
    "emerald": "#10b981",
    "blue": "#2563eb",
    "red": "#ef4444",
    "purple": "#8b5cf6",
    "black": "#111827",
}
DEFAULT_ACCENT_HEX = ACCENT_COLORS["blue"]

# Character limits applied after whitespace collapsing
DEFAULT_FIELD_LIMIT = 300
SUMMARY_DESCRIPTION_LIMIT = 1200
GPA_LIMIT = 50
REFERENCE_DETAIL_LIMIT = 200

# Flat lists (skills, soft skills, languages) and achievements
MAX_LIST_ENTRIES = 20

EXAMPLE_RESUME_PATH = Path(__file__).parent / "data" / "example_resume.yaml"


def load_resume_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a raw resume mapping from a YAML or JSON file.

    JSON is valid YAML, so both go through OmegaConf.

    Args:
        path: Path to the file

    Returns:
        Plain dict (OmegaConf containers resolved)

    Raises:
        FileNotFoundError: If path does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")
    return OmegaConf.to_container(OmegaConf.load(path), resolve=True)


def get_example_resume() -> ResumeDocument:
    """Fresh copy of the example document a server process starts with."""
    return ResumeDocument.from_dict(load_resume_file(EXAMPLE_RESUME_PATH))
