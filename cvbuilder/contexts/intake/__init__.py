"""
Intake Context

Responsibilities:
- Defines the canonical ResumeDocument structure
- Sanitizes raw submissions against the previously persisted document
- Parses editor form state into submission payloads

Owns: Field limits, required-field rules, fallback policy, closed enumerations
Never: Renders or stores documents
"""

from cvbuilder.contexts.intake.defaults import get_example_resume, load_resume_file
from cvbuilder.contexts.intake.form_parsing import collect_form_data, parse_list
from cvbuilder.contexts.intake.normalizer import normalize_resume
from cvbuilder.contexts.intake.resume_data_structure import ResumeDocument

__all__ = [
    "ResumeDocument",
    "normalize_resume",
    "collect_form_data",
    "parse_list",
    "get_example_resume",
    "load_resume_file",
]
