"""
Form state parsing.

Turns the editor's flat form state (text inputs, textareas and repeatable entry
records) into a raw submission payload. The payload is what the editor posts to
the server; the normalizer still sanitizes it there.

Repeatable form sections (experience, education, certification) are plain lists
of entry dicts keyed by field name, one dict per rendered entry.
"""

import re
from typing import Any, Dict, List, Mapping

# Skills, soft skills and languages are typed as "a, b, c" or one per line
COMMA_OR_NEWLINE = re.compile(r",|\n")
# Achievement lines may contain commas, so only newlines separate them
NEWLINES = re.compile(r"\n+")

EXPERIENCE_FIELDS = ("position", "company", "location", "startDate", "endDate")
EDUCATION_FIELDS = ("degree", "institution", "graduationYear", "gpa")
CERTIFICATION_FIELDS = ("name", "provider", "year")


def parse_list(value: str, mode: str = "comma") -> List[str]:
    """
    Split free-form list text into trimmed, non-empty items.

    Args:
        value: Text as typed in the form
        mode: "comma" splits on commas or newlines, "line" on newline runs only

    Returns:
        Items in input order

    Example:
        >>> parse_list("React, Node.js\\nSQL")
        ['React', 'Node.js', 'SQL']
        >>> parse_list("Led team\\nShipped feature\\n\\n", mode="line")
        ['Led team', 'Shipped feature']
    """
    if not value or not isinstance(value, str):
        return []
    if mode not in ("comma", "line"):
        raise ValueError(f"Invalid mode: {mode}. Must be 'comma' or 'line'")
    delimiter = NEWLINES if mode == "line" else COMMA_OR_NEWLINE
    return [item.strip() for item in delimiter.split(value) if item.strip()]


def filter_entries(entries: List[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Drop entries where every field is empty (blank repeatable form sections)."""
    return [entry for entry in entries if any(bool(value) for value in entry.values())]


def _field(form: Mapping[str, Any], key: str) -> str:
    value = form.get(key, "")
    return value.strip() if isinstance(value, str) else ""


def _entries(form: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    entries = form.get(key, [])
    if not isinstance(entries, list):
        return []
    return [entry for entry in entries if isinstance(entry, Mapping)]


def _collect_entry(entry: Mapping[str, Any], field_names) -> Dict[str, Any]:
    return {name: _field(entry, name) for name in field_names}


def collect_form_data(form: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Collect editor form state into a submission payload.

    Args:
        form: Flat form state. Scalar inputs are keyed by their input id
              (full_name, email, phone, address, linkedin, portfolio, title,
              summary, skills, soft_skills, languages). Repeatable sections are
              lists under "experience", "education" and "certification";
              "achievements" inside an experience entry is textarea text.
              "preferences" holds the selected template and accent.

    Returns:
        Payload with the same keys as ResumeDocument.to_dict()
    """
    experience = []
    for entry in _entries(form, "experience"):
        collected = _collect_entry(entry, EXPERIENCE_FIELDS)
        collected["achievements"] = parse_list(entry.get("achievements", ""), mode="line")
        experience.append(collected)

    preferences = form.get("preferences", {})
    if not isinstance(preferences, Mapping):
        preferences = {}

    return {
        "personal": {
            "full_name": _field(form, "full_name"),
            "email": _field(form, "email"),
            "phone": _field(form, "phone"),
            "address": _field(form, "address"),
            "linkedin": _field(form, "linkedin"),
            "portfolio": _field(form, "portfolio"),
        },
        "summary": {
            "description": _field(form, "summary"),
            "title": _field(form, "title"),
        },
        "experience": filter_entries(experience),
        "education": filter_entries(
            [_collect_entry(entry, EDUCATION_FIELDS) for entry in _entries(form, "education")]
        ),
        "certifications": filter_entries(
            [_collect_entry(entry, CERTIFICATION_FIELDS) for entry in _entries(form, "certification")]
        ),
        "skills": parse_list(_field(form, "skills")),
        "softSkills": parse_list(_field(form, "soft_skills")),
        "languages": parse_list(_field(form, "languages")),
        "preferences": {
            "template": preferences.get("template", "minimalist"),
            "accent": preferences.get("accent", "blue"),
        },
    }
