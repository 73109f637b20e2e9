"""
Resume Submission Normalization

Cleans a raw submission (decoded JSON from the editor) into the canonical
ResumeDocument. Every branch has a defined fallback, so malformed input never
raises:

1. **Scalar fields**: whitespace runs collapse to one space, ends are trimmed,
   the result is truncated to the field limit and trimmed again. Empty or non-string values keep
   the previous document's value.

2. **Entry lists** (experience, education, certifications, references): each
   entry is cleaned field by field, then dropped unless its required fields
   are present. An empty result keeps the previous list.

3. **Flat lists** (skills, softSkills, languages): cleaned, empties dropped,
   capped at MAX_LIST_ENTRIES. Free-form text is split on commas or newlines.
   An empty result keeps the previous list.

4. **Preferences**: template and accent must belong to their closed sets,
   otherwise the previous preference is kept.

A submission that is not a mapping at all returns the previous document.
"""

import re
from typing import Any, Callable, List, Mapping, TypeVar

from cvbuilder.contexts.intake.defaults import (
    ACCENT_COLORS,
    ALLOWED_TEMPLATES,
    DEFAULT_FIELD_LIMIT,
    GPA_LIMIT,
    MAX_LIST_ENTRIES,
    REFERENCE_DETAIL_LIMIT,
    SUMMARY_DESCRIPTION_LIMIT,
)
from cvbuilder.contexts.intake.form_parsing import parse_list
from cvbuilder.contexts.intake.logger import log_fallback_fields, log_malformed_submission
from cvbuilder.contexts.intake.resume_data_structure import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    Preferences,
    ReferenceEntry,
    ResumeDocument,
    Summary,
)

WHITESPACE_RUN = re.compile(r"\s+")

Entry = TypeVar("Entry")


# ============================================================================
# Field Cleaners
# ============================================================================


def clean_text(value: Any, fallback: str = "", limit: int = DEFAULT_FIELD_LIMIT) -> str:
    """
    Collapse whitespace, trim and truncate a submitted string.

    Args:
        value: Submitted value (anything; non-strings use fallback)
        fallback: Returned when value is not a string or cleans to empty
        limit: Maximum length, applied after trimming (the cut is trimmed again)

    Returns:
        Cleaned string, or fallback

    Example:
        >>> clean_text("  Jane \\n  Doe ")
        'Jane Doe'
        >>> clean_text(None, "John")
        'John'
    """
    if not isinstance(value, str):
        return fallback
    # Truncation can expose a collapsed space at the cut
    cleaned = WHITESPACE_RUN.sub(" ", value).strip()[:limit].rstrip()
    return cleaned or fallback


def clean_string_list(values: Any, mode: str = "comma") -> List[str]:
    """
    Clean a flat list of strings.

    Args:
        values: List of strings, or free-form text split according to mode
        mode: "comma" (comma or newline) or "line" (newlines only)

    Returns:
        Cleaned non-empty items, at most MAX_LIST_ENTRIES
    """
    if isinstance(values, str):
        values = parse_list(values, mode=mode)
    if not isinstance(values, list):
        return []
    cleaned = [clean_text(value) for value in values]
    return [value for value in cleaned if value][:MAX_LIST_ENTRIES]


def _section(raw: Mapping, key: str) -> Mapping:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


# ============================================================================
# Entry Cleaners
# ============================================================================


def _clean_experience(item: Mapping) -> ExperienceEntry:
    return ExperienceEntry(
        position=clean_text(item.get("position")),
        company=clean_text(item.get("company")),
        location=clean_text(item.get("location")),
        start_date=clean_text(item.get("startDate")),
        end_date=clean_text(item.get("endDate")),
        achievements=clean_string_list(item.get("achievements"), mode="line"),
    )


def _clean_education(item: Mapping) -> EducationEntry:
    return EducationEntry(
        degree=clean_text(item.get("degree")),
        institution=clean_text(item.get("institution")),
        graduation_year=clean_text(item.get("graduationYear")),
        gpa=clean_text(item.get("gpa"), limit=GPA_LIMIT),
    )


def _clean_certification(item: Mapping) -> CertificationEntry:
    return CertificationEntry(
        name=clean_text(item.get("name")),
        provider=clean_text(item.get("provider")),
        year=clean_text(item.get("year")),
    )


def _clean_reference(item: Mapping) -> ReferenceEntry:
    return ReferenceEntry(
        name=clean_text(item.get("name")),
        role=clean_text(item.get("role"), limit=REFERENCE_DETAIL_LIMIT),
        contact=clean_text(item.get("contact"), limit=REFERENCE_DETAIL_LIMIT),
    )


def _clean_entries(
    values: Any,
    cleaner: Callable[[Mapping], Entry],
    previous: List[Entry],
) -> List[Entry]:
    """Clean entries, drop incomplete ones and fall back to previous when empty."""
    if not isinstance(values, list) or not values:
        return list(previous)
    entries = [cleaner(item) for item in values if isinstance(item, Mapping)]
    entries = [entry for entry in entries if entry.is_complete()]
    return entries or list(previous)


def _clean_preferences(preferences: Mapping, previous: Preferences) -> Preferences:
    """Keep each preference only if it names a known template or accent."""
    template = preferences.get("template")
    accent = preferences.get("accent")
    if not isinstance(template, str) or template not in ALLOWED_TEMPLATES:
        template = previous.template
    if not isinstance(accent, str) or accent not in ACCENT_COLORS:
        accent = previous.accent
    return Preferences(template=template, accent=accent)


# ============================================================================
# Orchestration
# ============================================================================


def normalize_resume(raw: Any, previous: ResumeDocument) -> ResumeDocument:
    """
    Sanitize a raw submission against the previously persisted document.

    Args:
        raw: Decoded submission (normally a dict from JSON)
        previous: Currently persisted document; source of every fallback

    Returns:
        New canonical ResumeDocument. previous is never mutated.
    """
    previous = previous.copy()
    if not isinstance(raw, Mapping):
        log_malformed_submission(raw)
        return previous

    personal = _section(raw, "personal")
    summary = _section(raw, "summary")
    preferences = _section(raw, "preferences")
    old_personal = previous.personal

    result = ResumeDocument(
        personal=PersonalInfo(
            full_name=clean_text(personal.get("full_name"), old_personal.full_name),
            email=clean_text(personal.get("email"), old_personal.email),
            phone=clean_text(personal.get("phone"), old_personal.phone),
            address=clean_text(personal.get("address"), old_personal.address),
            linkedin=clean_text(personal.get("linkedin"), old_personal.linkedin),
            portfolio=clean_text(personal.get("portfolio"), old_personal.portfolio),
        ),
        summary=Summary(
            title=clean_text(summary.get("title"), previous.summary.title),
            description=clean_text(
                summary.get("description"),
                previous.summary.description,
                limit=SUMMARY_DESCRIPTION_LIMIT,
            ),
        ),
        experience=_clean_entries(raw.get("experience"), _clean_experience, previous.experience),
        education=_clean_entries(raw.get("education"), _clean_education, previous.education),
        certifications=_clean_entries(
            raw.get("certifications"), _clean_certification, previous.certifications
        ),
        references=_clean_entries(raw.get("references"), _clean_reference, previous.references),
        skills=clean_string_list(raw.get("skills")) or previous.skills,
        soft_skills=clean_string_list(raw.get("softSkills")) or previous.soft_skills,
        languages=clean_string_list(raw.get("languages")) or previous.languages,
        preferences=_clean_preferences(preferences, previous.preferences),
    )

    log_fallback_fields(_fallback_fields(result, previous))
    return result


def _fallback_fields(result: ResumeDocument, previous: ResumeDocument) -> List[str]:
    """Names of top-level fields whose value equals the previous document's."""
    current, old = result.to_dict(), previous.to_dict()
    return [key for key in current if current[key] == old[key]]
