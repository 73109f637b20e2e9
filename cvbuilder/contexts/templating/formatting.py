"""
Display Formatting

Builds a ResumeView: every string the preview and the PDF layout display, with
placeholder substitution already applied. Both output paths consume the same
view so an empty document looks like a populated template everywhere.

Values in a ResumeView are plain text. Escaping is the renderer's job.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from cvbuilder.contexts.intake.defaults import ACCENT_COLORS, DEFAULT_ACCENT_HEX
from cvbuilder.contexts.intake.resume_data_structure import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)

PLACEHOLDERS = {
    "full_name": "Your Full Name",
    "address": "City, Province",
    "phone": "Phone Number",
    "email": "Email Address",
    "linkedin": "linkedin.com/in/username",
    "portfolio": "portfolio-link.com",
    "summary_title": "Your Job Title",
    "summary_description": (
        "with [Number] years of experience in [Main Specialty]. Skilled at managing "
        "[Key Responsibility] and delivering strategic solutions that improve "
        "operational efficiency."
    ),
    "company": "Company Name",
    "position": "Job Title/Position",
    "location": "Location",
    "timeline": "Month Year - Present",
    "institution": "University / Institution Name",
    "graduation_year": "Graduation Year",
    "degree": "Academic Degree, Major",
}

EMPTY_MESSAGES = {
    "experience": "No experience yet.",
    "education": "No education yet.",
    "skills": "No skills yet.",
}

SECTION_TITLES = (
    "Professional Profile",
    "Work Experience",
    "Education",
    "Skills & Certifications",
)

SEPARATOR = " | "
EN_DASH = "–"
HAS_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
GPA_TOKEN = re.compile(r"ipk", re.IGNORECASE)


# ============================================================================
# Field Formatting
# ============================================================================


def normalize_url(value: str) -> str:
    """
    Make a profile link absolute.

    Example:
        >>> normalize_url("linkedin.com/in/jane")
        'https://linkedin.com/in/jane'
        >>> normalize_url("HTTP://example.com")
        'HTTP://example.com'
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if HAS_SCHEME.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def format_gpa(gpa: str) -> str:
    """
    GPA display text: verbatim if it already mentions IPK, otherwise prefixed.

    Example:
        >>> format_gpa("3.9")
        'IPK: 3.9'
        >>> format_gpa("IPK 3.9")
        'IPK 3.9'
        >>> format_gpa("")
        'IPK: -'
    """
    if not gpa:
        return "IPK: -"
    if GPA_TOKEN.search(gpa):
        return gpa
    return f"IPK: {gpa}"


def format_timeline(start_date: str, end_date: str, dash: str = EN_DASH) -> str:
    """Join start and end dates, or the timeline placeholder if both are empty."""
    parts = [part for part in (start_date, end_date) if part]
    if not parts:
        return PLACEHOLDERS["timeline"]
    return f" {dash} ".join(parts)


def format_certification(cert: CertificationEntry, dash: str = EN_DASH) -> str:
    """'Name – Provider (Year)', omitting missing parts; empty without a name."""
    if not cert.name:
        return ""
    provider = f" {dash} {cert.provider}" if cert.provider else ""
    year = f" ({cert.year})" if cert.year else ""
    return f"{cert.name}{provider}{year}"


def accent_hex(accent: str) -> str:
    """Hex value for an accent name; unknown names get the default accent."""
    return ACCENT_COLORS.get(accent, DEFAULT_ACCENT_HEX)


# ============================================================================
# View Model
# ============================================================================


@dataclass
class LinkView:
    """A profile link. href is None when the placeholder is shown instead."""

    text: str
    href: Optional[str] = None


@dataclass
class ExperienceView:
    company: str
    timeline: str
    position: str
    location: str
    achievements: List[str] = field(default_factory=list)


@dataclass
class EducationView:
    institution: str
    year: str
    degree: str
    gpa: str


@dataclass
class ResumeView:
    """Display-ready strings for one document."""

    name: str
    contact_parts: List[str]
    links: List[LinkView]
    summary_title: str
    summary_description: str
    experience: List[ExperienceView]
    education: List[EducationView]
    skill_lines: List[Tuple[str, str]]
    template: str
    accent_hex: str

    @property
    def contact_line(self) -> str:
        return SEPARATOR.join(self.contact_parts)

    @property
    def link_line(self) -> str:
        return SEPARATOR.join(link.text for link in self.links)


def _link(value: str, placeholder: str) -> LinkView:
    if not value:
        return LinkView(text=placeholder)
    return LinkView(text=value, href=normalize_url(value))


def _experience_view(entry: ExperienceEntry, dash: str) -> ExperienceView:
    return ExperienceView(
        company=entry.company or PLACEHOLDERS["company"],
        timeline=format_timeline(entry.start_date, entry.end_date, dash),
        position=entry.position or PLACEHOLDERS["position"],
        location=entry.location or PLACEHOLDERS["location"],
        achievements=[line for line in entry.achievements if line],
    )


def _education_view(entry: EducationEntry) -> EducationView:
    return EducationView(
        institution=entry.institution or PLACEHOLDERS["institution"],
        year=entry.graduation_year or PLACEHOLDERS["graduation_year"],
        degree=entry.degree or PLACEHOLDERS["degree"],
        gpa=format_gpa(entry.gpa),
    )


def build_skill_lines(doc: ResumeDocument, dash: str = EN_DASH) -> List[Tuple[str, str]]:
    """
    Labelled lines for the Skills & Certifications section.

    Returns:
        (label, text) pairs; lines with no content are omitted
    """
    lines = []
    if doc.skills:
        lines.append(("Technical Skills", ", ".join(doc.skills)))
    if doc.soft_skills:
        lines.append(("Soft Skills", ", ".join(doc.soft_skills)))
    if doc.languages:
        lines.append(("Languages", ", ".join(doc.languages)))
    certs = [format_certification(cert, dash) for cert in doc.certifications]
    certs = [cert for cert in certs if cert]
    if certs:
        lines.append(("Certifications", ", ".join(certs)))
    return lines


def _contact_parts(personal: PersonalInfo) -> List[str]:
    return [
        personal.address or PLACEHOLDERS["address"],
        personal.phone or PLACEHOLDERS["phone"],
        personal.email or PLACEHOLDERS["email"],
    ]


def build_resume_view(doc: ResumeDocument, dash: str = EN_DASH) -> ResumeView:
    """
    Apply placeholder rules to a document.

    Args:
        doc: Document to display (may be partially empty)
        dash: Dash used between dates and before certification providers.
              The PDF layout passes "-" since its core fonts lack the en dash.

    Returns:
        ResumeView with no empty display strings
    """
    personal = doc.personal
    return ResumeView(
        name=(personal.full_name or PLACEHOLDERS["full_name"]).upper(),
        contact_parts=_contact_parts(personal),
        links=[
            _link(personal.linkedin, PLACEHOLDERS["linkedin"]),
            _link(personal.portfolio, PLACEHOLDERS["portfolio"]),
        ],
        summary_title=doc.summary.title or PLACEHOLDERS["summary_title"],
        summary_description=doc.summary.description or PLACEHOLDERS["summary_description"],
        experience=[_experience_view(entry, dash) for entry in doc.experience],
        education=[_education_view(entry) for entry in doc.education],
        skill_lines=build_skill_lines(doc, dash),
        template=doc.preferences.template,
        accent_hex=accent_hex(doc.preferences.accent),
    )
