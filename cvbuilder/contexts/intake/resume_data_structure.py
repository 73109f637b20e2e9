"""
Resume Document Structure

Defines the canonical ResumeDocument exchanged between contexts and over HTTP.

Attributes are snake_case; the JSON representation keeps the camelCase keys the
editor form submits (startDate, graduationYear, softSkills, ...). Conversion in
both directions goes through to_dict() / from_dict().

from_dict() is lenient: it tolerates missing keys and wrong types (substituting
empty values) but does NOT apply limits or entry filtering. Untrusted
submissions go through intake.normalizer instead.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


def _text(data: Mapping, key: str) -> str:
    value = data.get(key, "")
    return value if isinstance(value, str) else ""


def _texts(data: Mapping, key: str) -> List[str]:
    values = data.get(key, [])
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, str)]


def _records(data: Mapping, key: str) -> List[Mapping]:
    values = data.get(key, [])
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, Mapping)]


def _mapping(data: Mapping, key: str) -> Mapping:
    value = data.get(key, {})
    return value if isinstance(value, Mapping) else {}


@dataclass
class PersonalInfo:
    """Contact block shown in the resume header."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    portfolio: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "linkedin": self.linkedin,
            "portfolio": self.portfolio,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "PersonalInfo":
        return cls(
            full_name=_text(data, "full_name"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            address=_text(data, "address"),
            linkedin=_text(data, "linkedin"),
            portfolio=_text(data, "portfolio"),
        )


@dataclass
class Summary:
    """Professional profile: job title plus a free-text description."""

    title: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Summary":
        return cls(title=_text(data, "title"), description=_text(data, "description"))


@dataclass
class ExperienceEntry:
    """
    Single work experience entry.

    Attributes:
        position: Job title (required)
        company: Employer name (required)
        location: Free-text location
        start_date: Free-text start (e.g. "January 2020")
        end_date: Free-text end (e.g. "Present")
        achievements: Bullet lines, in display order
    """

    position: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    achievements: List[str] = field(default_factory=list)

    def is_complete(self) -> bool:
        return bool(self.position and self.company)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "company": self.company,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "achievements": list(self.achievements),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "ExperienceEntry":
        return cls(
            position=_text(data, "position"),
            company=_text(data, "company"),
            location=_text(data, "location"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            achievements=_texts(data, "achievements"),
        )


@dataclass
class EducationEntry:
    """Single education entry; degree and institution are required."""

    degree: str = ""
    institution: str = ""
    graduation_year: str = ""
    gpa: str = ""

    def is_complete(self) -> bool:
        return bool(self.degree and self.institution)

    def to_dict(self) -> Dict[str, str]:
        return {
            "degree": self.degree,
            "institution": self.institution,
            "graduationYear": self.graduation_year,
            "gpa": self.gpa,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "EducationEntry":
        return cls(
            degree=_text(data, "degree"),
            institution=_text(data, "institution"),
            graduation_year=_text(data, "graduationYear"),
            gpa=_text(data, "gpa"),
        )


@dataclass
class CertificationEntry:
    """Single certification; only the name is required."""

    name: str = ""
    provider: str = ""
    year: str = ""

    def is_complete(self) -> bool:
        return bool(self.name)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "provider": self.provider, "year": self.year}

    @classmethod
    def from_dict(cls, data: Mapping) -> "CertificationEntry":
        return cls(
            name=_text(data, "name"),
            provider=_text(data, "provider"),
            year=_text(data, "year"),
        )


@dataclass
class ReferenceEntry:
    """Professional reference. Stored and round-tripped, not rendered."""

    name: str = ""
    role: str = ""
    contact: str = ""

    def is_complete(self) -> bool:
        return bool(self.name)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "role": self.role, "contact": self.contact}

    @classmethod
    def from_dict(cls, data: Mapping) -> "ReferenceEntry":
        return cls(
            name=_text(data, "name"),
            role=_text(data, "role"),
            contact=_text(data, "contact"),
        )


@dataclass
class Preferences:
    """Visual preferences: layout template and accent color name."""

    template: str = "minimalist"
    accent: str = "blue"

    def to_dict(self) -> Dict[str, str]:
        return {"template": self.template, "accent": self.accent}

    @classmethod
    def from_dict(cls, data: Mapping) -> "Preferences":
        defaults = cls()
        return cls(
            template=_text(data, "template") or defaults.template,
            accent=_text(data, "accent") or defaults.accent,
        )


@dataclass
class ResumeDocument:
    """
    Canonical resume record held by the server.

    Exactly one instance is current per server process (see storage context).
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    summary: Summary = field(default_factory=Summary)
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    certifications: List[CertificationEntry] = field(default_factory=list)
    references: List[ReferenceEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    soft_skills: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)

    def copy(self) -> "ResumeDocument":
        """Deep copy, so callers never share list or entry objects."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation with the editor's camelCase keys."""
        return {
            "personal": self.personal.to_dict(),
            "summary": self.summary.to_dict(),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "skills": list(self.skills),
            "softSkills": list(self.soft_skills),
            "languages": list(self.languages),
            "certifications": [entry.to_dict() for entry in self.certifications],
            "references": [entry.to_dict() for entry in self.references],
            "preferences": self.preferences.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "ResumeDocument":
        """
        Build a document from its JSON representation.

        Args:
            data: Mapping shaped like to_dict() output; missing or mistyped
                  values become empty strings/lists

        Returns:
            ResumeDocument (not sanitized, see module docstring)
        """
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            personal=PersonalInfo.from_dict(_mapping(data, "personal")),
            summary=Summary.from_dict(_mapping(data, "summary")),
            experience=[ExperienceEntry.from_dict(item) for item in _records(data, "experience")],
            education=[EducationEntry.from_dict(item) for item in _records(data, "education")],
            certifications=[
                CertificationEntry.from_dict(item) for item in _records(data, "certifications")
            ],
            references=[ReferenceEntry.from_dict(item) for item in _records(data, "references")],
            skills=_texts(data, "skills"),
            soft_skills=_texts(data, "softSkills"),
            languages=_texts(data, "languages"),
            preferences=Preferences.from_dict(_mapping(data, "preferences")),
        )
