"""Unit tests for ResumeDocument and its entries."""

import pytest

from cvbuilder.contexts.intake.defaults import get_example_resume, load_resume_file
from cvbuilder.contexts.intake.resume_data_structure import (
    ExperienceEntry,
    Preferences,
    ResumeDocument,
)


@pytest.mark.unit
def test_example_resume_loads():
    doc = get_example_resume()

    assert doc.personal.full_name == "John Doe"
    assert doc.experience[0].company == "Tech Solutions Inc."
    assert doc.education[0].graduation_year == "2020"
    assert doc.references[0].name == "Jane Smith"
    assert doc.preferences == Preferences("minimalist", "blue")


@pytest.mark.unit
def test_example_resume_is_fresh_each_call():
    first = get_example_resume()
    first.skills.clear()
    assert get_example_resume().skills


@pytest.mark.unit
def test_to_dict_uses_camel_case_keys(example_doc):
    data = example_doc.to_dict()

    assert list(data) == [
        "personal",
        "summary",
        "experience",
        "education",
        "skills",
        "softSkills",
        "languages",
        "certifications",
        "references",
        "preferences",
    ]
    assert set(data["experience"][0]) == {
        "position",
        "company",
        "location",
        "startDate",
        "endDate",
        "achievements",
    }
    assert "graduationYear" in data["education"][0]


@pytest.mark.unit
def test_from_dict_round_trip(example_doc):
    assert ResumeDocument.from_dict(example_doc.to_dict()) == example_doc


@pytest.mark.unit
def test_from_dict_is_lenient():
    doc = ResumeDocument.from_dict(
        {
            "personal": {"full_name": 7, "email": "a@b.c"},
            "experience": [{"position": "Dev", "achievements": "not a list"}, "junk"],
            "skills": ["ok", None, 3],
            "preferences": {"template": ""},
        }
    )

    assert doc.personal.full_name == ""
    assert doc.personal.email == "a@b.c"
    assert len(doc.experience) == 1
    assert doc.experience[0].achievements == []
    assert doc.skills == ["ok"]
    assert doc.preferences.template == "minimalist"


@pytest.mark.unit
def test_from_dict_non_mapping_is_empty():
    assert ResumeDocument.from_dict(None) == ResumeDocument()


@pytest.mark.unit
def test_copy_is_deep(example_doc):
    clone = example_doc.copy()
    clone.experience[0].achievements.append("new")
    clone.personal.full_name = "Changed"

    assert "new" not in example_doc.experience[0].achievements
    assert example_doc.personal.full_name == "John Doe"


@pytest.mark.unit
def test_experience_completeness():
    assert ExperienceEntry(position="Dev", company="Acme").is_complete()
    assert not ExperienceEntry(company="Acme").is_complete()


@pytest.mark.unit
def test_load_resume_file_json(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text('{"personal": {"full_name": "Jane"}, "skills": ["Go"]}')

    data = load_resume_file(path)

    assert data["personal"]["full_name"] == "Jane"
    assert data["skills"] == ["Go"]


@pytest.mark.unit
def test_load_resume_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_resume_file(tmp_path / "missing.yaml")
