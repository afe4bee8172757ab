"""Resume snapshot types.

A ``ResumeData`` value is one immutable snapshot of the whole resume. Every
model is frozen and every sequence is a tuple, so edits always produce a new
snapshot (see ``services.resume_editor``). Field names are snake_case in
Python and camelCase on the wire.
"""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CUSTOM_SECTION_PREFIX = "custom-"


def new_id() -> str:
    """Opaque, never-reused identifier for list items."""
    return uuid.uuid4().hex


class SectionKind(str, Enum):
    """Built-in section tokens. Any other section id names a custom section."""
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PROJECTS = "projects"


class ItemKind(str, Enum):
    """Built-in sections that hold a list of items."""
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"


class TemplateType(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    PROFESSIONAL = "professional"
    EXECUTIVE = "executive"
    CREATIVE = "creative"
    TECH = "tech"
    ELEGANT = "elegant"
    COMPACT = "compact"
    TIMELINE = "timeline"


class SnapshotModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(SnapshotModel):
    full_name: str = ""
    job_title: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    website: str = ""
    summary: str = ""


class Experience(SnapshotModel):
    id: str = Field(default_factory=new_id)
    company: str = ""
    position: str = ""
    start_date: str = ""  # YYYY-MM, empty when unset
    end_date: str = ""
    current: bool = False
    description: str = ""


class Education(SnapshotModel):
    id: str = Field(default_factory=new_id)
    institution: str = ""
    degree: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class Project(SnapshotModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    link: str = ""
    description: str = ""


class CustomItem(SnapshotModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    subtitle: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class CustomSection(SnapshotModel):
    id: str = Field(default_factory=lambda: CUSTOM_SECTION_PREFIX + new_id())
    title: str = ""
    items: tuple[CustomItem, ...] = ()


DEFAULT_SECTION_ORDER: tuple[str, ...] = tuple(kind.value for kind in SectionKind)


class ResumeData(SnapshotModel):
    """Aggregate root: the single unit of truth for one resume."""
    personal: PersonalInfo = PersonalInfo()
    education: tuple[Education, ...] = ()
    experience: tuple[Experience, ...] = ()
    skills: tuple[str, ...] = ()
    projects: tuple[Project, ...] = ()
    custom_sections: tuple[CustomSection, ...] = ()
    section_order: tuple[str, ...] = DEFAULT_SECTION_ORDER

    def items_of(self, kind: ItemKind) -> tuple:
        return getattr(self, kind.value)

    def custom_section(self, section_id: str) -> CustomSection | None:
        for section in self.custom_sections:
            if section.id == section_id:
                return section
        return None


def initial_resume() -> ResumeData:
    """Seed snapshot a new editing session starts from."""
    return ResumeData(
        personal=PersonalInfo(
            full_name="Alex Doe",
            email="alex.doe@example.com",
            phone="(555) 123-4567",
            address="San Francisco, CA",
            linkedin="linkedin.com/in/alexdoe",
            website="alexdoe.dev",
            job_title="Senior Software Engineer",
            summary=(
                "Experienced software engineer with a passion for building scalable "
                "web applications. Proven track record of leadership and technical excellence."
            ),
        ),
        education=(
            Education(
                id="1",
                institution="University of Technology",
                degree="B.S. Computer Science",
                start_date="2015-09",
                end_date="2019-05",
                current=False,
                description="Graduated with Honors. Member of the ACM Student Chapter.",
            ),
        ),
        experience=(
            Experience(
                id="1",
                company="Tech Solutions Inc.",
                position="Frontend Developer",
                start_date="2019-06",
                end_date="",
                current=True,
                description=(
                    "Developed and maintained the main customer-facing dashboard using React. "
                    "Improved site performance by 40%."
                ),
            ),
        ),
        skills=("React", "TypeScript", "Node.js", "Tailwind CSS", "GraphQL", "AWS"),
        projects=(
            Project(
                id="1",
                name="E-commerce Platform",
                link="github.com/alexdoe/shop",
                description="A full-featured e-commerce solution built with Next.js and Stripe.",
            ),
        ),
        custom_sections=(),
        section_order=DEFAULT_SECTION_ORDER,
    )
