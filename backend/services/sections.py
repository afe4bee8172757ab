"""Section resolution shared by every resume template.

Templates never walk ``ResumeData`` themselves. They iterate the list built
by ``resolve_sections``, which applies the one rule every skin must honor:

    summary      -> only when the summary text is non-empty
    experience   -> only when there is at least one entry, stored order
    education    -> same
    projects     -> same
    anything else-> a custom section with that id, only when it has items
    unknown id   -> nothing (stale references are skipped)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from models.resume import CustomSection, ResumeData, SectionKind

logger = logging.getLogger(__name__)

PRESENT = "Present"
RANGE_SEPARATOR = " – "

# Fixed English abbreviations; strftime("%b") follows the process locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

SECTION_TITLES = {
    SectionKind.SUMMARY: "Profile",
    SectionKind.EXPERIENCE: "Experience",
    SectionKind.EDUCATION: "Education",
    SectionKind.PROJECTS: "Projects",
}

SECTION_LABELS = {
    SectionKind.SUMMARY: "Professional Summary",
    SectionKind.EXPERIENCE: "Experience",
    SectionKind.EDUCATION: "Education",
    SectionKind.PROJECTS: "Projects",
}


@dataclass(frozen=True)
class SectionEntry:
    """One rendered item inside a section."""
    id: str
    title: str
    subtitle: str = ""
    date_range: str = ""
    description: str = ""
    link: str = ""


@dataclass(frozen=True)
class RenderedSection:
    id: str
    kind: SectionKind | None  # None for custom sections
    title: str
    text: str = ""  # body of text-only sections (summary)
    entries: list[SectionEntry] = field(default_factory=list)

    @property
    def is_custom(self) -> bool:
        return self.kind is None


def format_date(value: str) -> str:
    """``"2020-01"`` -> ``"Jan 2020"``. Unparsable input is returned as-is."""
    if not value:
        return ""
    try:
        parsed = datetime.strptime(f"{value}-01", "%Y-%m-%d")
    except ValueError:
        return value
    return f"{_MONTHS[parsed.month - 1]} {parsed.year}"


def format_range(start: str, end: str, current: bool = False) -> str:
    """Format a ``start – end`` date range.

    ``current`` renders the end as ``Present``. With only one side set, only
    that side is shown, without a separator.
    """
    if not start and not end:
        return ""
    start_fmt = format_date(start)
    end_fmt = PRESENT if current else format_date(end)
    if not start_fmt:
        return end_fmt
    if not end_fmt:
        return start_fmt
    return f"{start_fmt}{RANGE_SEPARATOR}{end_fmt}"


def _builtin_kind(section_id: str) -> SectionKind | None:
    try:
        return SectionKind(section_id)
    except ValueError:
        return None


def _resolve_builtin(kind: SectionKind, data: ResumeData) -> RenderedSection | None:
    title = SECTION_TITLES[kind]
    if kind is SectionKind.SUMMARY:
        if not data.personal.summary:
            return None
        return RenderedSection(id=kind.value, kind=kind, title=title, text=data.personal.summary)

    if kind is SectionKind.EXPERIENCE:
        entries = [
            SectionEntry(
                id=exp.id,
                title=exp.position,
                subtitle=exp.company,
                date_range=format_range(exp.start_date, exp.end_date, exp.current),
                description=exp.description,
            )
            for exp in data.experience
        ]
    elif kind is SectionKind.EDUCATION:
        entries = [
            SectionEntry(
                id=edu.id,
                title=edu.institution,
                subtitle=edu.degree,
                date_range=format_range(edu.start_date, edu.end_date, edu.current),
                description=edu.description,
            )
            for edu in data.education
        ]
    elif kind is SectionKind.PROJECTS:
        entries = [
            SectionEntry(id=proj.id, title=proj.name, link=proj.link, description=proj.description)
            for proj in data.projects
        ]
    else:
        raise AssertionError(f"Unhandled section kind: {kind}")

    if not entries:
        return None
    return RenderedSection(id=kind.value, kind=kind, title=title, entries=entries)


def _resolve_custom(section: CustomSection) -> RenderedSection | None:
    if not section.items:
        return None
    entries = [
        SectionEntry(
            id=item.id,
            title=item.name,
            subtitle=item.subtitle,
            date_range=format_range(item.start_date, item.end_date, False),
            description=item.description,
        )
        for item in section.items
    ]
    return RenderedSection(id=section.id, kind=None, title=section.title, entries=entries)


def resolve_section(section_id: str, data: ResumeData) -> RenderedSection | None:
    """Resolve one section id against a snapshot. None means render nothing."""
    kind = _builtin_kind(section_id)
    if kind is not None:
        return _resolve_builtin(kind, data)

    section = data.custom_section(section_id)
    if section is None:
        logger.debug("Skipping stale section id %s", section_id)
        return None
    return _resolve_custom(section)


def resolve_sections(data: ResumeData) -> list[RenderedSection]:
    """All non-empty sections of ``data`` in section order."""
    resolved = (resolve_section(section_id, data) for section_id in data.section_order)
    return [section for section in resolved if section is not None]


def section_label(section_id: str, data: ResumeData) -> str:
    """Editor-facing name of a section id."""
    kind = _builtin_kind(section_id)
    if kind is not None:
        return SECTION_LABELS[kind]
    section = data.custom_section(section_id)
    if section is None:
        return "Unknown Section"
    return f"{section.title} (Custom)"
