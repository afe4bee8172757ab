"""Pure edit operations over resume snapshots.

Every function takes the current ``ResumeData`` and returns the next one.
Only the targeted branch of the snapshot is rebuilt; untouched children are
carried over as the same objects, so ``old.experience is new.experience``
holds whenever an edit did not touch experience. Lookups that miss return
the input snapshot itself.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel

from models.resume import (
    CUSTOM_SECTION_PREFIX,
    CustomItem,
    CustomSection,
    Education,
    Experience,
    ItemKind,
    Project,
    ResumeData,
    SectionKind,
    new_id,
)

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]

_ITEM_TYPES: dict[ItemKind, type[BaseModel]] = {
    ItemKind.EDUCATION: Education,
    ItemKind.EXPERIENCE: Experience,
    ItemKind.PROJECTS: Project,
}

_ITEM_DEFAULTS: dict[ItemKind, dict[str, Any]] = {
    ItemKind.EDUCATION: {"institution": "New School", "degree": "Degree"},
    ItemKind.EXPERIENCE: {"company": "New Company", "position": "Position"},
    ItemKind.PROJECTS: {"name": "New Project"},
}

DEFAULT_CUSTOM_SECTION_TITLE = "Custom Section"
DEFAULT_CUSTOM_ITEM_NAME = "Item Name"


class UnknownFieldError(ValueError):
    """Raised when an edit names a field the target record does not have."""


def _resolve_field(model_cls: type[BaseModel], name: str) -> str:
    """Map a snake_case or camelCase field name to the model attribute."""
    for attr, info in model_cls.model_fields.items():
        if name in (attr, info.alias) and attr != "id":
            return attr
    raise UnknownFieldError(f"{model_cls.__name__} has no editable field '{name}'")


def _with_field(record: BaseModel, name: str, value: Any) -> BaseModel:
    """Copy of ``record`` with one field replaced, re-validated."""
    attr = _resolve_field(type(record), name)
    data = dict(record)
    data[attr] = value
    return type(record).model_validate(data)


def _replace_by_id(items: tuple, item_id: str, fn) -> tuple | None:
    """Apply ``fn`` to the item with ``item_id``. None when absent."""
    for i, item in enumerate(items):
        if item.id == item_id:
            return items[:i] + (fn(item),) + items[i + 1:]
    return None


# --- Personal info and skills ---

def set_personal_field(snapshot: ResumeData, field: str, value: str) -> ResumeData:
    personal = _with_field(snapshot.personal, field, value)
    return snapshot.model_copy(update={"personal": personal})


def parse_skills(raw: str) -> tuple[str, ...]:
    """Split comma-separated text. Empty tokens are kept while the user types."""
    return tuple(token.strip() for token in raw.split(","))


def set_skills(snapshot: ResumeData, raw: str) -> ResumeData:
    return snapshot.model_copy(update={"skills": parse_skills(raw)})


# --- Built-in item lists ---

def add_item(snapshot: ResumeData, kind: ItemKind) -> ResumeData:
    """Append a new item of ``kind`` with a fresh id and placeholder text."""
    kind = ItemKind(kind)
    item = _ITEM_TYPES[kind](id=new_id(), **_ITEM_DEFAULTS[kind])
    return snapshot.model_copy(update={kind.value: snapshot.items_of(kind) + (item,)})


def update_item(
    snapshot: ResumeData, kind: ItemKind, item_id: str, field: str, value: Any
) -> ResumeData:
    kind = ItemKind(kind)
    # Validate the field name even when the id misses
    _resolve_field(_ITEM_TYPES[kind], field)
    items = _replace_by_id(
        snapshot.items_of(kind), item_id, lambda item: _with_field(item, field, value)
    )
    if items is None:
        logger.debug("update_item: no %s item with id %s", kind.value, item_id)
        return snapshot
    return snapshot.model_copy(update={kind.value: items})


def delete_item(snapshot: ResumeData, kind: ItemKind, item_id: str) -> ResumeData:
    kind = ItemKind(kind)
    items = snapshot.items_of(kind)
    kept = tuple(item for item in items if item.id != item_id)
    if len(kept) == len(items):
        return snapshot
    return snapshot.model_copy(update={kind.value: kept})


# --- Custom sections ---

def add_custom_section(snapshot: ResumeData) -> ResumeData:
    """Create an empty custom section and append it to the section order."""
    section = CustomSection(
        id=CUSTOM_SECTION_PREFIX + new_id(),
        title=DEFAULT_CUSTOM_SECTION_TITLE,
    )
    return snapshot.model_copy(update={
        "custom_sections": snapshot.custom_sections + (section,),
        "section_order": snapshot.section_order + (section.id,),
    })


def remove_custom_section(snapshot: ResumeData, section_id: str) -> ResumeData:
    """Drop a custom section and its section-order entry in one step.

    Built-in section tokens are never removed; passing one is a no-op.
    """
    if section_id in {kind.value for kind in SectionKind}:
        logger.debug("remove_custom_section: %s is a built-in section", section_id)
        return snapshot
    sections = tuple(s for s in snapshot.custom_sections if s.id != section_id)
    order = tuple(sid for sid in snapshot.section_order if sid != section_id)
    if len(sections) == len(snapshot.custom_sections) and len(order) == len(snapshot.section_order):
        return snapshot
    return snapshot.model_copy(update={"custom_sections": sections, "section_order": order})


def _update_custom_section(snapshot: ResumeData, section_id: str, fn) -> ResumeData:
    sections = _replace_by_id(snapshot.custom_sections, section_id, fn)
    if sections is None:
        logger.debug("No custom section with id %s", section_id)
        return snapshot
    return snapshot.model_copy(update={"custom_sections": sections})


def update_custom_section_title(snapshot: ResumeData, section_id: str, title: str) -> ResumeData:
    return _update_custom_section(
        snapshot, section_id, lambda s: s.model_copy(update={"title": title})
    )


def add_custom_item(snapshot: ResumeData, section_id: str) -> ResumeData:
    item = CustomItem(id=new_id(), name=DEFAULT_CUSTOM_ITEM_NAME)
    return _update_custom_section(
        snapshot, section_id, lambda s: s.model_copy(update={"items": s.items + (item,)})
    )


def update_custom_item(
    snapshot: ResumeData, section_id: str, item_id: str, field: str, value: str
) -> ResumeData:
    _resolve_field(CustomItem, field)
    section = snapshot.custom_section(section_id)
    if section is None:
        return snapshot
    items = _replace_by_id(section.items, item_id, lambda item: _with_field(item, field, value))
    if items is None:
        return snapshot
    return _update_custom_section(
        snapshot, section_id, lambda s: s.model_copy(update={"items": items})
    )


def delete_custom_item(snapshot: ResumeData, section_id: str, item_id: str) -> ResumeData:
    section = snapshot.custom_section(section_id)
    if section is None:
        return snapshot
    kept = tuple(item for item in section.items if item.id != item_id)
    if len(kept) == len(section.items):
        return snapshot
    return _update_custom_section(
        snapshot, section_id, lambda s: s.model_copy(update={"items": kept})
    )


# --- Section ordering ---

def move_section(snapshot: ResumeData, index: int, direction: Direction) -> ResumeData:
    """Swap ``section_order[index]`` with its neighbour.

    No-op at the boundaries and for indexes outside the order.
    """
    order = list(snapshot.section_order)
    if not 0 <= index < len(order):
        return snapshot
    if direction == "up":
        other = index - 1
    elif direction == "down":
        other = index + 1
    else:
        raise ValueError(f"Unknown direction: {direction}")
    if not 0 <= other < len(order):
        return snapshot
    order[index], order[other] = order[other], order[index]
    return snapshot.model_copy(update={"section_order": tuple(order)})
