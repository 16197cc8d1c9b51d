"""Parameter schemas for every Things tool."""

from __future__ import annotations

from things_mcp.schema import (
    ArrayField,
    BooleanField,
    DiscriminatedUnionField,
    EnumField,
    Field,
    LiteralField,
    NumberField,
    ObjectField,
    StringField,
    UnionField,
)

DATE_PATTERN = r"\d{4}-\d{2}-\d{2}"
DATETIME_PATTERN = r"\d{4}-\d{2}-\d{2}@\d{2}:\d{2}"
WHEN_VALUES = ("today", "tomorrow", "evening", "anytime", "someday")
SHOW_LISTS = (
    "inbox",
    "today",
    "anytime",
    "upcoming",
    "someday",
    "logbook",
    "trash",
)

MAX_TITLE = 255
MAX_NOTES = 10_000
MAX_TAGS = 20
MAX_TAG_LENGTH = 50
MAX_CHECKLIST = 100
MAX_PROJECT_ITEMS = 200


# ── Reusable fields ──────────────────────────────────────────────


def _title(*, required: bool = True, description: str | None = None) -> StringField:
    return StringField(
        min_length=1,
        max_length=MAX_TITLE,
        min_message="Title is required",
        max_message="Title too long",
        required=required,
        description=description,
    )


def _notes(description: str = "Additional notes") -> StringField:
    return StringField(
        max_length=MAX_NOTES,
        max_message="Notes too long",
        required=False,
        description=description,
    )


def _date(description: str) -> StringField:
    return StringField(
        pattern=DATE_PATTERN,
        pattern_message="Invalid date format. Use YYYY-MM-DD",
        required=False,
        description=description,
    )


def _when(description: str) -> UnionField:
    return UnionField(
        options=(
            EnumField(values=WHEN_VALUES),
            StringField(pattern=DATE_PATTERN),
            StringField(pattern=DATETIME_PATTERN),
        ),
        message=(
            "Invalid when value. Use today, tomorrow, evening, anytime, someday, "
            "YYYY-MM-DD or YYYY-MM-DD@HH:MM"
        ),
        required=False,
        description=description,
    )


def _tags() -> ArrayField:
    return ArrayField(
        items=StringField(max_length=MAX_TAG_LENGTH),
        max_items=MAX_TAGS,
        max_message="Too many tags",
        required=False,
        description="Tags to apply (must already exist in Things)",
    )


def _flag(description: str) -> BooleanField:
    return BooleanField(required=False, description=description)


def _name(description: str) -> StringField:
    return StringField(max_length=MAX_TITLE, required=False, description=description)


def _max_results() -> NumberField:
    return NumberField(
        integer=True,
        minimum=1,
        maximum=1000,
        required=False,
        description="Maximum number of results to return",
    )


def _required_id(label: str, description: str) -> StringField:
    return StringField(
        min_length=1,
        min_message=f"{label} is required",
        description=description,
    )


# ── Add / update ─────────────────────────────────────────────────

_TODO_COMMON: dict[str, Field] = {
    "notes": _notes(),
    "when": _when(
        "When to schedule: today, tomorrow, evening, anytime, someday, "
        "YYYY-MM-DD or YYYY-MM-DD@HH:MM"
    ),
    "deadline": _date("Deadline date in YYYY-MM-DD format"),
    "tags": _tags(),
    "checklist_items": ArrayField(
        items=StringField(max_length=MAX_TITLE),
        max_items=MAX_CHECKLIST,
        max_message="Too many checklist items",
        required=False,
        description="Checklist items to add",
    ),
    "list_id": StringField(required=False, description="ID of the project or area to add to"),
    "list": _name("Name of the project or area to add to"),
    "heading": _name("Heading within the project"),
    "completed": _flag("Whether the to-do is completed"),
    "canceled": _flag("Whether the to-do is canceled"),
}

_PROJECT_COMMON: dict[str, Field] = {
    "notes": _notes("Project description"),
    "when": _when(
        "When to start: today, tomorrow, evening, anytime, someday, "
        "YYYY-MM-DD or YYYY-MM-DD@HH:MM"
    ),
    "deadline": _date("Deadline date in YYYY-MM-DD format"),
    "tags": _tags(),
    "area_id": StringField(required=False, description="ID of the area to add to"),
    "area": _name("Name of the area to add to"),
    "completed": _flag("Whether the project is completed"),
    "canceled": _flag("Whether the project is canceled"),
}

CHECKLIST_ITEM = ObjectField(
    fields={
        "title": StringField(
            min_length=1,
            max_length=MAX_TITLE,
            min_message="Checklist item title is required",
            max_message="Title too long",
        ),
        "completed": BooleanField(default=False),
    },
)

TODO_ITEM = ObjectField(
    fields={
        "type": LiteralField(value="todo"),
        "title": StringField(
            min_length=1,
            max_length=MAX_TITLE,
            min_message="Todo title is required",
            max_message="Title too long",
        ),
        "notes": _notes(),
        "when": _when("When to schedule the to-do"),
        "deadline": _date("Deadline date in YYYY-MM-DD format"),
        "tags": _tags(),
        "completed": _flag("Whether the to-do is completed"),
        "canceled": _flag("Whether the to-do is canceled"),
        "checklist": ArrayField(
            items=CHECKLIST_ITEM,
            max_items=MAX_CHECKLIST,
            max_message="Too many checklist items",
            required=False,
            description="Checklist entries for the to-do",
        ),
    },
)

HEADING_ITEM = ObjectField(
    fields={
        "type": LiteralField(value="heading"),
        "title": StringField(
            min_length=1,
            max_length=MAX_TITLE,
            min_message="Heading title is required",
            max_message="Title too long",
        ),
        "archived": BooleanField(default=False),
    },
)

PROJECT_ITEMS_DESCRIPTION = (
    "Ordered, flat list of to-dos and headings. A heading is a divider: "
    "the to-dos that follow it are grouped under it. Do not nest to-dos "
    "inside headings."
)


def _project_items(*, required: bool, min_items: int | None = None) -> ArrayField:
    return ArrayField(
        items=DiscriminatedUnionField(
            discriminator="type",
            options={"todo": TODO_ITEM, "heading": HEADING_ITEM},
        ),
        min_items=min_items,
        max_items=MAX_PROJECT_ITEMS,
        max_message="Too many items",
        required=required,
        description=PROJECT_ITEMS_DESCRIPTION,
    )


ADD_TODO = ObjectField(
    fields={"title": _title(description="Title of the to-do"), **_TODO_COMMON},
)

ADD_PROJECT = ObjectField(
    fields={
        "title": _title(description="Title of the project"),
        **_PROJECT_COMMON,
        "items": _project_items(required=False),
    },
)

UPDATE_TODO = ObjectField(
    fields={
        "id": _required_id("ID", "ID of the to-do to update"),
        "title": _title(required=False, description="New title"),
        **_TODO_COMMON,
    },
)

UPDATE_PROJECT = ObjectField(
    fields={
        "id": _required_id("ID", "ID of the project to update"),
        "title": _title(required=False, description="New title"),
        **_PROJECT_COMMON,
    },
)

ADD_ITEMS_TO_PROJECT = ObjectField(
    fields={
        "project_id": _required_id(
            "Project ID", "ID of the project (get from things_get_projects)"
        ),
        "items": _project_items(required=True, min_items=1),
    },
)


# ── Read ─────────────────────────────────────────────────────────

GET_LIST = ObjectField(fields={"max_results": _max_results()})

NO_PARAMS = ObjectField(fields={})

GET_PROJECT = ObjectField(
    fields={
        "project_id": _required_id(
            "Project ID", "ID of the project (get from things_get_projects)"
        ),
        "max_results": _max_results(),
    },
)

GET_AREA = ObjectField(
    fields={
        "area_id": _required_id("Area ID", "ID of the area (get from things_get_areas)"),
        "max_results": _max_results(),
    },
)

GET_TODO_DETAILS = ObjectField(
    fields={
        "id": _required_id(
            "Todo ID", "ID of the to-do to get detailed information for"
        ),
    },
)


# ── Navigation ───────────────────────────────────────────────────

SHOW = ObjectField(
    fields={
        "id": StringField(
            required=False,
            description="ID of a specific to-do, project, or area",
        ),
        "query": _name(
            "Navigate to a list: " + ", ".join(SHOW_LISTS) + ", or a project/area name"
        ),
        "filter": ArrayField(
            items=StringField(max_length=MAX_TAG_LENGTH),
            max_items=MAX_TAGS,
            required=False,
            description="Filter by tags when showing a list",
        ),
    },
    require_one_of=("id", "query"),
    require_one_of_message="Either id or query must be provided",
)

SEARCH = ObjectField(
    fields={
        "query": _name("Search query (leave empty to just open search)"),
    },
)
