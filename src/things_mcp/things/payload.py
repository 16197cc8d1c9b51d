"""Build Things JSON command payloads.

Project contents are a flat, ordered list of ``to-do`` and ``heading``
records. A heading is a divider: the to-dos after it are shown under it
in Things, but they stay siblings in the list and are never nested
inside the heading record. Order is preserved exactly.

Tags are emitted as native string arrays.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# Validated parameter name -> Things JSON attribute name, for plain copies.
_TODO_ATTRIBUTES = {
    "title": "title",
    "notes": "notes",
    "when": "when",
    "deadline": "deadline",
    "list_id": "list-id",
    "list": "list",
    "heading": "heading",
}
_PROJECT_ATTRIBUTES = {
    "title": "title",
    "notes": "notes",
    "when": "when",
    "deadline": "deadline",
    "area_id": "area-id",
    "area": "area",
}
_FLAGS = ("completed", "canceled")


def _copy_attributes(
    params: Mapping[str, Any],
    names: Mapping[str, str],
) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for key, attr in names.items():
        value = params.get(key)
        if value:
            attributes[attr] = value
    if params.get("tags"):
        attributes["tags"] = list(params["tags"])
    for flag in _FLAGS:
        if params.get(flag) is not None:
            attributes[flag] = params[flag]
    return attributes


def checklist_item(title: str, completed: bool | None = None) -> dict[str, Any]:
    attributes: dict[str, Any] = {"title": title}
    if completed is not None:
        attributes["completed"] = completed
    return {"type": "checklist-item", "attributes": attributes}


def heading_item(title: str, archived: bool = False) -> dict[str, Any]:
    return {"type": "heading", "attributes": {"title": title, "archived": archived}}


class PayloadBuilder:
    """Turns validated tool parameters into Things JSON records."""

    def todo(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """A ``to-do`` record from add-todo style parameters.

        ``checklist_items`` are plain titles; ``checklist`` entries are
        ``{title, completed}`` objects as used inside project items.
        """
        attributes = _copy_attributes(params, _TODO_ATTRIBUTES)
        checklist = [
            checklist_item(title) for title in params.get("checklist_items") or ()
        ]
        checklist.extend(
            checklist_item(entry["title"], entry.get("completed"))
            for entry in params.get("checklist") or ()
        )
        if checklist:
            attributes["checklist-items"] = checklist
        return {"type": "to-do", "attributes": attributes}

    def project_items(
        self,
        items: Sequence[Mapping[str, Any]],
    ) -> list[dict[str, Any]]:
        """Map ``todo``/``heading`` items to Things records, order kept."""
        records: list[dict[str, Any]] = []
        for item in items:
            if item["type"] == "heading":
                records.append(heading_item(item["title"], bool(item.get("archived"))))
            else:
                records.append(self.todo(item))
        return records

    def project(self, params: Mapping[str, Any]) -> dict[str, Any]:
        attributes = _copy_attributes(params, _PROJECT_ATTRIBUTES)
        items = self.project_items(params.get("items") or ())
        if items:
            attributes["items"] = items
        return {"type": "project", "attributes": attributes}

    def add_to_project(
        self,
        project_id: str,
        items: Sequence[Mapping[str, Any]],
    ) -> dict[str, Any]:
        """An update record appending *items* to an existing project."""
        return {
            "type": "project",
            "operation": "update",
            "id": project_id,
            "attributes": {"items": self.project_items(items)},
        }
