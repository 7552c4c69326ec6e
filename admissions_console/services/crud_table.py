"""
Generic CRUD Table

Renders any list of uniformly shaped records as a searchable, sortable,
actionable table. The table only knows about columns and callbacks; it never
reads or writes storage itself. Screens hand it their rows and wire the
add/edit/delete/duplicate callbacks to their own persistence calls.

Key Features:
- Free-text search over every column (case-insensitive substring)
- Exact-match filters on filterable columns
- Single-column sort toggling asc/desc, None values always last
- Type-driven cell rendering (boolean, badge, date, array, color, number)
- Default and custom row actions
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..core.config import settings
from ..schemas.table import (
    ColumnDescriptor, RenderedCell, SortDirection, TableHeader, TableRow, TableView
)

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"

BADGE_VARIANTS = {
    "active": "success",
    "published": "success",
    "completed": "success",
    "inactive": "secondary",
    "archived": "secondary",
    "draft": "outline",
    "pending": "warning",
    "suspended": "destructive",
    "urgent": "destructive",
    "high": "destructive",
}

RowHandler = Callable[[Any], Any]
ColumnLike = Union[ColumnDescriptor, Mapping[str, Any]]


@dataclass(frozen=True)
class TableAction:
    """A row-level button; the handler receives the row record."""
    id: str
    label: str
    handler: RowHandler
    variant: str = "ghost"


def get_value(row: Any, key: str) -> Any:
    """Read a field from a mapping or an attribute-style record."""
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def search_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return " ".join(search_text(item) for item in value)
    return str(value)


def compare_values(left: Any, right: Any) -> int:
    """Native ordering; values of incomparable types fall back to their text."""
    try:
        if left < right:
            return -1
        if left > right:
            return 1
        return 0
    except TypeError:
        left_text, right_text = str(left), str(right)
        return (left_text > right_text) - (left_text < right_text)


def sort_records(records: Iterable[Any], key: str, direction: SortDirection = "asc") -> List[Any]:
    """Sort records by one field; None values land last in either direction."""
    records = list(records)
    present = [row for row in records if get_value(row, key) is not None]
    missing = [row for row in records if get_value(row, key) is None]
    ordered = sorted(
        present,
        key=cmp_to_key(lambda a, b: compare_values(get_value(a, key), get_value(b, key)))
    )
    # descending is the exact mirror of ascending, ties included
    if direction == "desc":
        ordered = ordered[::-1]
    return ordered + missing


def format_date(value: Any, fmt: Optional[str] = None) -> str:
    fmt = fmt or settings.DATE_DISPLAY_FORMAT
    if isinstance(value, (datetime, date)):
        return value.strftime(fmt)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    return parsed.strftime(fmt)


def format_number(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    return f"{value:,}"


def render_value(value: Any, column: ColumnDescriptor) -> RenderedCell:
    """Render a single raw value according to the column type."""
    if value is None:
        return RenderedCell(kind="placeholder", text=PLACEHOLDER)

    if column.type == "boolean":
        return RenderedCell(kind="toggle", text="Yes" if value else "No", checked=bool(value))

    if column.type == "badge":
        text = str(value)
        return RenderedCell(
            kind="badge",
            text=text,
            badge_variant=BADGE_VARIANTS.get(text.lower(), "default")
        )

    if column.type == "date":
        return RenderedCell(kind="date", text=format_date(value))

    if column.type == "array":
        items = list(value) if isinstance(value, (list, tuple, set)) else [value]
        if not items:
            return RenderedCell(kind="placeholder", text=PLACEHOLDER)
        limit = settings.ARRAY_CHIP_LIMIT
        chips = [str(item) for item in items[:limit]]
        hidden = len(items) - len(chips)
        return RenderedCell(
            kind="chips",
            text=", ".join(str(item) for item in items),
            chips=chips,
            overflow=f"+{hidden}" if hidden > 0 else None
        )

    if column.type == "color":
        return RenderedCell(kind="color", text=str(value), swatch=str(value))

    if column.type == "number":
        return RenderedCell(kind="number", text=format_number(value))

    return RenderedCell(kind="text", text=str(value))


class CRUDTable:
    """
    Interactive view over an in-memory record list.

    Search, filters and sort only change which rows are visible and in what
    order; ``data`` itself is never modified.
    """

    def __init__(
        self,
        data: Iterable[Any],
        columns: Sequence[ColumnLike],
        *,
        actions: Optional[Sequence[TableAction]] = None,
        on_add: Optional[Callable[[], Any]] = None,
        on_edit: Optional[RowHandler] = None,
        on_delete: Optional[RowHandler] = None,
        on_duplicate: Optional[RowHandler] = None,
        loading: bool = False,
        title: Optional[str] = None,
        description: Optional[str] = None,
        search_placeholder: str = "Search...",
        empty_message: str = "No records found.",
        show_search: bool = True,
        show_add_button: bool = True,
        row_key: str = "id"
    ):
        self.data = list(data)
        self.columns = [
            column if isinstance(column, ColumnDescriptor) else ColumnDescriptor(**column)
            for column in columns
        ]
        self.on_add = on_add
        self.loading = loading
        self.title = title
        self.description = description
        self.search_placeholder = search_placeholder
        self.empty_message = empty_message
        self.show_search = show_search
        self.show_add_button = show_add_button
        self.row_key = row_key

        self.search = ""
        self.filters: Dict[str, Any] = {}
        self.sort_key: Optional[str] = None
        self.sort_direction: SortDirection = "asc"
        self.actions = self._build_actions(on_edit, on_duplicate, on_delete, actions or [])

    @staticmethod
    def _build_actions(on_edit, on_duplicate, on_delete, custom) -> List[TableAction]:
        actions = []
        if on_edit:
            actions.append(TableAction("edit", "Edit", on_edit))
        if on_duplicate:
            actions.append(TableAction("duplicate", "Duplicate", on_duplicate))
        if on_delete:
            actions.append(TableAction("delete", "Delete", on_delete, variant="destructive"))
        actions.extend(custom)
        return actions

    @property
    def has_actions_column(self) -> bool:
        return bool(self.actions)

    def column(self, key: str) -> Optional[ColumnDescriptor]:
        return next((c for c in self.columns if c.key == key), None)

    # Search / filter / sort

    def set_search(self, query: Optional[str]) -> None:
        self.search = query or ""

    def set_filter(self, key: str, value: Any) -> None:
        column = self.column(key)
        if column is None or not column.filterable:
            raise ValueError(f"Column '{key}' is not filterable")
        if value is None or value == "":
            self.filters.pop(key, None)
        else:
            self.filters[key] = value

    def clear_filters(self) -> None:
        self.filters.clear()

    def toggle_sort(self, key: str) -> None:
        """Sort by a column: asc first, then flip on every repeated click."""
        self._require_sortable(key)
        if self.sort_key == key:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_key = key
            self.sort_direction = "asc"

    def set_sort(self, key: Optional[str], direction: SortDirection = "asc") -> None:
        if key is None:
            self.sort_key = None
            self.sort_direction = "asc"
            return
        self._require_sortable(key)
        self.sort_key = key
        self.sort_direction = direction

    def _require_sortable(self, key: str) -> None:
        column = self.column(key)
        if column is None or not column.sortable:
            raise ValueError(f"Column '{key}' is not sortable")

    def matches_search(self, row: Any) -> bool:
        query = self.search.strip().lower()
        if not query:
            return True
        return any(
            query in search_text(get_value(row, column.key)).lower()
            for column in self.columns
        )

    def matches_filters(self, row: Any) -> bool:
        for key, expected in self.filters.items():
            value = get_value(row, key)
            if isinstance(value, (list, tuple, set)):
                if str(expected).lower() not in [search_text(v).lower() for v in value]:
                    return False
            elif search_text(value).lower() != search_text(expected).lower():
                return False
        return True

    def visible_rows(self) -> List[Any]:
        rows = [row for row in self.data if self.matches_filters(row) and self.matches_search(row)]
        if self.sort_key:
            rows = sort_records(rows, self.sort_key, self.sort_direction)
        return rows

    # Rendering

    def render_cell(self, row: Any, column: ColumnDescriptor) -> RenderedCell:
        return render_value(get_value(row, column.key), column)

    def _row_key(self, row: Any, index: int) -> str:
        value = get_value(row, self.row_key)
        return str(value) if value is not None else str(index)

    def render(self) -> TableView:
        rows = self.visible_rows()
        headers = [
            TableHeader(
                key=column.key,
                label=column.label,
                type=column.type,
                sortable=column.sortable,
                filterable=column.filterable,
                width=column.width,
                sort_direction=self.sort_direction if column.key == self.sort_key else None
            )
            for column in self.columns
        ]
        action_ids = [action.id for action in self.actions]
        rendered = [
            TableRow(
                key=self._row_key(row, index),
                cells=[self.render_cell(row, column) for column in self.columns],
                actions=action_ids
            )
            for index, row in enumerate(rows)
        ]
        return TableView(
            title=self.title,
            description=self.description,
            headers=headers,
            rows=rendered,
            has_actions_column=self.has_actions_column,
            show_search=self.show_search,
            show_add_button=self.show_add_button and self.on_add is not None,
            search_placeholder=self.search_placeholder,
            search=self.search,
            loading=self.loading,
            empty_message=None if rendered or self.loading else self.empty_message,
            total_count=len(self.data),
            visible_count=len(rendered)
        )

    # Actions

    def add(self) -> Any:
        if not self.show_add_button or self.on_add is None:
            logger.debug("Add requested on a table without an add action")
            return None
        return self.on_add()

    def invoke(self, action_id: str, row: Any) -> Any:
        for action in self.actions:
            if action.id == action_id:
                return action.handler(row)
        raise KeyError(f"Unknown table action: {action_id}")
