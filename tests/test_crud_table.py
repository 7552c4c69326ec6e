import pytest

from admissions_console.schemas.table import ColumnDescriptor
from admissions_console.services.crud_table import (
    CRUDTable,
    TableAction,
    render_value,
    sort_records,
)


COLUMNS = [
    {"key": "name", "label": "Campus Name", "sortable": True},
    {"key": "city", "label": "City", "sortable": True},
    {"key": "country", "label": "Country", "filterable": True},
    {"key": "capacity", "label": "Capacity", "type": "number", "sortable": True},
    {"key": "facilities", "label": "Facilities", "type": "array", "filterable": True},
    {"key": "is_active", "label": "Active", "type": "boolean"},
]


def _campuses():
    return [
        {"id": "1", "name": "North Campus", "city": "Leeds", "country": "UK",
         "capacity": 1200, "facilities": ["Library", "Gym"], "is_active": True},
        {"id": "2", "name": "Harbour Campus", "city": "Cork", "country": "Ireland",
         "capacity": None, "facilities": [], "is_active": False},
        {"id": "3", "name": "City Campus", "city": "London", "country": "UK",
         "capacity": 300, "facilities": ["Library", "Gym", "Lab", "Pool"], "is_active": True},
    ]


def test_search_is_case_insensitive_and_does_not_mutate_data():
    data = _campuses()
    table = CRUDTable(data, COLUMNS)
    table.set_search("lEEDs")
    visible = table.visible_rows()
    assert [row["id"] for row in visible] == ["1"]
    assert len(table.data) == 3
    assert data == _campuses()


def test_longer_search_never_shows_more_rows():
    table = CRUDTable(_campuses(), COLUMNS)
    counts = []
    for query in ["", "c", "ca", "cam", "camp", "campus", "city campus"]:
        table.set_search(query)
        counts.append(len(table.visible_rows()))
    assert counts == sorted(counts, reverse=True)
    assert counts[-1] == 1


def test_search_matches_array_values():
    table = CRUDTable(_campuses(), COLUMNS)
    table.set_search("pool")
    assert [row["id"] for row in table.visible_rows()] == ["3"]


def test_toggle_sort_cycles_and_resets_on_new_column():
    table = CRUDTable(_campuses(), COLUMNS)
    table.toggle_sort("name")
    assert (table.sort_key, table.sort_direction) == ("name", "asc")
    assert [r["name"] for r in table.visible_rows()] == [
        "City Campus", "Harbour Campus", "North Campus"]

    table.toggle_sort("name")
    assert table.sort_direction == "desc"
    assert [r["name"] for r in table.visible_rows()] == [
        "North Campus", "Harbour Campus", "City Campus"]

    table.toggle_sort("name")
    assert table.sort_direction == "asc"

    table.toggle_sort("name")
    table.toggle_sort("city")
    assert (table.sort_key, table.sort_direction) == ("city", "asc")


def test_none_values_sort_last_in_both_directions():
    table = CRUDTable(_campuses(), COLUMNS)
    table.toggle_sort("capacity")
    assert [r["capacity"] for r in table.visible_rows()] == [300, 1200, None]
    table.toggle_sort("capacity")
    assert [r["capacity"] for r in table.visible_rows()] == [1200, 300, None]


def test_sort_falls_back_to_text_for_mixed_types():
    rows = [{"v": "b"}, {"v": 10}, {"v": "a"}]
    ordered = sort_records(rows, "v", "asc")
    assert len(ordered) == 3
    assert {r["v"] for r in ordered} == {"a", "b", 10}


def test_sorting_an_unsortable_column_raises():
    table = CRUDTable(_campuses(), COLUMNS)
    with pytest.raises(ValueError):
        table.toggle_sort("country")


def test_filters_use_exact_match_and_array_membership():
    table = CRUDTable(_campuses(), COLUMNS)
    table.set_filter("country", "uk")
    assert {r["id"] for r in table.visible_rows()} == {"1", "3"}

    table.set_filter("facilities", "Lab")
    assert [r["id"] for r in table.visible_rows()] == ["3"]

    table.clear_filters()
    assert len(table.visible_rows()) == 3

    with pytest.raises(ValueError):
        table.set_filter("city", "Leeds")


def test_array_cell_shows_three_chips_and_overflow():
    column = ColumnDescriptor(key="facilities", label="Facilities", type="array")
    cell = render_value(["Library", "Gym", "Lab", "Pool"], column)
    assert cell.chips == ["Library", "Gym", "Lab"]
    assert cell.overflow == "+1"

    empty = render_value([], column)
    assert empty.kind == "placeholder"


def test_cell_rendering_by_column_type():
    assert render_value(True, ColumnDescriptor(key="a", label="A", type="boolean")).checked is True
    assert render_value(12500, ColumnDescriptor(key="a", label="A", type="number")).text == "12,500"
    color = render_value("#3B82F6", ColumnDescriptor(key="a", label="A", type="color"))
    assert color.swatch == "#3B82F6"
    badge = render_value("Active", ColumnDescriptor(key="a", label="A", type="badge"))
    assert badge.badge_variant == "success"
    date = render_value("2024-03-05T10:00:00Z", ColumnDescriptor(key="a", label="A", type="date"))
    assert date.text == "Mar 05, 2024"


def test_missing_column_key_renders_placeholder():
    table = CRUDTable(_campuses(), COLUMNS + [{"key": "does_not_exist", "label": "Ghost"}])
    view = table.render()
    assert all(row.cells[-1].text == "-" for row in view.rows)


def test_default_actions_come_before_custom_actions():
    calls = []
    table = CRUDTable(
        _campuses(),
        COLUMNS,
        actions=[TableAction("archive", "Archive", lambda row: calls.append(("archive", row["id"])))],
        on_edit=lambda row: calls.append(("edit", row["id"])),
        on_delete=lambda row: calls.append(("delete", row["id"])),
        on_duplicate=lambda row: calls.append(("duplicate", row["id"])),
    )
    assert [a.id for a in table.actions] == ["edit", "duplicate", "delete", "archive"]
    assert table.actions[2].variant == "destructive"

    row = table.visible_rows()[0]
    table.invoke("archive", row)
    table.invoke("edit", row)
    assert calls == [("archive", "1"), ("edit", "1")]

    with pytest.raises(KeyError):
        table.invoke("publish", row)


def test_table_without_actions_has_no_actions_column():
    view = CRUDTable(_campuses(), COLUMNS).render()
    assert view.has_actions_column is False
    assert view.show_add_button is False
    assert all(row.actions == [] for row in view.rows)


def test_render_reports_empty_state_only_when_not_loading():
    view = CRUDTable([], COLUMNS, empty_message="No campuses found.").render()
    assert view.empty_message == "No campuses found."
    assert view.total_count == 0

    loading = CRUDTable([], COLUMNS, loading=True).render()
    assert loading.empty_message is None
    assert loading.loading is True


def test_render_marks_sorted_header_and_keys_rows_by_id():
    table = CRUDTable(_campuses(), COLUMNS, on_add=lambda: "opened")
    table.toggle_sort("capacity")
    view = table.render()
    directions = {h.key: h.sort_direction for h in view.headers}
    assert directions["capacity"] == "asc"
    assert directions["name"] is None
    assert [row.key for row in view.rows] == ["3", "1", "2"]
    assert view.show_add_button is True
    assert table.add() == "opened"


def test_descending_sort_mirrors_ascending_for_ties():
    rows = [{"id": 1, "v": 5}, {"id": 2, "v": 5}, {"id": 3, "v": 1}, {"id": 4, "v": None}]
    ascending = sort_records(rows, "v", "asc")
    descending = sort_records(rows, "v", "desc")

    assert [row["id"] for row in ascending] == [3, 1, 2, 4]
    assert [row["id"] for row in descending] == [2, 1, 3, 4]
    assert descending[:-1] == list(reversed(ascending[:-1]))
