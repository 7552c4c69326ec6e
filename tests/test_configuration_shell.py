import logging

import pytest

from admissions_console.core.notifications import CollectingNotifier, LoggingNotifier
from admissions_console.services.configuration_screen import ScreenPhase
from admissions_console.services.configuration_shell import (
    CONFIGURATION_SECTIONS,
    ConfigurationShell,
    resolve_initial_section,
)
from admissions_console.services.entity_registry import ENTITY_DESCRIPTORS


def test_every_entity_has_a_section():
    entities = {section.entity for section in CONFIGURATION_SECTIONS if section.entity}
    assert entities == set(ENTITY_DESCRIPTORS)
    ids = [section.id for section in CONFIGURATION_SECTIONS]
    assert len(ids) == len(set(ids))


def test_categories_keep_registry_order(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    assert shell.categories() == [
        "Data & Database",
        "Communication",
        "Team Management",
        "Process Management",
        "Integration",
    ]


def test_search_matches_label_or_description(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    shell.set_search("SLA")
    assert [s.id for s in shell.filtered_sections()] == ["lead-priorities"]

    shell.set_search("recruiter")
    assert [s.id for s in shell.filtered_sections()] == ["external-teams"]


def test_category_filter_and_grouping(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    shell.select_category("Team Management")
    grouped = shell.grouped_sections()
    assert list(grouped) == ["Team Management"]
    assert [s.id for s in grouped["Team Management"]] == ["internal-teams", "external-teams"]

    shell.select_category(None)
    shell.set_search("templates")
    grouped = shell.grouped_sections()
    assert "Integration" not in grouped
    assert {s.id for s in grouped["Communication"]} >= {
        "communication-templates", "document-templates"}


def test_no_matches_yields_no_groups(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    shell.set_search("zzz-nothing")
    assert shell.filtered_sections() == []
    assert shell.grouped_sections() == {}


@pytest.mark.parametrize("path, expected", [
    (None, "programs"),
    ("/admin/configuration", "programs"),
    ("/admin/configuration/campuses", "campuses"),
    ("/admin/configuration/lead-routing/rules", "lead-routing"),
    ("/admin/configuration/lead-statuses?tab=1", "lead-statuses"),
    ("/admin/configuration/unknown", "programs"),
    ("/somewhere/else", "programs"),
])
def test_resolve_initial_section(path, expected):
    assert resolve_initial_section(path) == expected


def test_shell_mounts_exactly_one_screen(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity, pathname="/admin/configuration/campuses")
    assert shell.active_section_id == "campuses"

    screen = shell.open()
    assert screen is shell.active_screen
    assert screen.descriptor.key == "campus"
    assert screen.phase == ScreenPhase.LOADED

    shell.select("call-types")
    assert shell.active_screen is not screen
    assert shell.active_screen.descriptor.key == "call_type"


def test_placeholder_section_has_no_screen(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    shell.open()
    assert shell.select("workflows") is None
    assert shell.active_screen is None
    assert shell.active_section.placeholder


def test_selecting_unknown_section_raises(db, notifier, identity):
    shell = ConfigurationShell(db, notifier, identity)
    with pytest.raises(ValueError):
        shell.select("does-not-exist")


def test_default_notifier_keeps_and_logs_outcomes(db, caplog):
    shell = ConfigurationShell(db)
    assert isinstance(shell.notifier, CollectingNotifier)
    assert isinstance(shell.notifier.forward, LoggingNotifier)

    screen = shell.open()
    screen.open_create()
    screen.set_field("name", "Data Science BSc")
    screen.set_field("code", "DS-BSC")
    with caplog.at_level(logging.WARNING, logger="admissions_console.core.notifications"):
        assert screen.save() is False

    assert shell.notifier.last.description == "Not authenticated"
    assert "Error: Not authenticated" in caplog.text
