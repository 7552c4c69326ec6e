import pytest
from pydantic import ValidationError

from admissions_console.schemas.rules import (
    CustomAssignment,
    CustomCondition,
    FieldInCondition,
    RoundRobinAssignment,
    ScoreRangeCondition,
    TeamAssignment,
    condition_matches,
    parse_assignment,
    parse_conditions,
)
from admissions_console.services.communication_template_service import (
    CommunicationTemplateService,
)
from admissions_console.services.crud_service import ConfigEntityService
from admissions_console.services.entity_registry import COMMUNICATION_TEMPLATE, ROUTING_RULE
from admissions_console.services.routing_service import find_matching_rule, route_lead


def test_conditions_parse_by_type_tag():
    conditions = parse_conditions([
        {"type": "field_in", "field": "country", "values": ["UK", "IE"]},
        {"type": "score_range", "min_score": 50},
        {"type": "custom", "params": {"source": "webinar"}},
    ])
    assert isinstance(conditions[0], FieldInCondition)
    assert isinstance(conditions[1], ScoreRangeCondition)
    assert isinstance(conditions[2], CustomCondition)


def test_unknown_condition_type_is_rejected():
    with pytest.raises(ValidationError):
        parse_conditions([{"type": "geo_fence", "radius": 5}])


def test_score_range_requires_a_bound_in_order():
    with pytest.raises(ValidationError):
        parse_conditions([{"type": "score_range"}])
    with pytest.raises(ValidationError):
        parse_conditions([{"type": "score_range", "min_score": 80, "max_score": 20}])


def test_assignment_defaults_to_round_robin():
    assert isinstance(parse_assignment(None), RoundRobinAssignment)
    assert isinstance(parse_assignment({"method": "team", "team_id": "t-1"}), TeamAssignment)
    custom = parse_assignment({"method": "custom", "params": {"weight": 2}})
    assert isinstance(custom, CustomAssignment)
    assert custom.params == {"weight": 2}


def test_condition_matching():
    lead = {"country": "UK", "lead_score": 72, "source": "webinar"}
    in_list, score, custom = parse_conditions([
        {"type": "field_in", "field": "country", "values": ["UK", "IE"]},
        {"type": "score_range", "min_score": 50, "max_score": 70},
        {"type": "custom", "params": {"source": "webinar"}},
    ])
    assert condition_matches(in_list, lead)
    assert not condition_matches(score, lead)
    assert condition_matches(custom, lead)
    assert not condition_matches(score, {"country": "UK"})


def _rule(db, user, **data):
    service = ConfigEntityService(ROUTING_RULE, db)
    payload = ROUTING_RULE.form_defaults()
    payload.update(data)
    return service.create_record(payload, user)


def test_first_matching_rule_by_priority_wins(db, admin_user):
    _rule(db, admin_user, name="Catch all", priority=100)
    uk = _rule(db, admin_user, name="UK leads", priority=10,
               conditions=[{"type": "field_equals", "field": "country", "value": "UK"}],
               assignment_config={"method": "team", "team_id": "uk-team"})
    _rule(db, admin_user, name="Inactive", priority=1, is_active=False)

    assert find_matching_rule(db, {"country": "UK"}).id == uk.id
    assert find_matching_rule(db, {"country": "FR"}).name == "Catch all"

    result = route_lead(db, {"country": "UK"})
    assert result.matched
    assert result.rule_name == "UK leads"
    assert result.assignment_config.team_id == "uk-team"


def test_no_rule_matches_without_catch_all(db, admin_user):
    _rule(db, admin_user, name="High score", priority=1,
          conditions=[{"type": "score_range", "min_score": 90}])
    assert route_lead(db, {"lead_score": 10}).matched is False


def test_template_variables_and_preview():
    variables = CommunicationTemplateService.extract_variables(
        "Hello {{ first_name }}", "Your program: {{program_name}}, {{first_name}}")
    assert variables == ["first_name", "program_name"]

    text = CommunicationTemplateService.replace_variables(
        "Hi {{first_name}}, see {{link}}", {"first_name": "Ada"})
    assert text == "Hi Ada, see {{link}}"


def test_score_range_coerces_numeric_text():
    (condition,) = parse_conditions([{"type": "score_range", "min_score": 80}])
    assert condition_matches(condition, {"lead_score": "91"})
    assert not condition_matches(condition, {"lead_score": "42.5"})
    assert not condition_matches(condition, {"lead_score": "high"})
    assert not condition_matches(condition, {"lead_score": ["91"]})


def test_template_variables_follow_subject_and_content(db, admin_user):
    service = ConfigEntityService(COMMUNICATION_TEMPLATE, db)
    template = service.create_record({
        "name": "Offer", "type": "email",
        "subject": "Offer for {{first_name}}",
        "content": "Dear {{first_name}}, welcome to {{program_name}}.",
    }, admin_user)
    assert template.variables == ["first_name", "program_name"]

    template = service.update_record(template.id, {"content": "See {{link}}"}, admin_user)
    assert template.variables == ["first_name", "link"]

    template = service.update_record(template.id, {"name": "Offer v2"}, admin_user)
    assert template.variables == ["first_name", "link"]

    explicit = service.create_record({
        "name": "Reminder", "type": "sms", "content": "Hi {{first_name}}",
        "variables": ["first_name", "deadline"],
    }, admin_user)
    assert explicit.variables == ["first_name", "deadline"]
