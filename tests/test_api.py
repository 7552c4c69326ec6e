from fastapi import status

from admissions_console.controllers.configuration_controller import to_http_exception
from admissions_console.core.exceptions import NotFoundError
from admissions_console.seeds.master_data_seed import seed_master_data
from admissions_console.services.entity_registry import REQUIREMENT

BASE = "/api/v1/configuration"


def _create_program(client, headers, **overrides):
    payload = {"name": "Data Science BSc", "code": "DS-BSC"}
    payload.update(overrides)
    response = client.post(f"{BASE}/programs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_requests_without_token_are_rejected(client):
    response = client.get(f"{BASE}/programs")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"

    response = client.get(f"{BASE}/programs", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_create_and_get_program(client, admin_headers, admin_user):
    created = _create_program(client, admin_headers)
    assert created["user_id"] == str(admin_user.id)
    assert created["delivery_method"] == "on-campus"

    response = client.get(f"{BASE}/programs/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["code"] == "DS-BSC"


def test_blank_required_field_is_a_bad_request(client, admin_headers):
    response = client.post(f"{BASE}/programs", json={"name": "   ", "code": "X"},
                           headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Name is required"


def test_malformed_body_is_unprocessable(client, admin_headers):
    response = client.post(f"{BASE}/programs", json={"name": "No code"}, headers=admin_headers)
    assert response.status_code == 422


def test_list_supports_search_filters_and_sort(client, admin_headers):
    _create_program(client, admin_headers)
    _create_program(client, admin_headers, name="Law LLM", code="LAW-LLM", type="graduate")
    _create_program(client, admin_headers, name="Architecture BA", code="ARC-BA")

    response = client.get(f"{BASE}/programs", headers=admin_headers)
    assert [p["name"] for p in response.json()] == [
        "Architecture BA", "Data Science BSc", "Law LLM"]

    response = client.get(f"{BASE}/programs", params={"search": "law"}, headers=admin_headers)
    assert [p["code"] for p in response.json()] == ["LAW-LLM"]

    response = client.get(f"{BASE}/programs", params={"type": "graduate"}, headers=admin_headers)
    assert [p["code"] for p in response.json()] == ["LAW-LLM"]

    response = client.get(f"{BASE}/programs",
                          params={"sort_by": "code", "sort_direction": "desc"},
                          headers=admin_headers)
    assert [p["code"] for p in response.json()] == ["LAW-LLM", "DS-BSC", "ARC-BA"]

    response = client.get(f"{BASE}/programs", params={"sort_by": "description"},
                          headers=admin_headers)
    assert response.status_code == 400


def test_rendered_table(client, admin_headers):
    response = client.get(f"{BASE}/campuses/table", headers=admin_headers)
    assert response.status_code == 200
    view = response.json()
    assert view["rows"] == []
    assert view["empty_message"] == "No campuses found. Add your first campus to get started."

    client.post(f"{BASE}/campuses",
                json={"name": "City Campus", "facilities": ["Library", "Gym", "Lab", "Pool"]},
                headers=admin_headers)
    view = client.get(f"{BASE}/campuses/table", headers=admin_headers).json()
    keys = [header["key"] for header in view["headers"]]
    cell = view["rows"][0]["cells"][keys.index("facilities")]
    assert cell["chips"] == ["Library", "Gym", "Lab"]
    assert cell["overflow"] == "+1"


def test_update_duplicate_and_toggle(client, admin_headers):
    created = _create_program(client, admin_headers)

    response = client.put(f"{BASE}/programs/{created['id']}",
                          json={"status": "archived"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "archived"
    assert response.json()["name"] == "Data Science BSc"

    response = client.post(f"{BASE}/programs/{created['id']}/duplicate", headers=admin_headers)
    assert response.status_code == 201
    copy = response.json()
    assert copy["name"] == "Data Science BSc (Copy)"
    assert copy["id"] != created["id"]

    response = client.patch(f"{BASE}/programs/{created['id']}/toggle-active",
                            headers=admin_headers)
    assert response.json()["is_active"] is False


def test_delete_requires_manager_role(client, admin_headers, advisor_headers):
    created = _create_program(client, admin_headers)

    response = client.delete(f"{BASE}/programs/{created['id']}", headers=advisor_headers)
    assert response.status_code == 403

    response = client.delete(f"{BASE}/programs/{created['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Program deleted successfully"

    response = client.get(f"{BASE}/programs/{created['id']}", headers=admin_headers)
    assert response.status_code == 404

    response = client.delete(f"{BASE}/programs/{created['id']}", headers=admin_headers)
    assert response.status_code == 404


def test_defaults_are_independent_copies(client, admin_headers):
    first = client.get(f"{BASE}/requirements/defaults", headers=admin_headers).json()
    assert first["applicable_programs"] == ["All Programs"]
    assert first["category"] == "Custom"

    copy = REQUIREMENT.form_defaults()
    copy["applicable_programs"].append("Law LLM")
    copy["category"] = "Changed"
    assert REQUIREMENT.defaults["applicable_programs"] == ["All Programs"]

    second = client.get(f"{BASE}/requirements/defaults", headers=admin_headers).json()
    assert second == first


def test_section_catalog(client, admin_headers):
    response = client.get(f"{BASE}/sections", headers=admin_headers)
    catalog = response.json()
    assert catalog["categories"][0] == "Data & Database"
    assert catalog["total_count"] == sum(len(g["sections"]) for g in catalog["groups"])

    response = client.get(f"{BASE}/sections", params={"category": "Integration"},
                          headers=admin_headers)
    groups = response.json()["groups"]
    assert [g["category"] for g in groups] == ["Integration"]

    response = client.get(f"{BASE}/sections/resolve",
                          params={"path": "/admin/configuration/call-types"},
                          headers=admin_headers)
    assert response.json()["section_id"] == "call-types"

    detail = client.get(f"{BASE}/sections/programs", headers=admin_headers).json()
    assert detail["slug"] == "programs"
    assert detail["required_fields"] == ["name", "code"]
    assert detail["defaults"]["color"] == "#3B82F6"

    assert client.get(f"{BASE}/sections/nope", headers=admin_headers).status_code == 404


def test_routing_match_endpoint(client, admin_headers):
    client.post(f"{BASE}/lead-routing", json={
        "name": "Scholarship leads",
        "priority": 1,
        "conditions": [{"type": "score_range", "min_score": 80}],
        "assignment_config": {"method": "direct", "advisor_id": "adv-7"},
    }, headers=admin_headers)

    response = client.post(f"{BASE}/lead-routing/match",
                           json={"lead": {"lead_score": 91}}, headers=admin_headers)
    body = response.json()
    assert body["matched"] is True
    assert body["assignment_config"] == {"method": "direct", "advisor_id": "adv-7"}

    response = client.post(f"{BASE}/lead-routing/match",
                           json={"lead": {"lead_score": 12}}, headers=admin_headers)
    assert response.json()["matched"] is False


def test_seeded_template_preview(client, db, admin_headers):
    counts = seed_master_data(db)
    assert counts == {"lead_status": 6, "lead_priority": 4, "communication_template": 3}
    # seeding twice updates in place
    seed_master_data(db)

    templates = client.get(f"{BASE}/communication-templates", params={"type": "email"},
                           headers=admin_headers).json()
    assert len(templates) == 1
    welcome = templates[0]

    response = client.post(
        f"{BASE}/communication-templates/{welcome['id']}/preview",
        json={"data": {"first_name": "Ada", "institution_name": "Northfield"}},
        headers=admin_headers,
    )
    preview = response.json()
    assert preview["subject"] == "Welcome to Northfield, Ada"
    assert preview["missing_variables"] == ["program_name", "advisor_name"]

    statuses = client.get(f"{BASE}/lead-statuses", headers=admin_headers).json()
    assert [s["name"] for s in statuses][:2] == ["New", "Contacted"]
    assert len(statuses) == 6


def test_non_numeric_lead_score_does_not_match(client, admin_headers):
    client.post(f"{BASE}/lead-routing", json={
        "name": "Scholarship leads",
        "priority": 1,
        "conditions": [{"type": "score_range", "min_score": 80}],
    }, headers=admin_headers)

    response = client.post(f"{BASE}/lead-routing/match",
                           json={"lead": {"lead_score": "91"}}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["matched"] is True

    response = client.post(f"{BASE}/lead-routing/match",
                           json={"lead": {"lead_score": "high"}}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["matched"] is False


def test_record_template_usage(client, admin_headers):
    response = client.post(f"{BASE}/communication-templates", json={
        "name": "Interview invite", "type": "meeting",
        "content": "Hi {{first_name}}, your interview is on {{date}}.",
    }, headers=admin_headers)
    assert response.status_code == 201
    template = response.json()
    assert template["variables"] == ["first_name", "date"]

    response = client.post(f"{BASE}/communication-templates/{template['id']}/usage",
                           headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Template used 1 times"

    stored = client.get(f"{BASE}/communication-templates/{template['id']}",
                        headers=admin_headers).json()
    assert stored["usage_count"] == 1

    missing = "00000000-0000-0000-0000-000000000000"
    response = client.post(f"{BASE}/communication-templates/{missing}/usage",
                           headers=admin_headers)
    assert response.status_code == 404


def test_list_column_filter_matches_membership(client, admin_headers):
    client.post(f"{BASE}/campuses", json={"name": "City Campus", "facilities": ["Library", "Lab"]},
                headers=admin_headers)
    client.post(f"{BASE}/campuses", json={"name": "Harbour Campus", "facilities": ["Gym"]},
                headers=admin_headers)

    response = client.get(f"{BASE}/campuses", params={"facilities": "Lab"}, headers=admin_headers)
    assert [c["name"] for c in response.json()] == ["City Campus"]

    response = client.get(f"{BASE}/campuses", params={"facilities": "Pool"}, headers=admin_headers)
    assert response.json() == []


def test_only_missing_records_map_to_not_found():
    missing = to_http_exception(NotFoundError("Program not found"), "retrieving program")
    assert missing.status_code == status.HTTP_404_NOT_FOUND

    invalid = to_http_exception(ValueError("Referenced program not found in catalog"),
                                "creating requirement")
    assert invalid.status_code == status.HTTP_400_BAD_REQUEST
    assert invalid.detail == "Referenced program not found in catalog"
