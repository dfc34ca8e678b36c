"""Tests for the active filter endpoints."""

from memos_web.services import tag_service


def test_initial_filter_is_inactive(client):
    response = client.get("/filter/")
    assert response.status_code == 200
    assert response.json()["isActive"] is False


def test_set_and_clear_tag(client):
    response = client.put("/filter/tag", json={"value": "work"})
    assert response.json()["tag"] == "work"
    assert response.json()["isActive"] is True

    response = client.delete("/filter/tag")
    assert response.json()["tag"] is None
    assert response.json()["isActive"] is False


def test_removing_one_criterion_keeps_the_rest(client):
    client.put("/filter/tag", json={"value": "work"})
    client.put("/filter/text", json={"value": "meeting"})
    client.put("/filter/visibility", json={"value": "PUBLIC"})
    state = client.delete("/filter/text").json()
    assert state["text"] is None
    assert state["tag"] == "work"
    assert state["visibility"] == "PUBLIC"


def test_inverted_duration_is_not_active(client):
    state = client.put("/filter/duration", json={"from": 10, "to": 5}).json()
    assert state["isActive"] is False
    assert state["duration"] is None


def test_valid_duration_is_active(client):
    state = client.put("/filter/duration", json={"from": 5, "to": 10}).json()
    assert state["isActive"] is True
    assert state["duration"] == {"from": 5, "to": 10}


def test_invalid_memo_type(client):
    response = client.put("/filter/type", json={"value": "SHOUTING"})
    assert response.status_code == 400
    assert response.json()["error"] == "value-invalid"


def test_clear_on_route_change(client):
    client.put("/filter/tag", json={"value": "x"})
    client.put("/filter/shortcut", json={"shortcutId": 3})
    state = client.post("/filter/clear").json()
    assert state["isActive"] is False
    assert state["tag"] is None
    assert state["shortcutId"] is None


def test_filter_is_per_user(client):
    client.put("/filter/tag", json={"value": "x"}, headers={"X-User-Id": "5"})
    assert client.get("/filter/", headers={"X-User-Id": "6"}).json()["tag"] is None


def test_filter_chips_partial(client):
    client.put("/filter/tag", json={"value": "reading"})
    response = client.get("/filter/", headers={"HX-Request": "true"})
    assert response.status_code == 200
    assert "#reading" in response.text
    assert 'hx-delete="/filter/tag"' in response.text


def test_unknown_field(client):
    assert client.delete("/filter/color").status_code == 422


def test_dimensions(client, db_session):
    tag_service.upsert_tag(db_session, 1, "work")
    tag_service.upsert_tag(db_session, 1, "books")
    response = client.get("/filter/dimensions")
    assert response.status_code == 200
    dimensions = {d["type"]: d for d in response.json()}
    assert dimensions["TAG"]["values"] == ["books", "work"]
    assert dimensions["TAG"]["operators"] == ["CONTAIN", "NOT_CONTAIN"]
    assert dimensions["TEXT"]["values"] is None
    assert dimensions["VISIBILITY"]["values"] == ["PUBLIC", "PROTECTED", "PRIVATE"]
