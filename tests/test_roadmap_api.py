# File: tests/test_roadmap_api.py

"""
End-to-end tests of the roadmap and item endpoints, including the move
scenario and cross-user isolation.
"""

import pytest
from sqlalchemy import update

from app.main import app
from app.models.item import Item


def create_roadmap(client, name="JS", category="Frontend", description=None) -> dict:
    resp = client.post("/api/v1/roadmaps/", json={"name": name, "category": category, "description": description})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_item(client, roadmap_id, title, description="") -> dict:
    resp = client.post("/api/v1/items/", json={"title": title, "description": description, "roadmap_id": roadmap_id})
    assert resp.status_code == 201, resp.text
    return resp.json()


def titles(client, roadmap_id) -> list[str]:
    resp = client.get(f"/api/v1/roadmaps/{roadmap_id}")
    assert resp.status_code == 200
    return [item["title"] for item in resp.json()["items"]]


@pytest.fixture
def alice(login):
    return login("alice")


@pytest.fixture
def js(alice):
    roadmap = create_roadmap(alice)
    items = {title: create_item(alice, roadmap["id"], title) for title in ("Syntax", "Functions", "DOM")}
    return roadmap, items


def test_requests_without_session_are_rejected(api):
    client = api()
    assert client.get("/api/v1/roadmaps/").status_code == 401
    assert client.get("/api/v1/items/").status_code == 401
    assert client.post("/api/v1/items/move", json={"id": 1, "direction": "up"}).status_code == 401


def test_create_roadmap_derives_slug(alice):
    roadmap = create_roadmap(alice, name="Machine Learning 101", category="Data")
    assert roadmap["slug"] == "machine-learning-101"

    again = create_roadmap(alice, name="Machine Learning 101", category="Data")
    assert again["slug"] != roadmap["slug"]
    assert again["slug"].startswith("machine-learning-101-")

    by_slug = alice.get(f"/api/v1/roadmaps/slug/{roadmap['slug']}")
    assert by_slug.status_code == 200
    assert by_slug.json()["roadmap"]["id"] == roadmap["id"]


def test_list_roadmaps_grouped_by_category(alice):
    create_roadmap(alice, name="Vue", category="Frontend")
    django = create_roadmap(alice, name="Django", category="Backend")
    create_item(alice, django["id"], "Models")

    body = alice.get("/api/v1/roadmaps/").json()

    assert [(r["category"], r["name"], r["item_count"]) for r in body["roadmaps"]] == [
        ("Backend", "Django", 1),
        ("Frontend", "Vue", 0),
    ]
    assert list(body["categorized"]) == ["Backend", "Frontend"]
    assert body["categorized"]["Backend"][0]["name"] == "Django"


def test_update_roadmap_keeps_slug(alice):
    roadmap = create_roadmap(alice, name="Old")
    resp = alice.patch(f"/api/v1/roadmaps/{roadmap['id']}", json={"name": "New", "description": "d"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "New"
    assert resp.json()["description"] == "d"
    assert resp.json()["slug"] == "old"


def test_item_positions_and_move_scenario(alice, js):
    roadmap, items = js
    assert [items[t]["position"] for t in ("Syntax", "Functions", "DOM")] == [1, 2, 3]

    resp = alice.post("/api/v1/items/move", json={"id": items["Functions"]["id"], "direction": "up"})
    assert resp.status_code == 200
    assert resp.json() == {"id": items["Functions"]["id"], "direction": "up", "position": 1}
    assert titles(alice, roadmap["id"]) == ["Functions", "Syntax", "DOM"]

    again = alice.post("/api/v1/items/move", json={"id": items["Functions"]["id"], "direction": "up"})
    assert again.status_code == 409
    assert "first" in again.json()["detail"]

    last = alice.post("/api/v1/items/move", json={"id": items["DOM"]["id"], "direction": "down"})
    assert last.status_code == 409
    assert "last" in last.json()["detail"]
    assert titles(alice, roadmap["id"]) == ["Functions", "Syntax", "DOM"]

    assert create_item(alice, roadmap["id"], "Async")["position"] == 4


def test_move_rejects_unknown_direction(alice, js):
    _, items = js
    resp = alice.post("/api/v1/items/move", json={"id": items["DOM"]["id"], "direction": "sideways"})
    assert resp.status_code == 422


def test_delete_item_renumbers_followers(alice, js):
    roadmap, items = js
    assert alice.delete(f"/api/v1/items/{items['Syntax']['id']}").status_code == 204

    listed = alice.get(f"/api/v1/roadmaps/{roadmap['id']}").json()["items"]
    assert [(i["title"], i["position"]) for i in listed] == [("Functions", 1), ("DOM", 2)]

    # Moving after a delete still finds its neighbour
    resp = alice.post("/api/v1/items/move", json={"id": items["DOM"]["id"], "direction": "up"})
    assert resp.status_code == 200
    assert titles(alice, roadmap["id"]) == ["DOM", "Functions"]


def test_edit_and_toggle_item(alice, js):
    _, items = js
    item_id = items["DOM"]["id"]

    resp = alice.put(f"/api/v1/items/{item_id}", json={"title": "DOM API", "description": "querySelector"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "DOM API"
    assert resp.json()["modified_at"] is not None
    assert resp.json()["position"] == 3

    toggled = alice.post(f"/api/v1/items/{item_id}/finished")
    assert toggled.json() == {"id": item_id, "is_finished": True}
    assert alice.get(f"/api/v1/items/{item_id}").json()["is_finished"] is True


def test_list_all_items_sorted_by_position(alice, js):
    other = create_roadmap(alice, name="CSS")
    create_item(alice, other["id"], "Selectors")

    listed = alice.get("/api/v1/items/").json()
    assert [i["position"] for i in listed] == sorted(i["position"] for i in listed)
    assert len(listed) == 4


def test_blank_titles_are_rejected(alice, js):
    roadmap, _ = js
    resp = alice.post("/api/v1/items/", json={"title": "   ", "description": "", "roadmap_id": roadmap["id"]})
    assert resp.status_code == 400


def test_delete_roadmap_removes_its_items(alice, js):
    roadmap, items = js
    assert alice.delete(f"/api/v1/roadmaps/{roadmap['id']}").status_code == 204

    assert alice.get(f"/api/v1/roadmaps/{roadmap['id']}").status_code == 404
    assert alice.get(f"/api/v1/items/{items['DOM']['id']}").status_code == 404
    assert alice.get("/api/v1/items/").json() == []


def test_other_users_data_looks_missing(login, alice, js):
    roadmap, items = js
    bob = login("bob")
    item_id = items["Functions"]["id"]

    assert bob.get(f"/api/v1/roadmaps/{roadmap['id']}").status_code == 404
    assert bob.get(f"/api/v1/roadmaps/slug/{roadmap['slug']}").status_code == 404
    assert bob.patch(f"/api/v1/roadmaps/{roadmap['id']}", json={"name": "x"}).status_code == 404
    assert bob.delete(f"/api/v1/roadmaps/{roadmap['id']}").status_code == 404
    assert bob.get(f"/api/v1/items/{item_id}").status_code == 404
    assert bob.put(f"/api/v1/items/{item_id}", json={"title": "x", "description": ""}).status_code == 404
    assert bob.post(f"/api/v1/items/{item_id}/finished").status_code == 404
    assert bob.post("/api/v1/items/move", json={"id": item_id, "direction": "up"}).status_code == 404
    assert bob.delete(f"/api/v1/items/{item_id}").status_code == 404
    assert bob.post("/api/v1/items/", json={"title": "x", "roadmap_id": roadmap["id"]}).status_code == 404

    # Same answer as for ids that do not exist at all
    assert bob.get("/api/v1/items/99999").json() == bob.get(f"/api/v1/items/{item_id}").json()

    assert bob.get("/api/v1/roadmaps/").json() == {"roadmaps": [], "categorized": {}}
    assert bob.get("/api/v1/items/").json() == []
    assert titles(alice, roadmap["id"]) == ["Syntax", "Functions", "DOM"]


def test_position_gap_surfaces_as_generic_error(alice, js, session_factory):
    _, items = js
    with session_factory() as session:
        session.execute(update(Item).where(Item.id == items["DOM"]["id"]).values(position=7))
        session.commit()

    resp = alice.post("/api/v1/items/move", json={"id": items["Functions"]["id"], "direction": "down"})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error."}


def test_unknown_roadmap_ids_leave_no_lock_entries(alice):
    for roadmap_id in range(1000, 1050):
        resp = alice.post("/api/v1/items/", json={"title": "x", "roadmap_id": roadmap_id})
        assert resp.status_code == 404
        assert alice.delete(f"/api/v1/roadmaps/{roadmap_id}").status_code == 404

    assert len(app.state.roadmap_locks) == 0
