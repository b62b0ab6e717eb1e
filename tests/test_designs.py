from conftest import auth_headers, design_payload, register_designer
from models import DesignStatus


def test_create_design_is_pending(client, designer, create_design):
    design = create_design(designer)
    assert design["status"] == "PENDING"
    assert design["designerId"] == designer["designer"]["id"]
    assert design["title"] == "Mountain Logo"
    assert design["price"] == 25
    assert design["fileUrl"] == "https://cdn.studio.com/files/mountain.ai"


def test_create_requires_designer_role(client, buyer):
    resp = client.post(
        "/api/designs", json=design_payload(), headers=auth_headers(buyer["token"])
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == "Forbidden"


def test_create_requires_token(client):
    resp = client.post("/api/designs", json=design_payload())
    assert resp.status_code == 401


def test_urls_are_stored_as_given(client, designer, create_design):
    design = create_design(
        designer,
        fileUrl="https://cdn.studio.com",
        watermarkedPreviewUrl="https://cdn.studio.com/p.png?v=2",
    )
    assert design["fileUrl"] == "https://cdn.studio.com"
    assert design["watermarkedPreviewUrl"] == "https://cdn.studio.com/p.png?v=2"


def test_create_validation(client, designer):
    resp = client.post(
        "/api/designs",
        json=design_payload(title="ab", price=0, fileUrl="not-a-url"),
        headers=auth_headers(designer["token"]),
    )
    assert resp.status_code == 400
    fields = {error["field"] for error in resp.json()["errors"]}
    assert {"title", "price", "fileUrl"} <= fields


def test_pending_design_is_not_public(client, designer, create_design):
    design = create_design(designer)

    listing = client.get("/api/designs").json()
    assert listing["designs"] == []
    assert listing["pagination"]["total"] == 0

    resp = client.get(f"/api/designs/{design['id']}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Design not found"


def test_approved_design_is_public(client, designer, create_design, set_design_status):
    design = create_design(designer)
    set_design_status(design["id"], DesignStatus.APPROVED)

    listing = client.get("/api/designs").json()
    assert [d["id"] for d in listing["designs"]] == [design["id"]]
    summary = listing["designs"][0]
    assert summary["designer"] == {
        "id": designer["designer"]["id"],
        "name": "Dee Designer",
        "rating": 0,
    }
    assert "fileUrl" not in summary

    detail = client.get(f"/api/designs/{design['id']}").json()["design"]
    assert detail["status"] == "APPROVED"
    assert detail["designer"]["bio"] == "Logos and lettering"
    assert "fileUrl" not in detail


def test_public_list_filters_and_sorting(client, designer, create_design, set_design_status):
    cheap = create_design(designer, title="Cheap Icon", category="icons", price=5)
    mid = create_design(designer, title="Mid Logo", category="logos", price=20)
    pricey = create_design(
        designer, title="Pricey Logo", category="logos", price=80, description="Gold foil"
    )
    hidden = create_design(designer, title="Hidden Logo", category="logos", price=1)
    for design in (cheap, mid, pricey):
        set_design_status(design["id"], DesignStatus.APPROVED)
    set_design_status(hidden["id"], DesignStatus.REJECTED)

    def ids(**params):
        return [d["id"] for d in client.get("/api/designs", params=params).json()["designs"]]

    assert ids(sortBy="price-low") == [cheap["id"], mid["id"], pricey["id"]]
    assert ids(sortBy="price-high") == [pricey["id"], mid["id"], cheap["id"]]
    assert set(ids(category="logos")) == {mid["id"], pricey["id"]}
    assert ids(search="GOLD") == [pricey["id"]]
    assert ids(search="icon") == [cheap["id"]]
    # no ranking data yet, so these fall back to newest first
    assert set(ids(sortBy="popular")) == {cheap["id"], mid["id"], pricey["id"]}


def test_public_list_rejects_unknown_sort(client):
    resp = client.get("/api/designs", params={"sortBy": "cheapest"})
    assert resp.status_code == 400


def test_public_list_pagination(client, designer, create_design, set_design_status):
    for i in range(5):
        design = create_design(designer, title=f"Design {i}")
        set_design_status(design["id"], DesignStatus.APPROVED)

    body = client.get("/api/designs", params={"page": 2, "limit": 2}).json()
    assert len(body["designs"]) == 2
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}

    last = client.get("/api/designs", params={"page": 3, "limit": 2}).json()
    assert len(last["designs"]) == 1


def test_update_own_design(client, designer, create_design):
    design = create_design(designer)
    resp = client.put(
        f"/api/designs/{design['id']}",
        json={"title": "Mountain Mark", "price": 40},
        headers=auth_headers(designer["token"]),
    )
    assert resp.status_code == 200
    updated = resp.json()["design"]
    assert updated["title"] == "Mountain Mark"
    assert updated["price"] == 40
    assert updated["description"] == "A minimalist mountain mark"
    assert updated["status"] == "PENDING"


def test_update_cannot_touch_other_fields(client, designer, create_design):
    design = create_design(designer)
    resp = client.put(
        f"/api/designs/{design['id']}",
        json={"status": "APPROVED", "designerId": 999},
        headers=auth_headers(designer["token"]),
    )
    assert resp.status_code == 200
    assert resp.json()["design"]["status"] == "PENDING"
    assert resp.json()["design"]["designerId"] == designer["designer"]["id"]


def test_designer_cannot_modify_another_designers_design(client, designer, create_design):
    design = create_design(designer)
    rival = register_designer(client, email="rival@studio.com", name="Rival")

    update = client.put(
        f"/api/designs/{design['id']}",
        json={"price": 1},
        headers=auth_headers(rival["token"]),
    )
    assert update.status_code == 403
    assert update.json()["error"] == "Not authorized to update this design"

    delete = client.delete(
        f"/api/designs/{design['id']}", headers=auth_headers(rival["token"])
    )
    assert delete.status_code == 403
    assert delete.json()["error"] == "Not authorized to delete this design"

    # untouched
    update = client.put(
        f"/api/designs/{design['id']}",
        json={},
        headers=auth_headers(designer["token"]),
    )
    assert update.json()["design"]["price"] == 25


def test_missing_design_is_404_before_ownership(client, designer):
    resp = client.put(
        "/api/designs/9999", json={"price": 10}, headers=auth_headers(designer["token"])
    )
    assert resp.status_code == 404
    resp = client.delete("/api/designs/9999", headers=auth_headers(designer["token"]))
    assert resp.status_code == 404


def test_delete_own_design(client, designer, create_design, set_design_status):
    design = create_design(designer)
    set_design_status(design["id"], DesignStatus.APPROVED)

    resp = client.delete(
        f"/api/designs/{design['id']}", headers=auth_headers(designer["token"])
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Design deleted successfully"}
    assert client.get(f"/api/designs/{design['id']}").status_code == 404


def test_public_designer_profile(client, designer, create_design, set_design_status):
    approved = create_design(designer, title="Shown")
    create_design(designer, title="Not yet")
    set_design_status(approved["id"], DesignStatus.APPROVED)

    resp = client.get(f"/api/users/designers/{designer['designer']['id']}")
    assert resp.status_code == 200
    profile = resp.json()["designer"]
    assert profile["name"] == "Dee Designer"
    assert profile["bio"] == "Logos and lettering"
    assert [d["title"] for d in profile["designs"]] == ["Shown"]


def test_unknown_designer_profile(client):
    resp = client.get("/api/users/designers/9999")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Designer not found"


def test_designer_to_buyer_browse_flow(client, admin, buyer, designer):
    """A design goes from upload through moderation to the public catalogue."""
    created = client.post(
        "/api/designs",
        json=design_payload(title="Wave Pattern", category="patterns", price=12),
        headers=auth_headers(designer["token"]),
    ).json()["design"]

    browse = client.get("/api/designs", headers=auth_headers(buyer["token"])).json()
    assert browse["designs"] == []

    moderated = client.put(
        f"/api/admin/designs/{created['id']}/moderate",
        json={"status": "APPROVED"},
        headers=auth_headers(admin["token"]),
    )
    assert moderated.status_code == 200

    browse = client.get(
        "/api/designs",
        params={"category": "patterns"},
        headers=auth_headers(buyer["token"]),
    ).json()
    assert [d["title"] for d in browse["designs"]] == ["Wave Pattern"]
    assert browse["designs"][0]["designer"]["name"] == "Dee Designer"


def test_rejecting_an_approved_design_hides_it(client, admin, designer, create_design):
    admin_headers = auth_headers(admin["token"])
    design = create_design(designer, title="Ann's Logo")

    def moderate(status):
        resp = client.put(
            f"/api/admin/designs/{design['id']}/moderate",
            json={"status": status},
            headers=admin_headers,
        )
        assert resp.status_code == 200

    moderate("APPROVED")
    assert [d["id"] for d in client.get("/api/designs").json()["designs"]] == [design["id"]]

    moderate("REJECTED")
    listing = client.get("/api/designs").json()
    assert listing["designs"] == []
    assert listing["pagination"]["total"] == 0
    assert client.get(f"/api/designs/{design['id']}").status_code == 404

    admin_listing = client.get("/api/admin/designs", headers=admin_headers).json()
    assert [(d["id"], d["status"]) for d in admin_listing["data"]["designs"]] == [
        (design["id"], "REJECTED")
    ]


def test_same_filtered_page_is_stable(client, designer, create_design, set_design_status):
    for i in range(6):
        design = create_design(designer, title=f"Logo {i}", price=10 + i % 2)
        set_design_status(design["id"], DesignStatus.APPROVED)

    params = {"category": "logos", "sortBy": "price-low", "page": 2, "limit": 2}
    first = client.get("/api/designs", params=params).json()
    second = client.get("/api/designs", params=params).json()
    assert [d["id"] for d in first["designs"]] == [d["id"] for d in second["designs"]]
    assert first["pagination"] == second["pagination"]
    assert first["pagination"]["total"] == 6
