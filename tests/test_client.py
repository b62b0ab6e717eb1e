import httpx
import pytest

from client.api_client import MarketplaceClient
from conftest import PASSWORD, design_payload


@pytest.fixture
def api(client):
    return MarketplaceClient(base_url="http://testserver/api", http=client)


def test_register_login_and_me(api):
    registered = api.register_designer(
        "Dee Designer",
        "designer@studio.com",
        PASSWORD,
        bio="Logos",
        portfolio_link="https://dee.studio.com",
    )
    assert registered.success
    assert registered.status_code == 201
    assert registered.data["designer"]["portfolioLink"] == "https://dee.studio.com"
    assert api.token is None

    login = api.login("designer@studio.com", PASSWORD)
    assert login.success
    assert api.token == login.data["token"]

    me = api.me()
    assert me.success
    assert me.data["user"]["role"] == "DESIGNER"

    api.logout()
    assert api.token is None
    assert api.me().status_code == 401


def test_error_responses_are_normalized(api):
    bad = api.register_buyer("", "nope", "short")
    assert not bad.success
    assert bad.status_code == 400
    assert bad.error == "Validation failed"
    assert {e["field"] for e in bad.errors} >= {"name", "email", "password"}

    denied = api.login("nobody@shop.com", PASSWORD)
    assert not denied.success
    assert denied.status_code == 401
    assert denied.error == "Invalid credentials"
    assert api.token is None


def test_design_lifecycle_through_client(api, admin):
    api.register_designer("Dee Designer", "designer@studio.com", PASSWORD)
    api.login("designer@studio.com", PASSWORD)

    payload = design_payload()
    created = api.create_design(
        title=payload["title"],
        category=payload["category"],
        price=payload["price"],
        file_url=payload["fileUrl"],
        watermarked_preview_url=payload["watermarkedPreviewUrl"],
        description=payload["description"],
    )
    assert created.success
    design_id = created.data["design"]["id"]

    updated = api.update_design(design_id, price=30)
    assert updated.data["design"]["price"] == 30

    uploaded = api.upload_file("preview.png", b"png-bytes")
    assert uploaded.success
    assert uploaded.data["url"].startswith("/uploads/")

    api.set_token(admin["token"])
    assert api.get_dashboard_stats().data["data"]["pendingDesigns"] == 1
    assert api.moderate_design(design_id, "APPROVED", reason="ok").success

    api.logout()
    listing = api.get_designs(category="logos", sort_by="price-high", page=1, limit=5)
    assert [d["id"] for d in listing.data["designs"]] == [design_id]
    assert api.get_design(design_id).data["design"]["price"] == 30


def test_admin_calls_through_client(api, admin, buyer):
    api.set_token(admin["token"])

    users = api.get_all_users(role="BUYER", search="")
    assert [u["email"] for u in users.data["data"]["users"]] == ["buyer@shop.com"]

    status = api.update_user_status(buyer["user"]["id"], "SUSPENDED", reason="spam")
    assert status.data["data"]["status"] == "SUSPENDED"

    assert api.get_all_transactions(status="COMPLETED").data["data"]["transactions"] == []
    assert api.get_all_withdrawals().data["data"]["withdrawals"] == []
    assert api.get_reports(report_type="USER").data["data"]["reports"] == []
    assert api.get_all_designs_admin(status="PENDING").data["data"]["designs"] == []
    assert api.get_design_admin(9999).status_code == 404

    missing = api.process_withdrawal(9999, "APPROVED")
    assert missing.status_code == 404
    assert missing.error == "Withdrawal not found"

    assert api.delete_user(buyer["user"]["id"]).success
    assert api.get_user_admin(buyer["user"]["id"]).status_code == 404


def test_token_is_persisted_between_clients(client, buyer, tmp_path):
    token_path = tmp_path / "session" / "token"
    first = MarketplaceClient(base_url="http://testserver/api", http=client, token_path=token_path)
    first.login("buyer@shop.com", PASSWORD)
    assert token_path.read_text() == first.token

    second = MarketplaceClient(base_url="http://testserver/api", http=client, token_path=token_path)
    assert second.token == first.token
    assert second.me().success

    second.logout()
    assert not token_path.exists()


def test_transport_failure_is_reported_not_raised():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = MarketplaceClient(
        base_url="http://api.invalid/api",
        http=httpx.Client(transport=httpx.MockTransport(refuse)),
    )
    response = api.get_designs()
    assert not response.success
    assert response.status_code is None
    assert "connection refused" in response.error
