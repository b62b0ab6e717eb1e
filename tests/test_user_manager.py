import pytest

from core.exceptions import AuthenticationError, ConflictError, NotFoundError
from models import Role, UserStatus
from utils.user_manager import UserManager


@pytest.fixture
def manager(db):
    return UserManager(db)


def test_create_admin(manager):
    user = manager.create_admin("Ada", "ada@market.com", "password123")
    assert user.role is Role.ADMIN
    assert user.verified is True
    assert user.status is UserStatus.ACTIVE
    assert user.designer is None and user.buyer is None


def test_duplicate_email_conflicts(manager):
    manager.register_buyer("Bea", "bea@shop.com", "password123")
    with pytest.raises(ConflictError, match="User already exists"):
        manager.create_admin("Bea again", "bea@shop.com", "password123")


def test_authenticate(manager):
    created = manager.register_designer("Dee", "dee@studio.com", "password123", bio="")
    assert created.designer.bio is None
    assert manager.authenticate("dee@studio.com", "password123").id == created.id
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        manager.authenticate("dee@studio.com", "password124")


def test_designer_lookups(manager):
    user = manager.register_designer("Dee", "dee@studio.com", "password123")
    assert manager.get_designer_for_user(user.id).id == user.designer.id
    assert manager.get_designer(user.designer.id).user.email == "dee@studio.com"

    buyer = manager.register_buyer("Bea", "bea@shop.com", "password123")
    with pytest.raises(NotFoundError, match="Designer profile not found"):
        manager.get_designer_for_user(buyer.id)
    with pytest.raises(NotFoundError, match="Designer not found"):
        manager.get_designer(9999)


def test_update_status_and_delete(manager):
    user_id = manager.register_buyer("Bea", "bea@shop.com", "password123").id
    assert manager.update_status(user_id, UserStatus.SUSPENDED).status is UserStatus.SUSPENDED

    manager.delete_user(user_id)
    with pytest.raises(NotFoundError):
        manager.get_user(user_id)
