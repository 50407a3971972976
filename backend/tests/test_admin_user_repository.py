import pytest

from staffdesk.core.errors import ConflictError, NotFoundError, ValidationError
from staffdesk.core.security import verify_password
from staffdesk.repositories import AdminUserRepository


def test_seeded_primary_admin_has_id_one(seeded_storage):
    admin = AdminUserRepository(seeded_storage).get_by_username("admin")

    assert admin.id == 1
    assert verify_password("password", admin.password_hash)


def test_create_hashes_password_and_lists_by_username(seeded_storage):
    repo = AdminUserRepository(seeded_storage)

    created = repo.create("  boris ", "pass1")

    assert created.username == "boris"
    assert created.password_hash != "pass1"
    assert [u.username for u in repo.list()] == ["admin", "boris"]


@pytest.mark.parametrize(
    ("username", "password"),
    [("", "pass1"), ("ab", "pass1"), ("boris", ""), ("boris", "abc")],
)
def test_create_enforces_minimum_lengths(seeded_storage, username, password):
    with pytest.raises(ValidationError):
        AdminUserRepository(seeded_storage).create(username, password)


def test_duplicate_username_is_a_conflict(seeded_storage):
    repo = AdminUserRepository(seeded_storage)
    repo.create("boris", "pass1")

    with pytest.raises(ConflictError, match="Username already exists"):
        repo.create("boris", "other-pass")


def test_cannot_create_account_named_after_actor(seeded_storage):
    with pytest.raises(ValidationError, match="own account"):
        AdminUserRepository(seeded_storage).create("admin", "pass1", actor="admin")


def test_delete_rules(seeded_storage):
    repo = AdminUserRepository(seeded_storage)
    boris = repo.create("boris", "pass1")
    clara = repo.create("clara", "pass1")

    with pytest.raises(ValidationError, match="your own account"):
        repo.delete(boris.id, actor_id=boris.id)
    with pytest.raises(ValidationError, match="primary admin"):
        repo.delete(1, actor_id=boris.id)
    with pytest.raises(NotFoundError):
        repo.delete(999, actor_id=1)

    repo.delete(clara.id, actor_id=boris.id)
    assert [u.username for u in repo.list()] == ["admin", "boris"]


def test_primary_admin_cannot_delete_itself(seeded_storage):
    with pytest.raises(ValidationError):
        AdminUserRepository(seeded_storage).delete(1, actor_id=1)


def test_new_account_never_takes_a_deleted_accounts_id(seeded_storage):
    repo = AdminUserRepository(seeded_storage)
    boris = repo.create("boris", "pass1")
    repo.delete(boris.id, actor_id=1)

    carl = repo.create("carl", "pass1")

    assert carl.id != boris.id
