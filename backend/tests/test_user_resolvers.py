from jose import jwt

from conftest import error_code
from staffgraph.models.user import User

REGISTER = """
mutation Register($input: RegisterInput!) {
  register(input: $input) { token }
}
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token }
}
"""

ME = "query { me { id name email role createdAt updatedAt } }"

UPDATE_PROFILE = """
mutation UpdateProfile($input: UpdateProfileInput!) {
  updateProfile(input: $input) { id name email role }
}
"""

CHANGE_PASSWORD = """
mutation ChangePassword($current: String!, $new: String!) {
  changePassword(currentPassword: $current, newPassword: $new) { success message }
}
"""


def _claim(token):
    return jwt.get_unverified_claims(token)["user"]


# ---------- register ----------

def test_register_returns_token_with_default_employee_role(gql, db):
    result = gql(REGISTER, {"input": {"name": "Ann", "email": "Ann@Test.io ", "password": "password-1"}})

    assert result.errors is None
    claim = _claim(result.data["register"]["token"])
    assert claim["role"] == "EMPLOYEE"
    assert claim["email"] == "ann@test.io"

    stored = db.query(User).filter(User.email == "ann@test.io").one()
    assert stored.password_hash != "password-1"
    assert stored.check_password("password-1")


def test_register_accepts_admin_role(gql):
    result = gql(REGISTER, {"input": {"name": "Boss", "email": "boss@test.io", "password": "password-1", "role": "ADMIN"}})
    assert _claim(result.data["register"]["token"])["role"] == "ADMIN"


def test_register_duplicate_email_is_rejected_without_write(gql, db, staff):
    result = gql(REGISTER, {"input": {"name": "Again", "email": "STAFF@test.io", "password": "password-1"}})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "Email already exists"
    assert db.query(User).count() == 1


def test_unique_index_rejects_registration_missed_by_lookup(gql, db, staff, monkeypatch):
    monkeypatch.setattr("staffgraph.services.users.email_taken", lambda *args, **kwargs: False)

    result = gql(REGISTER, {"input": {"name": "Again", "email": "staff@test.io", "password": "password-1"}})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "Email already exists"

    # rolled back, so the session keeps working
    ok = gql(REGISTER, {"input": {"name": "New", "email": "new@test.io", "password": "password-1"}})
    assert ok.errors is None
    assert db.query(User).count() == 2


def test_unique_index_rejects_profile_email_missed_by_lookup(gql, db, staff, admin, monkeypatch):
    monkeypatch.setattr("staffgraph.services.users.email_taken", lambda *args, **kwargs: False)

    result = gql(UPDATE_PROFILE, {"input": {"email": "admin@test.io"}}, user=staff)

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "Email already exists"
    db.refresh(staff)
    assert staff.email == "staff@test.io"


def test_register_short_password_is_rejected(gql, db):
    result = gql(REGISTER, {"input": {"name": "Ann", "email": "ann@test.io", "password": "short"}})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "Password must be at least 8 characters"
    assert db.query(User).count() == 0


# ---------- login ----------

def test_login_returns_token_for_valid_credentials(gql, staff):
    result = gql(LOGIN, {"email": "Staff@Test.io", "password": "staff-pass-1"})

    assert result.errors is None
    assert _claim(result.data["login"]["token"])["id"] == staff.id


def test_login_failures_share_one_message(gql, staff):
    unknown = gql(LOGIN, {"email": "nobody@test.io", "password": "staff-pass-1"})
    wrong = gql(LOGIN, {"email": "staff@test.io", "password": "wrong-password"})

    for result in (unknown, wrong):
        assert error_code(result) == "BAD_USER_INPUT"
        assert result.errors[0].message == "Invalid email or password"


# ---------- me ----------

def test_me_requires_authentication(gql):
    result = gql(ME)
    assert error_code(result) == "UNAUTHENTICATED"
    assert result.errors[0].message == "Not authenticated"


def test_me_returns_current_user(gql, staff):
    result = gql(ME, user=staff)

    me = result.data["me"]
    assert me["id"] == staff.id
    assert me["email"] == "staff@test.io"
    assert me["role"] == "EMPLOYEE"
    assert me["createdAt"].endswith("Z")


def test_me_for_vanished_user_is_authentication_error(gql, db, staff):
    db.delete(staff)
    db.commit()

    result = gql(ME, user=staff)

    assert error_code(result) == "UNAUTHENTICATED"
    assert result.errors[0].message == "User not found"


# ---------- updateProfile ----------

def test_update_profile_changes_only_given_fields(gql, staff):
    result = gql(UPDATE_PROFILE, {"input": {"name": "Renamed"}}, user=staff)

    assert result.errors is None
    assert result.data["updateProfile"]["name"] == "Renamed"
    assert result.data["updateProfile"]["email"] == "staff@test.io"


def test_update_profile_ignores_blank_values(gql, staff):
    result = gql(UPDATE_PROFILE, {"input": {"name": "", "email": "  "}}, user=staff)

    assert result.data["updateProfile"]["name"] == "Staff"
    assert result.data["updateProfile"]["email"] == "staff@test.io"


def test_update_profile_rejects_email_of_another_user(gql, staff, admin):
    result = gql(UPDATE_PROFILE, {"input": {"email": "admin@test.io"}}, user=staff)

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "Email already exists"


def test_update_profile_allows_keeping_own_email(gql, staff):
    result = gql(UPDATE_PROFILE, {"input": {"email": "STAFF@test.io", "name": "Same"}}, user=staff)

    assert result.errors is None
    assert result.data["updateProfile"]["email"] == "staff@test.io"


def test_update_profile_requires_authentication(gql):
    result = gql(UPDATE_PROFILE, {"input": {"name": "x"}})
    assert error_code(result) == "UNAUTHENTICATED"


# ---------- changePassword ----------

def test_change_password_wrong_current_is_a_result_not_an_error(gql, db, staff):
    before = staff.password_hash

    result = gql(CHANGE_PASSWORD, {"current": "nope-nope", "new": "new-password-1"}, user=staff)

    assert result.errors is None
    assert result.data["changePassword"] == {"success": False, "message": "Current password is incorrect"}
    db.refresh(staff)
    assert staff.password_hash == before


def test_change_password_short_new_password_is_a_result(gql, db, staff):
    before = staff.password_hash

    result = gql(CHANGE_PASSWORD, {"current": "staff-pass-1", "new": "short"}, user=staff)

    assert result.data["changePassword"] == {
        "success": False,
        "message": "New password must be at least 8 characters",
    }
    db.refresh(staff)
    assert staff.password_hash == before


def test_change_password_success_rehashes(gql, db, staff):
    result = gql(CHANGE_PASSWORD, {"current": "staff-pass-1", "new": "brand-new-pass"}, user=staff)

    assert result.data["changePassword"] == {"success": True, "message": "Password changed successfully"}
    db.refresh(staff)
    assert staff.check_password("brand-new-pass")
    assert not staff.check_password("staff-pass-1")

    login = gql(LOGIN, {"email": "staff@test.io", "password": "brand-new-pass"})
    assert login.errors is None


def test_change_password_for_vanished_user_is_input_error(gql, db, staff):
    db.delete(staff)
    db.commit()

    result = gql(CHANGE_PASSWORD, {"current": "staff-pass-1", "new": "brand-new-pass"}, user=staff)

    assert error_code(result) == "BAD_USER_INPUT"
    assert result.errors[0].message == "User not found"


def test_change_password_requires_authentication(gql):
    result = gql(CHANGE_PASSWORD, {"current": "a", "new": "b"})
    assert error_code(result) == "UNAUTHENTICATED"
