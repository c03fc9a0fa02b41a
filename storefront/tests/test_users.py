"""
Tests for user registration and login.
"""
import pytest

from storefront.errors import AuthenticationError, ConflictError, ValidationError
from storefront.auth.passwords import PASSWORD_NO_DIGIT, PASSWORD_NO_UPPERCASE, PASSWORD_TOO_SHORT


async def test_register_user(user_service, token_service):
    user, token = await user_service.register_user("new@example.com", "Passw0rd1")

    assert user.id.startswith("user_")
    assert user.email == "new@example.com"
    assert user.is_admin is False
    assert user.created_at == user.updated_at

    token_data = token_service.verify_token(token)
    assert token_data.user_id == user.id
    assert token_data.email == "new@example.com"
    assert token_data.is_admin is False


async def test_register_admin_user(user_service, token_service):
    user, token = await user_service.register_user("boss@example.com", "Passw0rd1", is_admin=True)
    assert user.is_admin is True
    assert token_service.verify_token(token).is_admin is True


@pytest.mark.parametrize("email,password", [(None, "Passw0rd1"), ("a@b.com", None), ("", "")])
async def test_register_requires_both_fields(user_service, email, password):
    with pytest.raises(ValidationError) as exc:
        await user_service.register_user(email, password)
    assert exc.value.message == "Email and password are required"


async def test_register_rejects_bad_email(user_service):
    with pytest.raises(ValidationError) as exc:
        await user_service.register_user("user @example.com", "Passw0rd1")
    assert exc.value.message == "Invalid email format"


async def test_register_reports_every_password_rule(user_service):
    with pytest.raises(ValidationError) as exc:
        await user_service.register_user("a@b.com", "short")
    assert exc.value.message == ", ".join(
        [PASSWORD_TOO_SHORT, PASSWORD_NO_UPPERCASE, PASSWORD_NO_DIGIT]
    )


async def test_register_duplicate_email(user_service):
    await user_service.register_user("dup@example.com", "Passw0rd1")
    with pytest.raises(ConflictError):
        await user_service.register_user("dup@example.com", "Different1")


async def test_email_match_is_case_sensitive(user_service):
    await user_service.register_user("Case@example.com", "Passw0rd1")
    user, _ = await user_service.register_user("case@example.com", "Passw0rd1")
    assert user.email == "case@example.com"

    with pytest.raises(AuthenticationError):
        await user_service.authenticate_user("CASE@example.com", "Passw0rd1")


async def test_authenticate_user(user_service, token_service):
    registered, _ = await user_service.register_user("login@example.com", "Passw0rd1")
    user, token = await user_service.authenticate_user("login@example.com", "Passw0rd1")

    assert user.id == registered.id
    assert token_service.verify_token(token).user_id == registered.id


async def test_wrong_password_and_unknown_email_fail_the_same(user_service):
    await user_service.register_user("login@example.com", "Passw0rd1")

    with pytest.raises(AuthenticationError) as wrong_password:
        await user_service.authenticate_user("login@example.com", "WrongPass1")
    with pytest.raises(AuthenticationError) as unknown_email:
        await user_service.authenticate_user("nobody@example.com", "Passw0rd1")

    assert wrong_password.value.message == unknown_email.value.message


async def test_authenticate_requires_both_fields(user_service):
    with pytest.raises(ValidationError):
        await user_service.authenticate_user("login@example.com", None)


async def test_get_user_by_id(user_service):
    registered, _ = await user_service.register_user("me@example.com", "Passw0rd1")

    user = await user_service.get_user_by_id(registered.id)
    assert user.email == "me@example.com"
    assert await user_service.get_user_by_id("user_missing") is None
