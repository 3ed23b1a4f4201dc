"""
Unit tests for user use cases (Register, List, Update, Delete, CheckEmail).
"""
import logging
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from user_backend.application.use_cases.user.check_email import CheckEmailUseCase
from user_backend.application.use_cases.user.delete_user import DeleteUserUseCase
from user_backend.application.use_cases.user.list_users import ListUsersUseCase
from user_backend.application.use_cases.user.register_user import RegisterUserUseCase
from user_backend.application.use_cases.user.update_user import UpdateUserUseCase
from user_backend.core.security import verify_password
from user_backend.domain.exceptions import AppError, SchemaValidationError
from user_backend.domain.models.user import User

pytestmark = pytest.mark.unit

VALID_BODY = {
    "name": "Test User",
    "age": 25,
    "email": "test@example.com",
    "password": "Valid@123!",
}


async def _echo_save(user: User) -> User:
    user.id = user.id or "507f1f77bcf86cd799439011"
    return user


class TestRegisterUserUseCase:
    """Tests for RegisterUserUseCase"""

    @pytest.mark.asyncio
    async def test_register_success(self, mock_user_repo):
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.save.side_effect = _echo_save

        result = await RegisterUserUseCase(mock_user_repo).execute(VALID_BODY)

        assert result.to_wire() == {
            "_id": "507f1f77bcf86cd799439011",
            "name": "Test User",
            "email": "test@example.com",
            "age": 25,
        }
        saved: User = mock_user_repo.save.call_args.args[0]
        assert saved.password == "Valid@123!"
        assert saved.password_modified is True

    @pytest.mark.asyncio
    async def test_numeric_string_age_and_email_normalized(self, mock_user_repo):
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.save.side_effect = _echo_save

        result = await RegisterUserUseCase(mock_user_repo).execute(
            {**VALID_BODY, "age": "25", "email": "  Test@Example.COM "}
        )

        assert result.age == 25
        mock_user_repo.find_by_email.assert_awaited_once_with("test@example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, code",
        [
            ({**VALID_BODY, "extraParam": "x"}, "ERR_EXTRA_FIELDS"),
            ({"name": "", "age": "", "email": "", "password": ""}, "ERR_MISSING_FIELDS"),
            ({"name": "Ann", "age": 30, "email": "a@b.co"}, "ERR_MISSING_FIELDS"),
            ({**VALID_BODY, "name": "   "}, "ERR_MISSING_FIELDS"),
            ({**VALID_BODY, "name": 2}, "ERR_INVALID_NAME"),
            ({**VALID_BODY, "name": "User 1"}, "ERR_INVALID_NAME"),
            ({**VALID_BODY, "age": "abc"}, "ERR_INVALID_AGE"),
            ({**VALID_BODY, "age": -5}, "ERR_INVALID_AGE"),
            ({**VALID_BODY, "age": 300}, "ERR_INVALID_AGE"),
            ({**VALID_BODY, "age": 25.5}, "ERR_INVALID_AGE"),
        ],
    )
    async def test_rejected_before_touching_storage(self, mock_user_repo, body, code):
        with pytest.raises(AppError) as exc_info:
            await RegisterUserUseCase(mock_user_repo).execute(body)

        assert exc_info.value.code == code
        assert exc_info.value.status_code == 400
        mock_user_repo.find_by_email.assert_not_awaited()
        mock_user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_extra_fields_checked_before_missing_fields(self, mock_user_repo):
        with pytest.raises(AppError) as exc_info:
            await RegisterUserUseCase(mock_user_repo).execute({"extraParam": "x"})
        assert exc_info.value.code == "ERR_EXTRA_FIELDS"

    @pytest.mark.asyncio
    async def test_duplicate_email_raises(self, mock_user_repo, stored_user):
        mock_user_repo.find_by_email.return_value = stored_user()

        with pytest.raises(AppError) as exc_info:
            await RegisterUserUseCase(mock_user_repo).execute(VALID_BODY)

        assert exc_info.value.message == "EMAIL ALREADY IN USE!"
        assert exc_info.value.code == "ERR_EMAIL_IN_USE"
        mock_user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_schema_and_duplicate_key_errors_propagate(self, mock_user_repo):
        mock_user_repo.find_by_email.return_value = None
        use_case = RegisterUserUseCase(mock_user_repo)

        mock_user_repo.save.side_effect = SchemaValidationError({"email": "Please, insert a valid email!"})
        with pytest.raises(SchemaValidationError):
            await use_case.execute(VALID_BODY)

        mock_user_repo.save.side_effect = DuplicateKeyError("E11000", 11000)
        with pytest.raises(DuplicateKeyError):
            await use_case.execute(VALID_BODY)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self, mock_user_repo):
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.save.side_effect = RuntimeError("DB error")
        logger = MagicMock(spec=logging.Logger)

        with pytest.raises(AppError) as exc_info:
            await RegisterUserUseCase(mock_user_repo, logger=logger).execute(VALID_BODY)

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "ERR_REGISTER_FAILED"
        assert exc_info.value.message == "UNEXPECTED ERROR IN REGISTER FUNCTION!"
        assert exc_info.value.errors == ["DB error"]
        logger.error.assert_called_once()


class TestListUsersUseCase:
    """Tests for ListUsersUseCase"""

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_user_repo):
        mock_user_repo.find_all.return_value = []
        assert await ListUsersUseCase(mock_user_repo).execute() == []

    @pytest.mark.asyncio
    async def test_list_excludes_passwords(self, mock_user_repo, stored_user):
        mock_user_repo.find_all.return_value = [
            stored_user(name="Ann", email="ann@example.com"),
            stored_user(name="Bob", email="bob@example.com"),
        ]
        result = await ListUsersUseCase(mock_user_repo).execute()
        assert [user.name for user in result] == ["Ann", "Bob"]
        assert all("password" not in user.to_wire() for user in result)

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(self, mock_user_repo):
        mock_user_repo.find_all.side_effect = RuntimeError("connection refused")
        with pytest.raises(AppError) as exc_info:
            await ListUsersUseCase(mock_user_repo).execute()
        assert exc_info.value.code == "ERR_CHECKUSER_FAILED"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_unreadable_stored_user_is_wrapped(self, mock_user_repo, stored_user):
        broken = stored_user()
        broken.age = None
        mock_user_repo.find_all.return_value = [broken]
        with pytest.raises(AppError) as exc_info:
            await ListUsersUseCase(mock_user_repo).execute()
        assert exc_info.value.code == "ERR_CHECKUSER_FAILED"


class TestUpdateUserUseCase:
    """Tests for UpdateUserUseCase"""

    @pytest.fixture
    def existing(self, mock_user_repo, stored_user):
        user = stored_user()
        mock_user_repo.find_by_id.return_value = user
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.save.side_effect = _echo_save
        return user

    @pytest.mark.asyncio
    async def test_invalid_id(self, mock_user_repo):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute("not-an-id", {"name": "Ann"})
        assert exc_info.value.code == "ERR_INVALID_ID"
        assert exc_info.value.message == "UPDATE FUNCTION: INVALID USER ID FORMAT!"
        mock_user_repo.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_not_found(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = None
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(str(ObjectId()), {"name": "Ann"})
        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "ERR_USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_extra_fields(self, mock_user_repo, existing):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, {"role": "admin"})
        assert exc_info.value.code == "ERR_EXTRA_FIELDS"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": None}])
    async def test_no_fields_is_a_400(self, mock_user_repo, existing, body):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, body)
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "ERR_NO_FIELDS_TO_UPDATE"
        assert exc_info.value.message == "AT LEAST ONE FIELD NEED TO BE FILLED!"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, code",
        [
            ({"name": "User 2"}, "ERR_INVALID_NAME"),
            ({"name": ""}, "ERR_INVALID_NAME"),
            ({"age": ""}, "ERR_INVALID_AGE"),
            ({"age": 0}, "ERR_INVALID_AGE"),
            ({"age": "12.5"}, "ERR_INVALID_AGE"),
            ({"password": "weak"}, "ERR_INVALID_PASSWORD"),
        ],
    )
    async def test_invalid_field(self, mock_user_repo, existing, body, code):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, body)
        assert exc_info.value.code == code
        assert exc_info.value.status_code == 400
        mock_user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_identical_values_mean_no_changes(self, mock_user_repo, existing):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(
                existing.id,
                {"name": "Test User", "age": "25", "email": " TEST@example.com", "password": "Valid@123!"},
            )
        assert exc_info.value.code == "ERR_NO_CHANGES"
        assert exc_info.value.message == "ANYTHING HAS CHANGED!"
        mock_user_repo.find_by_email.assert_not_awaited()
        mock_user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_taken_by_someone_else(self, mock_user_repo, existing, stored_user):
        mock_user_repo.find_by_email.return_value = stored_user(email="other@example.com")
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, {"email": "Other@example.com"})
        assert exc_info.value.code == "ERR_EMAIL_IN_USE"
        assert exc_info.value.message == "EMAIL IS ALREADY IN USE!"

    @pytest.mark.asyncio
    async def test_updates_changed_fields(self, mock_user_repo, existing):
        await UpdateUserUseCase(mock_user_repo).execute(
            existing.id,
            {"name": " New Name ", "age": 30, "email": "New@Example.com"},
        )
        saved: User = mock_user_repo.save.call_args.args[0]
        assert (saved.name, saved.age, saved.email) == ("New Name", 30, "new@example.com")
        assert saved.password_modified is False
        mock_user_repo.find_by_email.assert_awaited_once_with("new@example.com")

    @pytest.mark.asyncio
    async def test_new_password_is_set_for_rehash(self, mock_user_repo, existing):
        await UpdateUserUseCase(mock_user_repo).execute(existing.id, {"password": "Other@456"})
        saved: User = mock_user_repo.save.call_args.args[0]
        assert saved.password_modified is True
        assert saved.password == "Other@456"

    @pytest.mark.asyncio
    async def test_same_password_alone_is_no_change(self, mock_user_repo, existing):
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, {"password": "Valid@123!"})
        assert exc_info.value.code == "ERR_NO_CHANGES"
        assert verify_password("Valid@123!", existing.password)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self, mock_user_repo, existing):
        mock_user_repo.save.side_effect = RuntimeError("write concern error")
        with pytest.raises(AppError) as exc_info:
            await UpdateUserUseCase(mock_user_repo).execute(existing.id, {"age": 40})
        assert exc_info.value.code == "ERR_UPDATE_FAILED"
        assert exc_info.value.status_code == 500


class TestDeleteUserUseCase:
    """Tests for DeleteUserUseCase"""

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_user_repo, stored_user):
        user = stored_user()
        mock_user_repo.find_by_id.return_value = user
        mock_user_repo.delete_by_id.return_value = True

        await DeleteUserUseCase(mock_user_repo).execute(user.id)

        mock_user_repo.delete_by_id.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_invalid_id(self, mock_user_repo):
        with pytest.raises(AppError) as exc_info:
            await DeleteUserUseCase(mock_user_repo).execute("123")
        assert exc_info.value.code == "ERR_INVALID_ID"
        assert exc_info.value.message == "DELETE FUNCTION: INVALID USER ID FORMAT!"

    @pytest.mark.asyncio
    async def test_not_found(self, mock_user_repo):
        mock_user_repo.find_by_id.return_value = None
        with pytest.raises(AppError) as exc_info:
            await DeleteUserUseCase(mock_user_repo).execute(str(ObjectId()))
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "USER NOT FOUND!"
        mock_user_repo.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(self, mock_user_repo):
        mock_user_repo.find_by_id.side_effect = RuntimeError("boom")
        with pytest.raises(AppError) as exc_info:
            await DeleteUserUseCase(mock_user_repo).execute(str(ObjectId()))
        assert exc_info.value.code == "ERR_DELETE_FAILED"


class TestCheckEmailUseCase:
    """Tests for CheckEmailUseCase"""

    @pytest.mark.asyncio
    async def test_exists(self, mock_user_repo, stored_user):
        mock_user_repo.find_by_email.return_value = stored_user(email="exist@example.com")
        assert await CheckEmailUseCase(mock_user_repo).execute(" Exist@Example.com ") is True
        mock_user_repo.find_by_email.assert_awaited_once_with("exist@example.com")

    @pytest.mark.asyncio
    async def test_not_exists(self, mock_user_repo):
        mock_user_repo.find_by_email.return_value = None
        assert await CheckEmailUseCase(mock_user_repo).execute("free@example.com") is False

    @pytest.mark.asyncio
    async def test_invalid_format(self, mock_user_repo):
        with pytest.raises(AppError) as exc_info:
            await CheckEmailUseCase(mock_user_repo).execute("notanemail")
        assert exc_info.value.code == "ERR_INVALID_EMAIL"
        assert exc_info.value.message == "EMAIL IS INVALID!"
        mock_user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_db_failure(self, mock_user_repo):
        mock_user_repo.find_by_email.side_effect = RuntimeError("Database failure")
        with pytest.raises(AppError) as exc_info:
            await CheckEmailUseCase(mock_user_repo).execute("test@example.com")
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "ERROR TO CHECK EMAIL!"
        assert exc_info.value.code == "ERR_EMAIL_CHECK_FAILED"
