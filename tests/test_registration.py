"""Unit tests for the registration workflow and POST /api/auth/register."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import (
    CredentialError,
    MirrorError,
    ProfilePersistError,
    ValidationError,
)
from app.models.auth import RegisterRequest, Session
from app.models.enums import MirrorStatus
from conftest import USER_ID, make_profile

ANNA_FORM = {
    "firstName": "Anna",
    "lastName": "Bianchi",
    "email": "anna@x.it",
    "school": "altro",
    "customSchool": "Liceo Test",
    "dob": "2005-03-01",
    "password": "password123",
}


def _anna(**overrides: object) -> RegisterRequest:
    data = dict(ANNA_FORM)
    data.update(overrides)
    return RegisterRequest.model_validate(data)


def _new_session() -> Session:
    return Session(user_id=USER_ID, email="anna@x.it", access_token="fresh-token")


class TestValidateRegistration:
    def test_valid_form_passes(self) -> None:
        from app.services.registration import validate_registration

        validate_registration(_anna())

    @pytest.mark.parametrize("field", ["firstName", "lastName", "email", "password", "school"])
    def test_blank_required_field_is_rejected(self, field: str) -> None:
        from app.services.registration import validate_registration

        with pytest.raises(ValidationError):
            validate_registration(_anna(**{field: "  "}))

    def test_missing_dob_is_rejected(self) -> None:
        from app.services.registration import validate_registration

        form = dict(ANNA_FORM)
        del form["dob"]
        with pytest.raises(ValidationError) as exc_info:
            validate_registration(RegisterRequest.model_validate(form))
        assert exc_info.value.field == "dob"

    def test_sentinel_without_custom_school_is_rejected(self) -> None:
        from app.services.registration import validate_registration

        with pytest.raises(ValidationError) as exc_info:
            validate_registration(_anna(customSchool=""))
        assert exc_info.value.field == "custom_school"


class TestResolveSchool:
    def test_sentinel_uses_custom_text(self) -> None:
        from app.services.registration import resolve_school

        assert resolve_school("altro", "  Liceo Test ") == "Liceo Test"

    def test_listed_school_kept_as_is(self) -> None:
        from app.services.registration import resolve_school

        assert resolve_school("IPSIA L.B. Alberti", "ignored") == "IPSIA L.B. Alberti"


class TestRegisterUser:
    @pytest.mark.asyncio
    async def test_end_to_end_example(self) -> None:
        """Profile stores the custom school, row is appended with an empty check-in."""
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())) as mock_sign_up, \
                patch("app.services.profiles.insert_profile", return_value=make_profile()) as mock_insert, \
                patch("app.services.sheets.append_user_row", new_callable=AsyncMock) as mock_append:
            result = await register_user(_anna())

        mock_sign_up.assert_called_once_with("anna@x.it", "password123")
        mock_insert.assert_called_once()
        created = mock_insert.call_args.args[0]
        assert created.id == USER_ID
        assert created.school == "Liceo Test"
        assert created.dob == date(2005, 3, 1)
        assert created.last_checkin is None

        row = mock_append.call_args.args[0]
        assert row.to_values() == [
            USER_ID, "Anna", "Bianchi", "anna@x.it", "Liceo Test", "2005-03-01", "",
        ]
        assert result.mirror.status == MirrorStatus.synced
        assert result.profile.school == "Liceo Test"

    @pytest.mark.asyncio
    async def test_invalid_form_makes_no_external_call(self) -> None:
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up") as mock_sign_up, \
                patch("app.services.profiles.insert_profile") as mock_insert:
            with pytest.raises(ValidationError):
                await register_user(_anna(customSchool=""))

        mock_sign_up.assert_not_called()
        mock_insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_credential_error_stops_before_profile(self) -> None:
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", side_effect=CredentialError("User already registered")), \
                patch("app.services.profiles.insert_profile") as mock_insert, \
                patch("app.services.sheets.append_user_row", new_callable=AsyncMock) as mock_append:
            with pytest.raises(CredentialError, match="User already registered"):
                await register_user(_anna())

        mock_insert.assert_not_called()
        mock_append.assert_not_called()

    @pytest.mark.asyncio
    async def test_profile_failure_is_logged_and_skips_mirror(self, caplog: pytest.LogCaptureFixture) -> None:
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())), \
                patch(
                    "app.services.profiles.insert_profile",
                    side_effect=ProfilePersistError(USER_ID, "insert", "duplicate key"),
                ), \
                patch("app.services.sheets.append_user_row", new_callable=AsyncMock) as mock_append:
            with pytest.raises(ProfilePersistError):
                await register_user(_anna())

        mock_append.assert_not_called()
        assert any(r.getMessage() == "registration_profile_failed" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_mirror_failure_does_not_fail_registration(self) -> None:
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())), \
                patch("app.services.profiles.insert_profile", return_value=make_profile()), \
                patch(
                    "app.services.sheets.append_user_row",
                    new_callable=AsyncMock,
                    side_effect=MirrorError("Google Sheets POST failed"),
                ):
            result = await register_user(_anna())

        assert result.mirror.status == MirrorStatus.failed
        assert "POST failed" in (result.mirror.error or "")
        assert result.profile.id == USER_ID

    @pytest.mark.asyncio
    async def test_unexpected_mirror_exception_does_not_fail_registration(self) -> None:
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())), \
                patch("app.services.profiles.insert_profile", return_value=make_profile()), \
                patch(
                    "app.services.sheets.append_user_row",
                    new_callable=AsyncMock,
                    side_effect=RuntimeError("event loop is closed"),
                ):
            result = await register_user(_anna())

        assert result.mirror.status == MirrorStatus.failed
        assert "RuntimeError" in (result.mirror.error or "")
        assert result.session is not None

    @pytest.mark.asyncio
    async def test_no_session_skips_mirror(self) -> None:
        """Sign-up awaiting e-mail confirmation yields no session: no mirror write."""
        from app.services.registration import register_user

        with patch("app.services.identity.sign_up", return_value=(USER_ID, None)), \
                patch("app.services.profiles.insert_profile", return_value=make_profile()), \
                patch("app.services.sheets.append_user_row", new_callable=AsyncMock) as mock_append:
            result = await register_user(_anna())

        mock_append.assert_not_called()
        assert result.mirror.status == MirrorStatus.skipped
        assert result.session is None


class TestInsertProfile:
    def test_insert_serializes_dates_and_null_checkin(self, mock_profiles_table: MagicMock) -> None:
        from app.models.profile import ProfileCreate
        from app.services.profiles import insert_profile

        mock_profiles_table.execute.return_value = MagicMock(
            data=[make_profile().model_dump(mode="json")]
        )
        insert_profile(
            ProfileCreate(
                id=USER_ID, first_name="Anna", last_name="Bianchi", email="anna@x.it",
                school="Liceo Test", dob=date(2005, 3, 1),
            )
        )

        payload = mock_profiles_table.insert.call_args.args[0]
        assert payload["dob"] == "2005-03-01"
        assert payload["last_checkin"] is None

    def test_insert_failure_raises_profile_persist_error(self, mock_profiles_table: MagicMock) -> None:
        from app.models.profile import ProfileCreate
        from app.services.profiles import insert_profile

        mock_profiles_table.execute.side_effect = Exception("duplicate key value")
        with pytest.raises(ProfilePersistError, match="duplicate key"):
            insert_profile(
                ProfileCreate(
                    id=USER_ID, first_name="Anna", last_name="Bianchi", email="anna@x.it",
                    school="Liceo Test", dob=date(2005, 3, 1),
                )
            )


class TestRegisterEndpoint:
    def test_register_returns_201(self, test_client: TestClient) -> None:
        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())), \
                patch("app.services.profiles.insert_profile", return_value=make_profile()), \
                patch("app.services.sheets.append_user_row", new_callable=AsyncMock):
            response = test_client.post("/api/auth/register", json=ANNA_FORM)

        assert response.status_code == 201
        body = response.json()
        assert body["profile"]["school"] == "Liceo Test"
        assert body["mirror"]["status"] == "synced"
        assert body["session"]["access_token"] == "fresh-token"

    def test_register_validation_error_is_400(self, test_client: TestClient) -> None:
        with patch("app.services.identity.sign_up") as mock_sign_up:
            response = test_client.post(
                "/api/auth/register", json={**ANNA_FORM, "customSchool": ""}
            )

        assert response.status_code == 400
        mock_sign_up.assert_not_called()

    def test_register_duplicate_email_is_400(self, test_client: TestClient) -> None:
        with patch(
            "app.services.identity.sign_up",
            side_effect=CredentialError("User already registered"),
        ):
            response = test_client.post("/api/auth/register", json=ANNA_FORM)

        assert response.status_code == 400
        assert response.json()["detail"] == "User already registered"

    def test_register_profile_failure_is_500(self, test_client: TestClient) -> None:
        with patch("app.services.identity.sign_up", return_value=(USER_ID, _new_session())), \
                patch(
                    "app.services.profiles.insert_profile",
                    side_effect=ProfilePersistError(USER_ID, "insert", "timeout"),
                ):
            response = test_client.post("/api/auth/register", json=ANNA_FORM)

        assert response.status_code == 500
        assert "Errore nel salvataggio del profilo" in response.json()["detail"]
