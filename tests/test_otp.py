"""
Test suite for one-time password signup and signin.

Tests cover:
- Code generation
- Sending codes (email success, development fallback, production failure)
- Verifying codes (signup creates user, signin requires one)
- Invalid, used and expired codes
"""

from datetime import datetime, timedelta, timezone

from app.core import verification
from app.core.config import settings
from app.models.columns import utcnow
from app.models.otp_verification import OtpVerification, Purpose
from app.models.user import User


def _parse_timestamp(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCodeGeneration:
    """Tests for generate_otp_code"""

    def test_code_is_six_digits(self):
        for _ in range(50):
            code = verification.generate_otp_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_code_range_bounds(self, monkeypatch):
        """Lowest and highest draws map to 100000 and 999999"""
        monkeypatch.setattr(verification.secrets, "randbelow", lambda n: 0)
        assert verification.generate_otp_code() == "100000"

        monkeypatch.setattr(verification.secrets, "randbelow", lambda n: n - 1)
        assert verification.generate_otp_code() == "999999"


class TestSendOtp:
    """Tests for POST /api/send-otp"""

    def test_send_otp_success(self, client, db_session, email_service):
        """A stored code is emailed and its expiry returned"""
        response = client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "signup"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OTP sent successfully"
        assert "otp" not in data
        assert "error" not in data

        record = db_session.query(OtpVerification).one()
        assert record.email == "dev@example.com"
        assert record.purpose == Purpose.SIGNUP
        assert record.is_used is False

        assert email_service.sent == [
            {"to": "dev@example.com", "code": record.otp_code, "purpose": Purpose.SIGNUP}
        ]

    def test_expiry_is_fifteen_minutes_out(self, client):
        before = utcnow()
        response = client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "signin"})
        after = utcnow()

        expires_at = _parse_timestamp(response.json()["expiresAt"])
        assert before + timedelta(minutes=15) <= expires_at <= after + timedelta(minutes=15)

    def test_every_request_stores_a_new_code(self, client, db_session):
        for _ in range(3):
            client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "signup"})

        assert db_session.query(OtpVerification).count() == 3

    def test_email_failure_in_development_returns_code(self, client, db_session, email_service, monkeypatch):
        """Development mode keeps working without SES by echoing the code"""
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        email_service.fail = True

        response = client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "signup"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OTP stored successfully (email failed)"
        assert data["error"] == "Email address is not verified"
        assert data["otp"] == db_session.query(OtpVerification).one().otp_code

    def test_email_failure_in_production_is_an_error(self, client, db_session, email_service, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        email_service.fail = True

        response = client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "signup"})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Failed to send email: Email address is not verified. Please try again."
        assert "otp" not in data

        # The code is stored before the send is attempted
        assert db_session.query(OtpVerification).count() == 1

    def test_invalid_email(self, client, email_service):
        response = client.post("/api/send-otp", json={"email": "not-an-email", "purpose": "signup"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert email_service.sent == []

    def test_invalid_purpose(self, client):
        response = client.post("/api/send-otp", json={"email": "dev@example.com", "purpose": "reset"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_missing_fields(self, client):
        response = client.post("/api/send-otp", json={})

        assert response.status_code == 400
        assert "email" in response.json()["error"]


class TestVerifyOtp:
    """Tests for POST /api/verify-otp"""

    def test_signup_flow_creates_user(self, client, db_session, email_service):
        """Send then verify a signup code"""
        client.post("/api/send-otp", json={"email": "new@example.com", "purpose": "signup"})
        code = email_service.sent[0]["code"]

        response = client.post("/api/verify-otp", json={
            "email": "new@example.com",
            "otp": code,
            "purpose": "signup"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OTP verified successfully"
        assert data["user"]["email"] == "new@example.com"

        user = db_session.query(User).filter(User.email == "new@example.com").one()
        assert data["user"]["id"] == str(user.id)
        assert user.role is None

        assert db_session.query(OtpVerification).one().is_used is True

    def test_signup_for_existing_user_returns_same_user(self, client, db_session, make_user, make_otp):
        user = make_user(email="dev@example.com")
        make_otp(email="dev@example.com", code="222222", purpose=Purpose.SIGNUP)

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "222222",
            "purpose": "signup"
        })

        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(user.id)
        assert db_session.query(User).count() == 1

    def test_signin_existing_user(self, client, make_user, make_otp):
        user = make_user(email="dev@example.com")
        make_otp(email="dev@example.com", code="333333", purpose=Purpose.SIGNIN)

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "333333",
            "purpose": "signin"
        })

        assert response.status_code == 200
        assert response.json()["user"]["id"] == str(user.id)

    def test_signin_unknown_user(self, client, db_session, make_otp):
        """Signin never creates a user; the code is still consumed"""
        otp = make_otp(email="ghost@example.com", code="444444", purpose=Purpose.SIGNIN)

        response = client.post("/api/verify-otp", json={
            "email": "ghost@example.com",
            "otp": "444444",
            "purpose": "signin"
        })

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "User not found. Please sign up first."}
        assert db_session.query(User).count() == 0

        db_session.refresh(otp)
        assert otp.is_used is True

    def test_wrong_code(self, client, make_otp):
        make_otp(email="dev@example.com", code="123456")

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "654321",
            "purpose": "signup"
        })

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid OTP code"}

    def test_code_for_other_purpose_is_invalid(self, client, make_otp):
        make_otp(email="dev@example.com", code="123456", purpose=Purpose.SIGNUP)

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "123456",
            "purpose": "signin"
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid OTP code"

    def test_code_cannot_be_reused(self, client, make_otp):
        make_otp(email="dev@example.com", code="123456")
        body = {"email": "dev@example.com", "otp": "123456", "purpose": "signup"}

        assert client.post("/api/verify-otp", json=body).status_code == 200

        response = client.post("/api/verify-otp", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid OTP code"

    def test_expired_code(self, client, db_session, make_otp):
        otp = make_otp(email="dev@example.com", code="123456", expires_in=-1)

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "123456",
            "purpose": "signup"
        })

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "OTP has expired"}

        db_session.refresh(otp)
        assert otp.is_used is False
        assert db_session.query(User).count() == 0

    def test_older_code_still_valid_after_new_one_sent(self, client, make_otp):
        now = utcnow()
        make_otp(email="dev@example.com", code="111111", created_at=now - timedelta(minutes=5))
        make_otp(email="dev@example.com", code="999999", created_at=now)

        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "111111",
            "purpose": "signup"
        })

        assert response.status_code == 200

    def test_otp_too_long(self, client):
        response = client.post("/api/verify-otp", json={
            "email": "dev@example.com",
            "otp": "1234567",
            "purpose": "signup"
        })

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestSelectUnexpired:
    """Tests for picking among matching codes"""

    def _record(self, expires_in, created_minutes_ago):
        now = datetime.now(timezone.utc)
        return OtpVerification(
            email="dev@example.com",
            otp_code="123456",
            purpose=Purpose.SIGNUP,
            expires_at=now + timedelta(minutes=expires_in),
            created_at=now - timedelta(minutes=created_minutes_ago),
            is_used=False
        )

    def test_newest_valid_record_wins(self):
        newest = self._record(expires_in=10, created_minutes_ago=1)
        older = self._record(expires_in=5, created_minutes_ago=10)

        assert verification.select_unexpired([newest, older]) is newest

    def test_skips_expired_newest(self):
        expired = self._record(expires_in=-1, created_minutes_ago=1)
        valid = self._record(expires_in=5, created_minutes_ago=10)

        assert verification.select_unexpired([expired, valid]) is valid

    def test_all_expired(self):
        records = [self._record(expires_in=-1, created_minutes_ago=1), self._record(expires_in=-5, created_minutes_ago=20)]

        assert verification.select_unexpired(records) is None

    def test_naive_timestamps_are_treated_as_utc(self):
        record = self._record(expires_in=5, created_minutes_ago=1)
        record.expires_at = record.expires_at.replace(tzinfo=None)

        assert verification.select_unexpired([record]) is record
