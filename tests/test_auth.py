"""
Test suite for account status and logout.

Tests cover:
- Status for unknown, profile-less and profiled users
- The profile returned follows the user's role
- Logout acknowledgement
"""

from app.models.profile import DeveloperProfile
from app.models.user import Role


class TestAuthStatus:
    """Tests for GET /api/auth/status"""

    def test_email_required(self, client):
        response = client.get("/api/auth/status")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email is required"}

    def test_empty_email(self, client):
        response = client.get("/api/auth/status?email=")

        assert response.status_code == 400
        assert response.json()["error"] == "Email is required"

    def test_unknown_email(self, client):
        response = client.get("/api/auth/status", params={"email": "nobody@example.com"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["authenticated"] is False
        assert data["user"] is None
        assert data["profile"] is None

    def test_user_without_profile(self, client, make_user):
        user = make_user(email="fresh@example.com")

        response = client.get("/api/auth/status", params={"email": "fresh@example.com"})

        data = response.json()
        assert data["authenticated"] is True
        assert data["user"] == {"id": str(user.id), "email": "fresh@example.com", "role": None}
        assert data["profile"] is None

    def test_developer_status(self, client, make_developer):
        profile = make_developer(email="dev@example.com", name="Ada", skills=["Python"])

        response = client.get("/api/auth/status", params={"email": "dev@example.com"})

        data = response.json()
        assert data["authenticated"] is True
        assert data["user"]["role"] == "developer"
        assert data["profile"]["id"] == str(profile.id)
        assert data["profile"]["name"] == "Ada"
        assert data["profile"]["skills"] == ["Python"]
        assert data["profile"]["role"] == "developer"

    def test_employer_status(self, client, make_employer):
        profile = make_employer(email="hr@acme.com", company_name="Acme")

        response = client.get("/api/auth/status", params={"email": "hr@acme.com"})

        data = response.json()
        assert data["user"]["role"] == "employer"
        assert data["profile"]["id"] == str(profile.id)
        assert data["profile"]["company_name"] == "Acme"
        assert data["profile"]["role"] == "employer"

    def test_profile_follows_role(self, client, db_session, make_employer):
        """An employer who also holds a developer profile is reported as an employer"""
        employer = make_employer(email="both@example.com", company_name="Acme")
        db_session.add(DeveloperProfile(user_id=employer.user_id, name="Side Project"))
        db_session.commit()

        response = client.get("/api/auth/status", params={"email": "both@example.com"})

        data = response.json()
        assert data["user"]["role"] == Role.EMPLOYER.value
        assert data["profile"]["id"] == str(employer.id)
        assert data["profile"]["role"] == "employer"


class TestLogout:
    """Tests for POST /api/auth/logout"""

    def test_logout(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully"}


class TestEmailNormalization:
    """Addresses are matched in the same normalized form they are stored in"""

    def test_status_matches_mixed_case_signup(self, client, email_service):
        client.post("/api/send-otp", json={"email": "Ada@Example.COM", "purpose": "signup"})
        code = email_service.sent[0]["code"]
        verified = client.post("/api/verify-otp", json={
            "email": "Ada@Example.COM",
            "otp": code,
            "purpose": "signup"
        }).json()

        response = client.get("/api/auth/status", params={"email": "Ada@Example.COM"})

        data = response.json()
        assert data["authenticated"] is True
        assert data["user"]["id"] == verified["user"]["id"]
        assert data["user"]["email"] == "Ada@example.com"

    def test_status_domain_case_is_ignored(self, client, make_user):
        user = make_user(email="dev@example.com")

        response = client.get("/api/auth/status", params={"email": "dev@EXAMPLE.com"})

        assert response.json()["user"]["id"] == str(user.id)

    def test_status_invalid_email(self, client):
        response = client.get("/api/auth/status", params={"email": "not-an-email"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid email address"}
