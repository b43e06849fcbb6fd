import json

import pytest
from django.contrib.auth import get_user_model

from revisit_app.surveys.models import Survey


User = get_user_model()
TEST_PASSWORD = "test-pass"


@pytest.mark.django_db
class TestJWTEnforcement:
    def setup_data(self):
        owner = User.objects.create_user(username="owner2", password=TEST_PASSWORD)
        survey = Survey.objects.create(owner=owner, name="Jwt S", slug="jwt-s")
        return owner, survey

    def get_auth_header(self, client, username: str, password: str) -> dict:
        resp = client.post(
            "/api/token",
            data=json.dumps({"username": username, "password": password}),
            content_type="application/json",
        )
        assert resp.status_code == 200, resp.content
        access = resp.json()["access"]
        return {"HTTP_AUTHORIZATION": f"Bearer {access}"}

    def test_missing_token_behaviour(self, client):
        _, survey = self.setup_data()
        url = f"/api/surveys/{survey.id}/redirect-settings/"

        resp = client.get(url)
        assert resp.status_code in (401, 403)

        # Update without token: unsafe method should be denied
        resp = client.put(
            url,
            data=json.dumps({"settings": {"enabled": True}}),
            content_type="application/json",
        )
        assert resp.status_code in (401, 403)

    def test_invalid_token_returns_401(self, client):
        _, survey = self.setup_data()
        invalid_hdrs = {"HTTP_AUTHORIZATION": "Bearer invalid.token.here"}

        # With an invalid token, authentication should fail hard with 401
        resp = client.get(f"/api/surveys/{survey.id}/redirect-settings/", **invalid_hdrs)
        assert resp.status_code == 401

    def test_wrong_password_gets_no_token(self, client):
        self.setup_data()
        resp = client.post(
            "/api/token",
            data=json.dumps({"username": "owner2", "password": "wrong"}),
            content_type="application/json",
        )
        assert resp.status_code == 401

    def test_refresh_issues_new_access_token(self, client):
        self.setup_data()
        resp = client.post(
            "/api/token",
            data=json.dumps({"username": "owner2", "password": TEST_PASSWORD}),
            content_type="application/json",
        )
        refresh = resp.json()["refresh"]
        resp = client.post(
            "/api/token/refresh",
            data=json.dumps({"refresh": refresh}),
            content_type="application/json",
        )
        assert resp.status_code == 200
        assert "access" in resp.json()

    def test_valid_token_reaches_endpoint(self, client):
        _, survey = self.setup_data()
        hdrs = self.get_auth_header(client, "owner2", TEST_PASSWORD)
        resp = client.get(f"/api/surveys/{survey.id}/redirect-settings/", **hdrs)
        assert resp.status_code == 200
