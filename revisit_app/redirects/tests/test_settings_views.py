import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from revisit_app.redirects.models import RedirectSetting
from revisit_app.surveys.models import Survey

User = get_user_model()


@pytest.mark.django_db
class TestSurveyRedirectSettingsView:
    def setup_survey(self):
        owner = User.objects.create_user(username="owner", password="passw0rd-Owner!")
        survey = Survey.objects.create(owner=owner, name="S1", slug="s1")
        return owner, survey

    def url(self, survey):
        return reverse("redirects:settings", kwargs={"slug": survey.slug})

    def test_anonymous_is_sent_to_login(self, client):
        _, survey = self.setup_survey()
        resp = client.get(self.url(survey))
        assert resp.status_code == 302
        assert "/accounts/login/" in resp["Location"]

    def test_outsider_gets_forbidden(self, client):
        _, survey = self.setup_survey()
        outsider = User.objects.create_user(username="other", password="pass")
        client.force_login(outsider)
        resp = client.get(self.url(survey))
        assert resp.status_code == 403
        assert b"Forbidden" in resp.content

    def test_owner_sees_global_template_as_hint(self, client):
        owner, survey = self.setup_survey()
        RedirectSetting.objects.create(
            name="defaultRedirectUrl", scope="global", value="https://global.example/"
        )
        client.force_login(owner)
        resp = client.get(self.url(survey))
        assert resp.status_code == 200
        assert b'placeholder="https://global.example/"' in resp.content

    def test_owner_saves_settings(self, client):
        owner, survey = self.setup_survey()
        client.force_login(owner)
        resp = client.post(
            self.url(survey),
            {
                "enabled": "on",
                "redirectUrl": "  https://example.com/?t={TOKEN}  ",
                "parseExpressions": "on",
            },
        )
        assert resp.status_code == 302
        stored = {
            s.name: s.value
            for s in RedirectSetting.objects.filter(scope="survey", survey=survey)
        }
        assert stored == {
            "enabled": True,
            "redirectUrl": "https://example.com/?t={TOKEN}",
            "parseExpressions": True,
            "skipIfEditable": False,
        }

    def test_superuser_may_edit_any_survey(self, client):
        _, survey = self.setup_survey()
        root = User.objects.create_superuser("root", "root@example.com", "StrongPass!234")
        client.force_login(root)
        resp = client.get(self.url(survey))
        assert resp.status_code == 200
