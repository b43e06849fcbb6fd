from django.contrib.auth.models import User
from django.urls import reverse
import pytest

from revisit_app.redirects.models import RedirectSetting


@pytest.mark.django_db
class TestAdminAccess:
    def test_regular_user_blocked(self, client):
        User.objects.create_user(username="plain", password="StrongPass!234")
        client.login(username="plain", password="StrongPass!234")
        resp = client.get(reverse("admin:index"))
        assert resp.status_code == 302

    def test_superuser_manages_global_redirect_settings(self, client):
        User.objects.create_superuser("root", "root@example.com", "StrongPass!234")
        RedirectSetting.objects.create(name="globalEnabled", scope="global", value=True)
        client.login(username="root", password="StrongPass!234")
        resp = client.get(reverse("admin:redirects_redirectsetting_changelist"))
        assert resp.status_code == 200
        assert b"globalEnabled" in resp.content
