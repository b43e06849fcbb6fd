import pytest

from revisit_app.redirects.sanitizer import sanitize_redirect_url


@pytest.mark.parametrize(
    "rendered",
    ["", "   ", None, "  javascript:alert(1)  ", "JavaScript:alert(1)", "jAvAsCrIpT:void(0)"],
)
def test_rejected(rendered):
    assert sanitize_redirect_url(rendered) is None


def test_trims_and_returns_url():
    assert sanitize_redirect_url(" https://ok/?t=ABC ") == "https://ok/?t=ABC"


def test_other_schemes_pass_without_allow_list():
    assert sanitize_redirect_url("ftp://files.example.com/") == "ftp://files.example.com/"
    assert sanitize_redirect_url("/thanks/") == "/thanks/"


def test_allow_list_restricts_absolute_urls():
    allowed = ["http", "https"]
    assert sanitize_redirect_url("HTTPS://ok/", allowed) == "HTTPS://ok/"
    assert sanitize_redirect_url("data:text/html,hi", allowed) is None
    assert sanitize_redirect_url("ftp://files.example.com/", allowed) is None
    assert sanitize_redirect_url("/relative/path", allowed) == "/relative/path"


def test_allow_list_rejects_unparseable_url():
    assert sanitize_redirect_url("http://[::1/", ["http"]) is None
