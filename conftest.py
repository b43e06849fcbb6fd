import pytest


@pytest.fixture(autouse=True)
def _disable_ratelimit(settings):
    # Participant views are rate limited per IP; tests hit them repeatedly.
    settings.RATELIMIT_ENABLE = False
