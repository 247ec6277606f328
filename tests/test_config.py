"""Tests for settings and post-login path handling."""

import pytest

from friends_united_admin.config import Settings, sanitize_next_path


def test_sanity_urls_follow_project_and_dataset(settings: Settings) -> None:
    assert settings.sanity_api_url == "https://proj123.api.sanity.io/v2025-01-01"
    assert (
        settings.sanity_image_cdn_url
        == "https://cdn.sanity.io/images/proj123/production"
    )


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_API_BASE_URL", "https://auth.example.org/api")
    monkeypatch.setenv("SANITY_DATASET", "staging")

    loaded = Settings()

    assert loaded.auth_api_base_url == "https://auth.example.org/api"
    assert loaded.sanity_dataset == "staging"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "/dashboard"),
        ("", "/dashboard"),
        ("/content/faqs", "/content/faqs"),
        ("/content/services?page=2", "/content/services?page=2"),
        ("https://evil.example/", "/dashboard"),
        ("//evil.example/", "/dashboard"),
        ("/\\evil.example.com", "/dashboard"),
        ("/content\\faqs", "/dashboard"),
        ("content/faqs", "/dashboard"),
        ("/auth", "/dashboard"),
        ("/logout", "/dashboard"),
    ],
)
def test_sanitize_next_path(raw: str | None, expected: str) -> None:
    assert sanitize_next_path(raw) == expected
