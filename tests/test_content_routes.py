"""Tests for dashboard, content editor, users and contacts pages."""

from fastapi.testclient import TestClient

from friends_united_admin.domain.content import image_reference
from tests.conftest import FakeAuthBackend, InMemoryContentStore

FAQ_FORM = {
    "faq.0.question": "Who can join?",
    "faq.0.answer": "Anyone who wants to help out.",
    "faq.1.question": "",
    "faq.1.answer": "",
}
SERVICE_FORM = {
    "title": "Counselling",
    "description": "One to one support",
    "link": "counselling",
    "demands.0": "Time",
    "demands.1": "",
}


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_page_renders_not_found(client: TestClient) -> None:
    response = client.get("/no-such-page")

    assert response.status_code == 404
    assert "Oops! Page not found." in response.text


def test_dashboard_shows_counts_with_one_query(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    content_store.add("banner", "banner-1", title="Hello")
    content_store.add("contact", "c1", firstName="Sam")

    response = signed_in_client.get("/dashboard")

    assert response.status_code == 200
    assert "Ada Admin" in response.text
    assert "United Voices" in response.text
    assert content_store.call_names() == ["count_documents"]


def test_dashboard_survives_failed_counts(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    content_store.fail_reads = True

    response = signed_in_client.get("/dashboard")

    assert response.status_code == 200
    assert "—" in response.text


def test_sidebar_marks_current_page(signed_in_client: TestClient) -> None:
    response = signed_in_client.get("/content/faqs")

    assert 'href="/content/faqs" class="active"' in response.text
    assert "Content" in response.text


def test_empty_singleton_renders_create_form(signed_in_client: TestClient) -> None:
    response = signed_in_client.get("/content/banner")

    assert response.status_code == 200
    assert 'name="title"' in response.text
    assert 'name="document_id"' not in response.text
    assert ">Create</button>" in response.text


def test_singleton_save_creates_then_edits(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    response = signed_in_client.post(
        "/content/banner", data={"title": "Hello", "subTitle": "World"}
    )

    assert response.status_code == 200
    assert "Banner has been saved successfully." in response.text
    assert 'name="document_id" value="banner.singleton"' in response.text
    assert content_store.documents["banner.singleton"]["title"] == "Hello"

    signed_in_client.post(
        "/content/banner",
        data={"document_id": "banner.singleton", "title": "Again", "subTitle": ""},
    )

    assert content_store.call_names().count("create") == 1
    assert content_store.documents["banner.singleton"]["title"] == "Again"


def test_invalid_content_is_not_written(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    response = signed_in_client.post("/content/faqs", data={"faq.0.question": ""})

    assert response.status_code == 400
    assert "At least one FAQ is required" in response.text
    assert "Image is required" in response.text
    assert content_store.calls == []


def test_faq_upload_is_stored_by_reference(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    response = signed_in_client.post(
        "/content/faqs",
        data=FAQ_FORM,
        files={"image": ("faq.png", b"\x89PNG-bytes", "image/png")},
    )

    assert response.status_code == 200
    document = content_store.documents["faq.singleton"]
    assert document["faq"] == [
        {"question": "Who can join?", "answer": "Anyone who wants to help out."}
    ]
    ref = document["image"]["asset"]["_ref"]
    assert f'name="image__ref" value="{ref}"' in response.text
    assert "https://cdn.sanity.io/images/proj123/production/" in response.text


def test_wrong_image_type_is_rejected(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    response = signed_in_client.post(
        "/content/faqs",
        data=FAQ_FORM,
        files={"image": ("faq.gif", b"GIF89a", "image/gif")},
    )

    assert response.status_code == 400
    assert "Only JPEG, PNG and WebP images are allowed" in response.text
    assert content_store.calls == []


def test_failed_write_keeps_submitted_values(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    content_store.fail_writes = True

    response = signed_in_client.post(
        "/content/banner", data={"title": "Unsaved title", "subTitle": ""}
    )

    assert response.status_code == 502
    assert 'value="Unsaved title"' in response.text
    assert "banner.singleton" not in content_store.documents


def test_settings_page_lists_social_icons(signed_in_client: TestClient) -> None:
    response = signed_in_client.get("/settings")

    assert response.status_code == 200
    assert 'value="FaInstagram"' in response.text
    assert 'accept="image/jpeg,image/jpg,image/png,image/svg+xml,image/webp"' in (
        response.text
    )


def test_services_create_list_edit_delete(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    created = signed_in_client.post("/content/services/new", data=SERVICE_FORM)

    assert created.status_code == 200
    assert 'name="document_id" value="service-1"' in created.text
    assert content_store.documents["service-1"]["demands"] == ["Time"]

    listing = signed_in_client.get("/content/services")
    assert 'href="/content/services/service-1"' in listing.text

    updated = signed_in_client.post(
        "/content/services/service-1", data={**SERVICE_FORM, "title": "Coaching"}
    )
    assert updated.status_code == 200
    assert content_store.documents["service-1"]["title"] == "Coaching"
    assert content_store.call_names().count("create") == 1

    deleted = signed_in_client.post(
        "/content/services/service-1/delete", follow_redirects=False
    )
    assert deleted.status_code == 303
    assert deleted.headers["location"] == "/content/services"
    assert "service-1" not in content_store.documents


def test_missing_service_returns_to_list(signed_in_client: TestClient) -> None:
    response = signed_in_client.get(
        "/content/services/ghost", follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/content/services"

    listing = signed_in_client.get("/content/services")
    assert "The requested service was not found." in listing.text


def test_new_service_form_is_blank(signed_in_client: TestClient) -> None:
    response = signed_in_client.get("/content/services/new")

    assert response.status_code == 200
    assert "New service" in response.text
    assert 'action="/content/services/new"' in response.text


def test_create_user(
    signed_in_client: TestClient, auth_backend: FakeAuthBackend
) -> None:
    response = signed_in_client.post(
        "/content/users",
        data={"name": "Bo", "email": "bo@example.com", "password": "secret1"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/content/users"
    assert ("create_user", "bo@example.com") in auth_backend.calls

    page = signed_in_client.get("/content/users")
    assert "Account created for bo@example.com" in page.text


def test_create_user_conflict(signed_in_client: TestClient) -> None:
    response = signed_in_client.post(
        "/content/users",
        data={"name": "Ada", "email": "admin@example.com", "password": "secret1"},
    )

    assert response.status_code == 400
    assert "User already exists" in response.text
    assert 'value="secret1"' not in response.text


def test_contacts_list_detail_and_delete(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    content_store.add(
        "contact",
        "c1",
        firstName="Sam",
        lastName="Lee",
        email="sam@example.com",
        phoneNumber="555-0100",
        message="Hello there",
    )

    listing = signed_in_client.get("/contacts")
    assert "Sam Lee" in listing.text

    detail = signed_in_client.get("/contacts/c1")
    assert detail.status_code == 200
    assert "Hello there" in detail.text

    deleted = signed_in_client.post("/contacts/c1/delete", follow_redirects=False)
    assert deleted.headers["location"] == "/contacts"
    assert "c1" not in content_store.documents


def test_missing_contact_returns_to_list(signed_in_client: TestClient) -> None:
    response = signed_in_client.get("/contacts/ghost", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/contacts"


def test_rejected_upload_keeps_stored_logo(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    logo = image_reference("image-abc-10x10-png")
    content_store.add(
        "setting", "setting-1", siteTitle="Friends", siteDescription="Together", logo=logo
    )
    form = {
        "document_id": "setting-1",
        "siteTitle": "Friends",
        "siteDescription": "Together",
        "logo__ref": "image-abc-10x10-png",
    }

    rejected = signed_in_client.post(
        "/settings",
        data={**form, "email": "not-an-email"},
        files={"logo": ("logo.png", b"png", "image/png")},
    )

    assert rejected.status_code == 400
    assert 'name="logo__ref" value="image-abc-10x10-png"' in rejected.text

    saved = signed_in_client.post("/settings", data=form)

    assert saved.status_code == 200
    assert content_store.documents["setting-1"]["logo"] == logo


def test_failed_upload_keeps_stored_logo_reference(
    signed_in_client: TestClient, content_store: InMemoryContentStore
) -> None:
    content_store.add(
        "setting",
        "setting-1",
        siteTitle="Friends",
        siteDescription="Together",
        logo=image_reference("image-abc-10x10-png"),
    )
    content_store.fail_writes = True

    response = signed_in_client.post(
        "/settings",
        data={
            "document_id": "setting-1",
            "siteTitle": "Friends",
            "siteDescription": "Together",
            "logo__ref": "image-abc-10x10-png",
        },
        files={"logo": ("logo.png", b"png", "image/png")},
    )

    assert response.status_code == 502
    assert 'name="logo__ref" value="image-abc-10x10-png"' in response.text
