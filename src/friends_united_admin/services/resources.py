"""Editable content resources and their form configuration."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from friends_united_admin.domain.content import ImageValue, image_from_document
from friends_united_admin.domain.forms import (
    SOCIAL_ICONS,
    WINNER_ICONS,
    BannerForm,
    FaqForm,
    FormModel,
    OurStoryForm,
    RealWinnersForm,
    ServiceForm,
    SettingForm,
    UnitedVoicesForm,
    WayCardsForm,
)
from friends_united_admin.services.images import (
    JPEG_PNG,
    TWO_MEGABYTES,
    WEB_IMAGES,
    WEB_IMAGES_WITH_SVG,
    ImageField,
)


@dataclass(frozen=True)
class ResourceDefinition:
    """Describes one editable content type.

    Singletons hold at most one document and are created under a fixed id so
    concurrent first submits land on the same document.
    """

    type_name: str
    title: str
    description: str
    path: str
    template: str
    form_model: type[FormModel]
    image_fields: tuple[ImageField, ...] = ()
    singleton: bool = True
    options: dict[str, tuple[tuple[str, str], ...]] = field(default_factory=dict)

    @property
    def singleton_id(self) -> str | None:
        return f"{self.type_name}.singleton" if self.singleton else None

    def image_field(self, name: str) -> ImageField:
        for image in self.image_fields:
            if image.name == name:
                return image
        raise KeyError(name)

    def blank_values(self) -> dict[str, Any]:
        """Form defaults, keyed by document field name."""
        return self.form_model.model_construct().model_dump(by_alias=True)

    def form_values(self, document: dict[str, Any]) -> dict[str, Any]:
        """Project a stored document onto the fields this form controls."""
        values = self.blank_values()
        for key in values:
            if document.get(key) is not None:
                values[key] = document[key]
        return values

    def form_images(self, document: dict[str, Any] | None) -> dict[str, ImageValue]:
        source = document or {}
        return {
            image.name: image_from_document(source.get(image.name))
            for image in self.image_fields
        }


class Resource(Enum):
    """Registry of every editable content type."""

    BANNER = ResourceDefinition(
        type_name="banner",
        title="Banner",
        description="Headline shown at the top of the home page.",
        path="/content/banner",
        template="content/banner.html",
        form_model=BannerForm,
    )
    OUR_STORY = ResourceDefinition(
        type_name="ourStory",
        title="Our Story",
        description="Sections telling the story behind Friends United.",
        path="/content/our-story",
        template="content/our_story.html",
        form_model=OurStoryForm,
    )
    SERVICES = ResourceDefinition(
        type_name="service",
        title="Services",
        description="Services offered, each with its own detail page.",
        path="/content/services",
        template="content/service_form.html",
        form_model=ServiceForm,
        image_fields=(ImageField("image", "Image", allowed_types=WEB_IMAGES),),
        singleton=False,
    )
    UNITED_VOICES = ResourceDefinition(
        type_name="unitedVoices",
        title="United Voices",
        description="Testimonials shown as flip cards.",
        path="/content/united-voices",
        template="content/united_voices.html",
        form_model=UnitedVoicesForm,
        image_fields=(
            ImageField(
                "frontimage",
                "Front image",
                required=True,
                allowed_types=JPEG_PNG,
                max_bytes=TWO_MEGABYTES,
                type_message="Only JPEG and PNG images are allowed",
            ),
            ImageField(
                "backimage",
                "Back image",
                required=True,
                allowed_types=JPEG_PNG,
                max_bytes=TWO_MEGABYTES,
                type_message="Only JPEG and PNG images are allowed",
            ),
        ),
    )
    REAL_WINNERS = ResourceDefinition(
        type_name="realWinners",
        title="Real Winners",
        description="Success stories from members.",
        path="/content/real-winners",
        template="content/real_winners.html",
        form_model=RealWinnersForm,
        options={"icons": WINNER_ICONS},
    )
    FAQ = ResourceDefinition(
        type_name="faq",
        title="FAQs",
        description="Frequently asked questions and the illustration beside them.",
        path="/content/faqs",
        template="content/faq.html",
        form_model=FaqForm,
        image_fields=(
            ImageField(
                "image",
                "Image",
                required=True,
                allowed_types=WEB_IMAGES,
                type_message="Only JPEG, PNG and WebP images are allowed",
            ),
        ),
    )
    SETTINGS = ResourceDefinition(
        type_name="setting",
        title="Settings",
        description="Site title, contact details and social links.",
        path="/settings",
        template="content/settings.html",
        form_model=SettingForm,
        image_fields=(
            ImageField(
                "logo",
                "Logo",
                allowed_types=WEB_IMAGES_WITH_SVG,
                type_message="Only JPEG, PNG, WebP and SVG images are allowed",
            ),
        ),
        options={"icons": SOCIAL_ICONS},
    )
    WAY_CARDS = ResourceDefinition(
        type_name="wayCards",
        title="Way Cards",
        description="The old way versus the new way comparison.",
        path="/content/way-cards",
        template="content/way_cards.html",
        form_model=WayCardsForm,
    )


def dashboard_resources() -> list[ResourceDefinition]:
    """Resources shown as cards on the dashboard, in sidebar order."""
    return [entry.value for entry in Resource]
