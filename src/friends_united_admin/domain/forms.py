"""Form models and validation rules for content documents.

Field names follow the stored documents (camelCase aliases), so validation
error locations line up with the input names rendered in the templates.
"""

import re
from collections.abc import Callable
from typing import Annotated, Any, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from friends_united_admin.domain.content import FieldErrors

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
OTP_PATTERN = re.compile(r"^\d{6}$")

_HTTP_URL = TypeAdapter(HttpUrl)


class FormModel(BaseModel):
    """Base model for submitted forms."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


FormT = TypeVar("FormT", bound=FormModel)


def required(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError("required", message)
        return value

    return AfterValidator(check)


def min_length(limit: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < limit:
            raise PydanticCustomError("too_short", message)
        return value

    return AfterValidator(check)


def max_length(limit: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError("too_long", message)
        return value

    return AfterValidator(check)


def min_items(limit: int, message: str) -> AfterValidator:
    def check(value: list[Any]) -> list[Any]:
        if len(value) < limit:
            raise PydanticCustomError("too_few_items", message)
        return value

    return AfterValidator(check)


def matches(pattern: re.Pattern[str], message: str) -> AfterValidator:
    def check(value: str) -> str:
        if value and not pattern.match(value):
            raise PydanticCustomError("pattern", message)
        return value

    return AfterValidator(check)


def email_format(message: str) -> AfterValidator:
    """Validate an email address, leaving empty optional values alone."""

    def check(value: str) -> str:
        if not value:
            return value
        try:
            validate_email(value)
        except ValueError as exc:
            raise PydanticCustomError("email", message) from exc
        return value

    return AfterValidator(check)


def url_format(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if not value:
            return value
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            raise PydanticCustomError("url", message) from exc
        return value

    return AfterValidator(check)


def field_errors(exc: ValidationError) -> FieldErrors:
    """Flatten a validation error into dotted field paths and messages."""
    errors: FieldErrors = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or "__root__"
        errors.setdefault(path, error["msg"])
    return errors


def validate_form(
    model: type[FormT], values: dict[str, Any]
) -> tuple[FormT | None, FieldErrors]:
    """Validate submitted values, returning the model or field errors."""
    try:
        return model.model_validate(values), {}
    except ValidationError as exc:
        return None, field_errors(exc)


# Banner


class BannerForm(FormModel):
    title: str = ""
    sub_title: str = ""


# Our story


class StorySection(FormModel):
    title: Annotated[str, required("Section title is required")] = ""
    content: Annotated[
        list[str], min_items(1, "At least one content item is required")
    ] = Field(default_factory=list)
    points: list[str] = Field(default_factory=list)
    ending: str = ""
    sub_title: str = ""
    sub_points: list[str] = Field(default_factory=list)


class OurStoryForm(FormModel):
    sections: Annotated[
        list[StorySection], min_items(1, "At least one section is required")
    ] = Field(default_factory=list)


# Services


class ReferenceItem(FormModel):
    label: Annotated[str, required("Reference label is required")] = ""
    link: Annotated[str, required("Reference link is required")] = ""


class DetailSection(FormModel):
    key: Annotated[str, required("Section key is required")] = ""
    title: str = ""
    text: str = ""
    items: list[str] = Field(default_factory=list, alias="list")


class ServiceDetails(FormModel):
    intro: str = ""
    sections: list[DetailSection] = Field(default_factory=list)


class ServiceForm(FormModel):
    title: Annotated[str, required("Title is required")] = ""
    description: Annotated[str, required("Description is required")] = ""
    link: Annotated[
        str,
        required("Link is required"),
        matches(
            SLUG_PATTERN,
            "Link must be a valid URL slug "
            "(lowercase letters, numbers, and hyphens only)",
        ),
    ] = ""
    demands: Annotated[
        list[str], min_items(1, "At least one demand is required")
    ] = Field(default_factory=list)
    demand_text: str = ""
    references: list[ReferenceItem] = Field(default_factory=list)
    details: ServiceDetails = Field(default_factory=ServiceDetails)


# United voices


class VoiceItem(FormModel):
    heading: str = ""
    sub_heading: str = ""


class UnitedVoicesForm(FormModel):
    title: str = ""
    sub_title: str = ""
    description: str = ""
    voices: list[VoiceItem] = Field(default_factory=list)


# Real winners


WINNER_ICONS: tuple[tuple[str, str], ...] = (
    ("FaTrophy", "Trophy"),
    ("FaMedal", "Medal"),
    ("FaStar", "Star"),
    ("FaCrown", "Crown"),
    ("FaAward", "Award"),
    ("FaHeart", "Heart"),
    ("FaThumbsUp", "Thumbs Up"),
    ("FaCheck", "Check"),
    ("FaCheckCircle", "Check Circle"),
    ("FaGem", "Gem"),
)


class WinnerItem(FormModel):
    icon: Annotated[str, required("Icon is required")] = ""
    title: Annotated[str, required("Title is required")] = ""
    description: Annotated[
        str,
        required("Description is required"),
        max_length(500, "Description must not exceed 500 characters"),
    ] = ""


class RealWinnersForm(FormModel):
    section_title: Annotated[str, required("Section title is required")] = ""
    section_description: Annotated[
        str, required("Section description is required")
    ] = ""
    winners_list: Annotated[
        list[WinnerItem], min_items(1, "At least one winner is required")
    ] = Field(default_factory=list)


# FAQ


class FaqItem(FormModel):
    question: Annotated[str, required("Question is required")] = ""
    answer: Annotated[
        str,
        required("Answer is required"),
        min_length(20, "Answer must be at least 20 characters"),
    ] = ""


class FaqForm(FormModel):
    faq: Annotated[list[FaqItem], min_items(1, "At least one FAQ is required")] = (
        Field(default_factory=list)
    )


# Site settings


SOCIAL_ICONS: tuple[tuple[str, str], ...] = (
    ("FaFacebook", "Facebook"),
    ("FaTwitter", "Twitter"),
    ("FaInstagram", "Instagram"),
    ("FaLinkedin", "LinkedIn"),
    ("FaYoutube", "YouTube"),
    ("FaWhatsapp", "WhatsApp"),
    ("FaTiktok", "TikTok"),
    ("FaGithub", "GitHub"),
    ("FaPinterest", "Pinterest"),
    ("FaReddit", "Reddit"),
)


class SocialLink(FormModel):
    platform: Annotated[str, required("Platform name is required")] = ""
    url: Annotated[
        str, required("URL is required"), url_format("Must be a valid URL")
    ] = ""
    icon: Annotated[str, required("Icon is required")] = ""


class SettingForm(FormModel):
    site_title: Annotated[str, required("Site title is required")] = ""
    site_description: Annotated[str, required("Site description is required")] = ""
    address: str = ""
    phone: str = ""
    email: Annotated[str, email_format("Invalid email format")] = ""
    social_links: list[SocialLink] = Field(default_factory=list)


# Way cards


def _way_card(sub_header: str) -> Callable[[], "WayCard"]:
    return lambda: WayCard(sub_header=sub_header)


class WayCard(FormModel):
    sub_header: str = ""
    header: str = ""
    description: list[str] = Field(default_factory=list)


class WayCardsForm(FormModel):
    old_way: WayCard = Field(default_factory=_way_card("OLD WAY"))
    new_way: WayCard = Field(default_factory=_way_card("NEW WAY"))
