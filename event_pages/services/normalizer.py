"""
Request normalization for event submissions.

Clients written against different versions of the create endpoint send the
same data under different names (``title`` vs ``eventName``, ``partners`` vs
``sponsors``, ``template: "modern"`` vs ``selectedTemplate: "2"``, ...). This
module maps all of them onto one canonical ``EventInput`` at the boundary so
nothing downstream needs to know about the older shapes.
"""

import json
from typing import Any, Mapping

from pydantic import ValidationError

from event_pages.core.config import Settings, settings as default_settings
from event_pages.schemas.event import (
    AgendaEntry,
    CallToAction,
    EventInput,
    GalleryItemInput,
    Highlight,
    NavLink,
    SocialLinks,
    SpeakerInput,
    SponsorInput,
)


class EventValidationError(ValueError):
    """Raised when a submission cannot be turned into an EventInput"""


# canonical field -> accepted request names, first non-empty wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "event_name": ("eventName", "title", "name"),
    "event_date": ("eventDate", "date"),
    "event_time": ("eventTime", "time"),
    "venue": ("venue", "location"),
    "description": ("description",),
    "about_title": ("aboutTitle",),
    "video_embed_url": ("videoEmbedUrl",),
    "map_embed_url": ("mapEmbedUrl",),
    "contact_form_message": ("contactFormMessage",),
}

ASSET_ALIASES: dict[str, tuple[str, ...]] = {
    "banner": ("bannerBase64", "heroImage", "banner", "bannerImage"),
    "eventLogo": ("eventLogo", "logoBase64"),
    "footerLogo": ("footerLogo", "footerLogoBase64"),
}

TEMPLATE_ALIASES = {"1": "1", "2": "2", "classic": "1", "modern": "2"}

REQUIRED_FIELDS = {"event_name": "eventName", "event_date": "eventDate"}

CONTACT_FIELDS = ("email", "phone", "organizer", "whatsapp")


def _first(data: Mapping[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str) and value.strip():
        return value.strip().lower() not in ("false", "0", "no", "off")
    return default


def _items(value: Any, limit: int) -> list[dict]:
    """Mapping entries of a list field, capped; anything else is empty"""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)][:limit]


def _strings(value: Any, limit: int) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_text(item) for item in value if _text(item)][:limit]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def parse_event_body(raw: bytes | str) -> dict[str, Any]:
    """Decode a request body into a JSON object; NaN and Infinity are refused"""
    try:
        body = json.loads(raw or b"{}", parse_constant=_reject_constant)
    except RecursionError:
        raise EventValidationError("Invalid JSON body: nested too deeply")
    except ValueError as e:
        raise EventValidationError(f"Invalid JSON body: {e}")

    if not isinstance(body, dict):
        raise EventValidationError("Request body must be a JSON object")
    return body


def _template(body: Mapping[str, Any]) -> str:
    raw = _first(body, ("selectedTemplate", "template"))
    if raw is None:
        return "1"
    template = TEMPLATE_ALIASES.get(_text(raw).lower())
    if template is None:
        raise EventValidationError('Invalid template selection. Must be "1" or "2"')
    return template


def _cta(value: Any, default_text: str, default_link: str) -> CallToAction:
    value = value if isinstance(value, dict) else {}
    return CallToAction(
        text=_text(value.get("text")) or default_text,
        link=_text(value.get("link")) or default_link,
    )


def _speakers(body: Mapping[str, Any], limit: int) -> list[SpeakerInput]:
    return [
        SpeakerInput(
            name=_text(speaker.get("name")),
            role=_text(_first(speaker, ("role", "designation"))),
            topic=_text(speaker.get("topic")),
            featured=bool(speaker.get("featured")),
            photo=_text(_first(speaker, ("photo", "photoBase64", "image"))),
        )
        for speaker in _items(body.get("speakers"), limit)
    ]


def _sponsors(body: Mapping[str, Any], limit: int) -> list[SponsorInput]:
    return [
        SponsorInput(
            name=_text(sponsor.get("name")),
            website=_text(sponsor.get("website")),
            tier=_text(sponsor.get("tier")) or "silver",
            logo=_text(_first(sponsor, ("logo", "logoBase64"))),
        )
        for sponsor in _items(_first(body, ("sponsors", "partners")), limit)
    ]


def _agenda(body: Mapping[str, Any], limit: int) -> list[AgendaEntry]:
    return [
        AgendaEntry(
            day=_int(session.get("day"), 1),
            time=_text(session.get("time")),
            title=_text(session.get("title")),
            speaker=_text(session.get("speaker")),
            location=_text(session.get("location")),
            type=_text(session.get("type")) or "session",
            duration=_text(session.get("duration")) or "1 hour",
        )
        for session in _items(body.get("agenda"), limit)
    ]


def _highlights(body: Mapping[str, Any], limit: int) -> list[Highlight]:
    return [
        Highlight(
            icon=_text(highlight.get("icon")) or "zap",
            title=_text(highlight.get("title")),
            description=_text(highlight.get("description")),
        )
        for highlight in _items(body.get("highlights"), limit)
    ]


def _gallery(body: Mapping[str, Any], limit: int) -> list[GalleryItemInput]:
    return [
        GalleryItemInput(
            type="video" if _text(item.get("type")).lower() == "video" else "image",
            src=_text(item.get("src")),
            title=_text(item.get("title")),
            category=_text(item.get("category")) or "Event",
        )
        for item in _items(_first(body, ("galleryItems", "gallery")), limit)
    ]


def _social_links(body: Mapping[str, Any]) -> SocialLinks:
    links = body.get("socialLinks")
    links = links if isinstance(links, dict) else {}
    return SocialLinks(**{
        name: _text(links.get(name))
        for name in SocialLinks.model_fields
    })


def _nav_links(body: Mapping[str, Any], limit: int) -> list[NavLink]:
    return [
        NavLink(label=_text(link.get("label")), link=_text(link.get("link")))
        for link in _items(body.get("footerNavLinks"), limit)
    ]


def _validation_message(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {detail['msg']}")
    return "; ".join(messages)


def normalize_event_payload(
        body: Mapping[str, Any],
        config: Settings = default_settings
) -> EventInput:
    """
    Map any supported request shape onto EventInput.

    Raises:
        EventValidationError: required field missing, unknown template,
            or a malformed date
    """
    fields: dict[str, Any] = {}
    for canonical, names in FIELD_ALIASES.items():
        value = _first(body, names)
        if value is not None:
            fields[canonical] = _text(value)

    missing = [
        request_name for canonical, request_name in REQUIRED_FIELDS.items()
        if not fields.get(canonical)
    ]
    if missing:
        raise EventValidationError(f"Missing required fields: {', '.join(missing)}")

    contact = body.get("contact")
    contact = contact if isinstance(contact, dict) else {}
    for name in CONTACT_FIELDS:
        fields[name] = _text(_first(body, (name,)) or contact.get(name))

    assets = {}
    for slot, names in ASSET_ALIASES.items():
        value = _first(body, names)
        if isinstance(value, str):
            assets[slot] = value.strip()

    try:
        return EventInput(
            **fields,
            selected_template=_template(body),
            show_countdown=_flag(body.get("showCountdown"), True),
            assets=assets,
            primary_cta=_cta(body.get("primaryCTA"), "Register Now", "#contact"),
            secondary_cta=_cta(body.get("secondaryCTA"), "View Agenda", "#agenda"),
            objectives=_strings(body.get("objectives"), config.max_objectives),
            speakers=_speakers(body, config.max_speakers),
            sponsors=_sponsors(body, config.max_sponsors),
            agenda=_agenda(body, config.max_agenda_items),
            highlights=_highlights(body, config.max_highlights),
            gallery_items=_gallery(body, config.max_gallery_items),
            videos=_strings(body.get("videos"), config.max_videos),
            social_links=_social_links(body),
            footer_nav_links=_nav_links(body, config.max_nav_links),
        )
    except ValidationError as e:
        raise EventValidationError(_validation_message(e))
