# Pydantic schemas

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Literal


class SpeakerInput(BaseModel):
    """Speaker as submitted; photo is a raw data URI"""

    name: str = ""
    role: str = ""
    topic: str = ""
    featured: bool = False
    photo: str = ""


class SponsorInput(BaseModel):
    """Sponsor/partner as submitted; logo is a raw data URI"""

    name: str = ""
    website: str = ""
    tier: str = "silver"
    logo: str = ""


class AgendaEntry(BaseModel):
    day: int = 1
    time: str = ""
    title: str = ""
    speaker: str = ""
    location: str = ""
    type: str = "session"
    duration: str = "1 hour"


class Highlight(BaseModel):
    icon: str = "zap"
    title: str = ""
    description: str = ""


class GalleryItemInput(BaseModel):
    type: Literal["image", "video"] = "image"
    src: str = ""
    title: str = ""
    category: str = "Event"


class CallToAction(BaseModel):
    text: str
    link: str


class SocialLinks(BaseModel):
    facebook: str = ""
    twitter: str = ""
    instagram: str = ""
    linkedin: str = ""
    youtube: str = ""


class NavLink(BaseModel):
    label: str = ""
    link: str = ""


class EventInput(BaseModel):
    """Canonical event submission, whatever field names the client used"""

    event_name: str = Field(..., min_length=1)
    event_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    selected_template: Literal["1", "2"] = "1"
    event_time: str = ""
    venue: str = ""
    description: str = ""
    about_title: str = "About the Event"
    video_embed_url: str = ""
    map_embed_url: str = ""
    show_countdown: bool = True

    # Named asset slots (banner, eventLogo, footerLogo) -> data URI
    assets: dict[str, str] = Field(default_factory=dict)

    primary_cta: CallToAction = CallToAction(text="Register Now", link="#contact")
    secondary_cta: CallToAction = CallToAction(text="View Agenda", link="#agenda")

    objectives: list[str] = Field(default_factory=list)
    speakers: list[SpeakerInput] = Field(default_factory=list)
    sponsors: list[SponsorInput] = Field(default_factory=list)
    agenda: list[AgendaEntry] = Field(default_factory=list)
    highlights: list[Highlight] = Field(default_factory=list)
    gallery_items: list[GalleryItemInput] = Field(default_factory=list)
    videos: list[str] = Field(default_factory=list)

    email: str = ""
    phone: str = ""
    organizer: str = ""
    whatsapp: str = ""
    contact_form_message: str = (
        "Ready to join us? Register now or get in touch for more information."
    )
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    footer_nav_links: list[NavLink] = Field(default_factory=list)

    @field_validator('event_name')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Field cannot be empty or whitespace')
        return v.strip()

    @field_validator('event_date')
    @classmethod
    def validate_calendar_date(cls, v: str) -> str:
        try:
            datetime.strptime(v, "%Y-%m-%d")
        except ValueError:
            raise ValueError('Invalid date format. Expected YYYY-MM-DD')
        return v


class EventCreatedResponse(BaseModel):
    """Response for a successful event creation"""

    message: str
    eventId: str
    eventUrl: str
    previewUrl: str
