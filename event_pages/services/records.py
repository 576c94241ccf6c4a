import time
import uuid

from event_pages.schemas.event import EventInput
from event_pages.services.assets import ProcessedAssets


def new_event_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def build_event_record(
        event_id: str,
        event_input: EventInput,
        assets: ProcessedAssets,
        created_at: int
) -> dict:
    """
    Build the persisted record for a new event.

    Asset URLs come only from ``assets``; the raw data URIs in ``event_input``
    never reach the record.
    """
    return {
        # Primary identifiers
        "eventId": event_id,
        "createdAt": created_at,
        "updatedAt": created_at,
        "status": "active",

        "selectedTemplate": event_input.selected_template,

        # Header
        "eventName": event_input.event_name,
        "eventDate": event_input.event_date,
        "eventTime": event_input.event_time,
        "venue": event_input.venue,
        "eventLogo": assets.event_logo,
        "heroImage": assets.hero_image,
        "showCountdown": event_input.show_countdown,
        "primaryCTA": event_input.primary_cta.model_dump(),
        "secondaryCTA": event_input.secondary_cta.model_dump(),

        # About
        "aboutTitle": event_input.about_title,
        "description": event_input.description,
        "videoEmbedUrl": event_input.video_embed_url,
        "objectives": list(event_input.objectives),
        "videos": list(event_input.videos),

        # Lists
        "speakers": assets.speakers,
        "agenda": [entry.model_dump() for entry in event_input.agenda],
        "highlights": [item.model_dump() for item in event_input.highlights],
        "sponsors": assets.sponsors,
        "galleryItems": assets.gallery_items,

        # Contact
        "email": event_input.email,
        "phone": event_input.phone,
        "organizer": event_input.organizer,
        "whatsapp": event_input.whatsapp,
        "mapEmbedUrl": event_input.map_embed_url,
        "contactFormMessage": event_input.contact_form_message,
        "socialLinks": event_input.social_links.model_dump(),

        # Footer
        "footerLogo": assets.footer_logo,
        "footerNavLinks": [link.model_dump() for link in event_input.footer_nav_links],
    }
