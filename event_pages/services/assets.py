"""
Asset pipeline: turns base64 data URIs from a submission into public URLs.

Uploading is best effort. A malformed or oversized payload, a slow upload or a
failing upload all end up as an empty URL for that asset, and if the whole
batch runs past its budget every asset comes back empty. Event creation never
fails because of an image.
"""

import asyncio
import base64
import binascii
import re
from dataclasses import dataclass, field

import structlog

from event_pages.core.config import Settings, settings as default_settings
from event_pages.core.storage import BlobStore
from event_pages.schemas.event import (
    EventInput,
    GalleryItemInput,
    SpeakerInput,
    SponsorInput,
)

logger = structlog.get_logger()

DATA_URI_PATTERN = re.compile(r"^data:([A-Za-z0-9.+/-]+);base64,(.+)$", re.DOTALL)

# asset slot -> object key template
ESSENTIAL_KEYS = {
    "banner": "banners/{event_id}_banner",
    "eventLogo": "logos/{event_id}_logo",
    "footerLogo": "footers/{event_id}_footer",
}

EXTENSIONS = (
    ("png", "png"),
    ("gif", "gif"),
    ("webp", "webp"),
    ("svg", "svg"),
    ("mp4", "mp4"),
    ("webm", "webm"),
)


@dataclass(frozen=True)
class DecodedAsset:
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        for marker, extension in EXTENSIONS:
            if marker in self.content_type:
                return extension
        return "jpg"


def decode_data_uri(value: str | None, max_bytes: int) -> DecodedAsset | None:
    """
    Decode a ``data:<mime>;base64,<payload>`` string.

    Returns None when the value is missing, not a base64 data URI, not valid
    base64, or decodes to ``max_bytes`` or more.
    """
    if not value:
        return None

    match = DATA_URI_PATTERN.match(value.strip())
    if not match:
        return None

    content_type, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None

    if len(data) >= max_bytes:
        return None
    return DecodedAsset(content_type=content_type, data=data)


def _speaker(speaker: SpeakerInput, photo: str = "") -> dict:
    return {
        "name": speaker.name,
        "role": speaker.role,
        "topic": speaker.topic,
        "photo": photo,
        "featured": speaker.featured,
    }


def _sponsor(sponsor: SponsorInput, logo: str = "") -> dict:
    return {
        "name": sponsor.name,
        "logo": logo,
        "website": sponsor.website,
        "tier": sponsor.tier,
    }


def _gallery_item(item: GalleryItemInput, src: str = "") -> dict:
    return {
        "type": item.type,
        "src": src,
        "title": item.title,
        "category": item.category,
    }


@dataclass
class ProcessedAssets:
    """Public URLs for a submission; an empty string means no usable asset"""

    hero_image: str = ""
    event_logo: str = ""
    footer_logo: str = ""
    speakers: list[dict] = field(default_factory=list)
    sponsors: list[dict] = field(default_factory=list)
    gallery_items: list[dict] = field(default_factory=list)

    @classmethod
    def empty(cls, event_input: EventInput) -> "ProcessedAssets":
        """Result with every URL blank but all scalar entity fields kept"""
        return cls(
            speakers=[_speaker(s) for s in event_input.speakers],
            sponsors=[_sponsor(s) for s in event_input.sponsors],
            gallery_items=[_gallery_item(g) for g in event_input.gallery_items],
        )


class AssetPipeline:
    """Uploads a submission's assets concurrently under a time budget"""

    def __init__(
            self,
            blob_store: BlobStore,
            max_asset_bytes: int = 1024 * 1024,
            upload_timeout: float = 3.0,
            batch_timeout: float = 5.0,
            upload_entity_images: bool = False
    ):
        self.blob_store = blob_store
        self.max_asset_bytes = max_asset_bytes
        self.upload_timeout = upload_timeout
        self.batch_timeout = batch_timeout
        self.upload_entity_images = upload_entity_images

    @classmethod
    def from_settings(
            cls,
            blob_store: BlobStore,
            config: Settings = default_settings
    ) -> "AssetPipeline":
        return cls(
            blob_store,
            max_asset_bytes=config.max_asset_bytes,
            upload_timeout=config.asset_upload_timeout,
            batch_timeout=config.asset_batch_timeout,
            upload_entity_images=config.upload_entity_images,
        )

    async def upload_asset(self, data_uri: str | None, key_stem: str) -> str:
        """Upload one data URI under key_stem; returns its URL or ''"""
        if not data_uri:
            return ""

        asset = decode_data_uri(data_uri, self.max_asset_bytes)
        if asset is None:
            logger.warning("asset_rejected", key=key_stem, max_bytes=self.max_asset_bytes)
            return ""

        key = f"{key_stem}.{asset.extension}"
        try:
            url = await asyncio.wait_for(
                self.blob_store.upload(key, asset.data, asset.content_type),
                timeout=self.upload_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("asset_upload_timeout", key=key, timeout=self.upload_timeout)
            return ""
        except Exception as e:
            logger.warning("asset_upload_failed", key=key, error=str(e))
            return ""

        logger.info("asset_uploaded", key=key, url=url, size=len(asset.data))
        return url or ""

    async def process(self, event_id: str, event_input: EventInput) -> ProcessedAssets:
        """
        Upload everything for one event.

        Never raises; when the batch budget runs out the canonical empty
        result is returned. Uploads still in flight at that point are
        abandoned, not rolled back.
        """
        try:
            return await asyncio.wait_for(
                self._process(event_id, event_input),
                timeout=self.batch_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "asset_batch_timeout",
                event_id=event_id,
                timeout=self.batch_timeout
            )
            return ProcessedAssets.empty(event_input)

    async def _process(self, event_id: str, event_input: EventInput) -> ProcessedAssets:
        uploads = [
            self.upload_asset(event_input.assets.get(slot), key.format(event_id=event_id))
            for slot, key in ESSENTIAL_KEYS.items()
        ]

        speakers = event_input.speakers
        sponsors = event_input.sponsors
        gallery = event_input.gallery_items

        if self.upload_entity_images:
            uploads += [
                self.upload_asset(s.photo, f"speakers/{event_id}_speaker_{i}")
                for i, s in enumerate(speakers)
            ]
            uploads += [
                self.upload_asset(s.logo, f"sponsors/{event_id}_sponsor_{i}")
                for i, s in enumerate(sponsors)
            ]
            uploads += [
                self.upload_asset(g.src, f"gallery/{event_id}_gallery_{i}")
                for i, g in enumerate(gallery)
            ]

        results = await asyncio.gather(*uploads)
        hero_image, event_logo, footer_logo = results[:3]

        entity_urls = list(results[3:])
        if not self.upload_entity_images:
            entity_urls = [""] * (len(speakers) + len(sponsors) + len(gallery))

        photos = entity_urls[:len(speakers)]
        logos = entity_urls[len(speakers):len(speakers) + len(sponsors)]
        sources = entity_urls[len(speakers) + len(sponsors):]

        processed = ProcessedAssets(
            hero_image=hero_image,
            event_logo=event_logo,
            footer_logo=footer_logo,
            speakers=[_speaker(s, url) for s, url in zip(speakers, photos)],
            sponsors=[_sponsor(s, url) for s, url in zip(sponsors, logos)],
            gallery_items=[_gallery_item(g, url) for g, url in zip(gallery, sources)],
        )

        logger.info(
            "assets_processed",
            event_id=event_id,
            uploaded=sum(1 for url in results if url),
            attempted=len(uploads)
        )
        return processed
