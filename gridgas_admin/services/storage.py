"""Storage bucket provisioning for console uploads."""

import logging

from gridgas_admin.integrations.baas import BaasClient

logger = logging.getLogger(__name__)

AVATARS_BUCKET = "avatars"
AVATAR_MAX_SIZE = "5MB"
AVATAR_MIME_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]


async def ensure_avatars_bucket(baas: BaasClient) -> bool:
    """Create the public avatars bucket if it is missing. Returns True when created."""
    buckets = await baas.list_buckets()
    if any(b.get("name") == AVATARS_BUCKET for b in buckets if isinstance(b, dict)):
        return False

    await baas.create_bucket(
        AVATARS_BUCKET,
        public=True,
        file_size_limit=AVATAR_MAX_SIZE,
        allowed_mime_types=AVATAR_MIME_TYPES,
    )
    logger.info("Created storage bucket %s", AVATARS_BUCKET)
    return True
