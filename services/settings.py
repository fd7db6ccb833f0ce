import logging
import re
from dataclasses import asdict
from typing import Dict, Any

from domain.models import SiteSettings, OpResult, from_dict
from services import persistence

logger = logging.getLogger(__name__)

KEY = 'settings'
_HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


def get_settings() -> Dict[str, Any]:
    """Stored settings over built-in defaults; always returns a full record."""
    stored = persistence.load_record(KEY) or {}
    return asdict(from_dict(SiteSettings, {**asdict(SiteSettings()), **stored}))


def save_settings(settings: Dict[str, Any]) -> OpResult:
    merged = asdict(from_dict(SiteSettings, {**get_settings(), **settings}))
    if not _HEX_COLOR.match(str(merged['primary_color'])):
        return OpResult.invalid(f"Theme color must look like #rrggbb, got {merged['primary_color']!r}")
    if not str(merged['title']).strip():
        return OpResult.invalid("Site title is required")
    merged['dark_mode'] = bool(merged['dark_mode'])
    persistence.save_record(KEY, merged)
    logger.info("Site settings updated (title=%s, color=%s)", merged['title'], merged['primary_color'])
    return OpResult.success(merged)
