import base64
from typing import Optional, Tuple

_DATA_URL_PREFIX = "data:"


def to_data_url(raw: bytes, mime: str = "image/png") -> str:
    """Encode uploaded image bytes as data-URL text for storage in a record."""
    encoded = base64.b64encode(raw).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def from_data_url(value: str) -> Optional[Tuple[str, bytes]]:
    """Decode a stored data URL into (mime, bytes). Plain URLs return None."""
    if not value or not value.startswith(_DATA_URL_PREFIX) or ";base64," not in value:
        return None
    header, payload = value.split(",", 1)
    mime = header[len(_DATA_URL_PREFIX):].split(";", 1)[0] or "application/octet-stream"
    return mime, base64.b64decode(payload)


def uploaded_to_data_url(uploaded) -> str:
    """Convert a Streamlit UploadedFile / camera capture into data-URL text."""
    if uploaded is None:
        return ""
    mime = getattr(uploaded, "type", None) or "image/png"
    return to_data_url(uploaded.getvalue(), mime)
