# postboard/images.py
"""
Image values carried by a post.

On the wire and in the database an image is a plain string or null. Inside
the application it is either a `RemoteImage` (an http(s) url or anything
else that is not a data uri) or an `EmbeddedImage` (any ``data:`` uri, usually a
base64 payload). `None` stands for "no image".
"""
import base64
from dataclasses import dataclass
from typing import Optional, Union

DATA_URI_PREFIX = "data:"


@dataclass(frozen=True)
class RemoteImage:
    url: str

    @property
    def kind(self) -> str:
        return "remote"


@dataclass(frozen=True)
class EmbeddedImage:
    media_type: str
    payload: str  # whatever follows the comma, not decoded

    @property
    def kind(self) -> str:
        return "embedded"

    def to_wire(self) -> str:
        return f"{DATA_URI_PREFIX}{self.media_type};base64,{self.payload}"


Image = Union[RemoteImage, EmbeddedImage]


def classify_image(value: Optional[str]) -> Optional[Image]:
    """Blank strings count as no image. Image content is never checked."""
    if value is None or not value.strip():
        return None
    if value.startswith(DATA_URI_PREFIX):
        header, _, payload = value[len(DATA_URI_PREFIX):].partition(",")
        media_type = header.split(";", 1)[0] or "application/octet-stream"
        return EmbeddedImage(media_type=media_type, payload=payload)
    return RemoteImage(url=value)


def embed_image(data: bytes, media_type: str) -> EmbeddedImage:
    return EmbeddedImage(media_type=media_type, payload=base64.b64encode(data).decode("ascii"))
