# postboard/client/form.py
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from postboard.images import DATA_URI_PREFIX, embed_image
from postboard.schemas.post_schema import PostRead
from postboard.validation import validate_post_fields

IMAGE_URL_MAX_LENGTH = 500
IMAGE_FILE_MAX_BYTES = 5 * 1024 * 1024


class ImageSource(str, Enum):
    URL = "url"
    FILE = "file"


@dataclass
class PostForm:
    """
    Editable state behind the create/edit screens. `validate` mirrors the
    server rules so mistakes show up before a round trip; the server still
    has the final say.
    """

    name: str = ""
    description: str = ""
    image: str = ""
    image_source: ImageSource = ImageSource.URL
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_post(cls, post: PostRead) -> "PostForm":
        source = ImageSource.FILE if (post.image or "").startswith(DATA_URI_PREFIX) else ImageSource.URL
        return cls(name=post.name, description=post.description, image=post.image or "", image_source=source)

    def set_field(self, name: str, value: str) -> None:
        setattr(self, name, value)
        self.errors.pop(name, None)

    def use_source(self, source: ImageSource) -> None:
        # switching modes drops whatever the other mode held
        self.image_source = source
        self.clear_image()

    def clear_image(self) -> None:
        self.image = ""
        self.errors.pop("image", None)

    def attach_file(self, path: Union[str, Path]) -> bool:
        """Inline a local image file as a data uri. Returns False and records an error on rejection."""
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        if not media_type or not media_type.startswith("image/"):
            self.errors["image"] = "Please select a valid image file"
            return False
        try:
            too_large = path.stat().st_size > IMAGE_FILE_MAX_BYTES
            data = None if too_large else path.read_bytes()
        except OSError:
            self.errors["image"] = "Failed to read file"
            return False
        if too_large:
            self.errors["image"] = "Image size must be less than 5MB"
            return False

        self.image_source = ImageSource.FILE
        self.image = embed_image(data, media_type).to_wire()
        self.errors.pop("image", None)
        return True

    def validate(self) -> bool:
        errors = validate_post_fields(self.name, self.description, None)
        if self.image and not self.image.startswith(DATA_URI_PREFIX) and len(self.image) > IMAGE_URL_MAX_LENGTH:
            errors["image"] = f"Image URL cannot exceed {IMAGE_URL_MAX_LENGTH} characters"
        self.errors = errors
        return not errors

    def payload(self) -> Dict[str, Optional[str]]:
        return {"name": self.name, "description": self.description, "image": self.image or None}
