# postboard/validation.py
from typing import Dict, Optional

from postboard.models.post import NAME_MAX_LENGTH, DESCRIPTION_MAX_LENGTH

DEFAULT_MAX_IMAGE_LENGTH = 7_000_000


def validate_post_fields(
    name: Optional[str],
    description: Optional[str],
    image: Optional[str],
    max_image_length: int = DEFAULT_MAX_IMAGE_LENGTH,
) -> Dict[str, str]:
    """
    Check the writable fields of a post and return a field -> message map.
    An empty map means the input is acceptable. The server runs this before
    every write; the client runs the same rules ahead of submitting.
    """
    errors: Dict[str, str] = {}

    if name is None or not name.strip():
        errors["name"] = "Name is required"
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"Name cannot exceed {NAME_MAX_LENGTH} characters"

    if description is None or not description.strip():
        errors["description"] = "Description is required"
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"

    if image is not None and len(image) > max_image_length:
        errors["image"] = "Image data is too large"

    return errors
