"""
Image encoding helpers: data URL parsing, normalization, aspect-ratio inference and mask preparation
"""
import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from podmayak.core.errors import ImageDecodeError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"
DEFAULT_ASPECT_RATIO = "4:3"

# Ratios the image backend can produce, in tie-break order
SUPPORTED_ASPECT_RATIOS: Tuple[Tuple[str, float], ...] = (
    ("1:1", 1.0),
    ("3:4", 3 / 4),
    ("4:3", 4 / 3),
    ("9:16", 9 / 16),
    ("16:9", 16 / 9),
)

# Any painted pixel whose red channel exceeds this becomes editable (white)
MASK_THRESHOLD = 50

_DATA_URL_RE = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)
_WHITESPACE_RE = re.compile(r"[\s\r\n]+")


@dataclass(frozen=True)
class EncodedImage:
    """Canonical form of an image: mime type plus whitespace-free base64 payload"""

    mime_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_bytes(self) -> bytes:
        try:
            return base64.b64decode(self.data, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


def is_data_url(value: str) -> bool:
    return value.startswith("data:")


def is_remote_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://") or value.startswith("/static/")


def split_data_url(value: str) -> EncodedImage:
    """Parse a data URL (or a bare base64 string) into mime type and payload"""
    mime_type = DEFAULT_MIME_TYPE
    match = _DATA_URL_RE.match(value)
    if match:
        mime_type = match.group(1)
        payload = match.group(2)
    else:
        parts = value.split(",")
        if len(parts) == 2:
            mime_match = re.search(r":(.*?);", parts[0])
            if mime_match:
                mime_type = mime_match.group(1)
            payload = parts[1]
        else:
            payload = value

    return EncodedImage(mime_type=mime_type, data=_WHITESPACE_RE.sub("", payload))


def sniff_mime_type(data: bytes) -> str:
    """Mime type from the magic bytes of raw image data"""
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_MIME_TYPE


def encode_bytes(data: bytes, mime_type: str = "image/png") -> EncodedImage:
    return EncodedImage(mime_type=mime_type, data=base64.b64encode(data).decode("utf-8"))


def open_image(value: str) -> Image.Image:
    """Decode an encoded image into a PIL image with EXIF orientation applied"""
    try:
        image = Image.open(io.BytesIO(split_data_url(value).to_bytes()))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    return ImageOps.exif_transpose(image)


def image_size(value: str) -> Optional[Tuple[int, int]]:
    """Pixel (width, height) of an encoded image, or None when it cannot be decoded"""
    try:
        return open_image(value).size
    except ImageDecodeError as e:
        logger.warning(f"Could not read image dimensions: {e}")
        return None


def closest_aspect_ratio(width: int, height: int) -> str:
    """Pick the supported ratio with the smallest absolute difference to width/height"""
    if width <= 0 or height <= 0:
        return DEFAULT_ASPECT_RATIO

    ratio = width / height
    best_id, best_value = SUPPORTED_ASPECT_RATIOS[0]
    for ratio_id, value in SUPPORTED_ASPECT_RATIOS[1:]:
        if abs(value - ratio) < abs(best_value - ratio):
            best_id, best_value = ratio_id, value
    return best_id


def infer_aspect_ratio(value: str) -> str:
    """Aspect-ratio bucket for an encoded image, falling back to 4:3 when it cannot be decoded"""
    size = image_size(value)
    if size is None:
        return DEFAULT_ASPECT_RATIO
    return closest_aspect_ratio(*size)


def normalize_image(value: str, max_size: int = 4096) -> EncodedImage:
    """
    Minimal preprocessing before sending a photo to the image backend.
    Applies EXIF orientation, converts to RGB and only downsizes very large
    images, so editing quality is preserved.
    """
    image = open_image(value)

    if image.mode != "RGB":
        image = image.convert("RGB")

    if image.width > max_size or image.height > max_size:
        image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
        logger.info(f"Resized large image to {image.width}x{image.height} to fit within {max_size}px")

    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=95)
    return encode_bytes(buffer.getvalue(), mime_type="image/jpeg")


def binarize_mask(value: str) -> EncodedImage:
    """
    Turn a painted overlay into a binary mask: white where the user painted,
    black everywhere else. Transparent overlays are composited onto black
    first. Already-binary masks come out unchanged.
    """
    mask = open_image(value)

    if mask.mode in ("RGBA", "LA", "P"):
        mask = mask.convert("RGBA")
        background = Image.new("RGBA", mask.size, (0, 0, 0, 255))
        mask = Image.alpha_composite(background, mask)

    red = mask.convert("RGB").getchannel("R")
    binary = red.point(lambda level: 255 if level > MASK_THRESHOLD else 0)

    buffer = io.BytesIO()
    binary.convert("RGB").save(buffer, format="PNG")
    return encode_bytes(buffer.getvalue(), mime_type="image/png")
