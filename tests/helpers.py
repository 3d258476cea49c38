"""
Shared test helpers: image factories and storage/codec doubles
"""

import io
from typing import List, Tuple

import cv2
import numpy as np
from PIL import Image

from core.enums import ImageFormat
from core.image.converters import ImageConverters
from core.storage.base import StorageError
from core.storage.memory import MemoryStorage

ORIGIN_BUCKET = "images"
CACHE_BUCKET = "images-cache"

def make_image_bytes(
    width: int, height: int, image_format: ImageFormat = ImageFormat.JPEG, alpha: bool = False
) -> bytes:
    """Create an encoded test image with some content"""
    channels = 4 if alpha else 3
    image = np.zeros((height, width, channels), dtype=np.uint8)
    image[:, :, :3] = (40, 80, 160)
    if alpha:
        # Transparent left half, opaque right half
        image[:, width // 2 :, 3] = 255
    cv2.rectangle(
        image, (width // 4, height // 4), (width // 2, height // 2), (255, 255, 255, 255), -1
    )
    return ImageConverters.to_bytes(image, image_format, quality=90)


def image_size(data: bytes) -> Tuple[int, int]:
    """Decode bytes and return (width, height)"""
    with Image.open(io.BytesIO(data)) as image:
        return image.size


def image_format(data: bytes) -> str:
    with Image.open(io.BytesIO(data)) as image:
        return image.format


class FailingStorage(MemoryStorage):
    """MemoryStorage whose reads and/or writes always fail"""

    def __init__(self, fail_get: bool = False, fail_put: bool = False):
        super().__init__()
        self.fail_get = fail_get
        self.fail_put = fail_put
        self.put_calls: List[str] = []

    async def get(self, container: str, key: str) -> bytes:
        if self.fail_get:
            raise StorageError("storage unavailable", container, key)
        return await super().get(container, key)

    async def put(self, container, key, data, content_type="", cache_control_seconds=0):
        self.put_calls.append(key)
        if self.fail_put:
            raise StorageError("storage unavailable", container, key)
        await super().put(container, key, data, content_type, cache_control_seconds)


class FakeCodec:
    """
    Codec over (width, height) tuples that records every call.

    Lets engine tests check the operation sequence without real pixels.
    """

    def __init__(self, width: int = 1000, height: int = 800):
        self.natural = (width, height)
        self.calls: List[tuple] = []

    def decode(self, data):
        self.calls.append(("decode",))
        return self.natural

    def size(self, image):
        return image

    def resize(self, image, width, height):
        self.calls.append(("resize", width, height))
        return (width, height)

    def crop(self, image, x, y, width, height):
        self.calls.append(("crop", x, y, width, height))
        return (width, height)

    def composite_over(self, image, color, width, height):
        self.calls.append(("composite_over", color, width, height))
        return (width, height)

    def encode(self, image, image_format, quality):
        self.calls.append(("encode", image, image_format, quality))
        return b"encoded"

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]
