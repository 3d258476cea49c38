"""
Image transformation engine.

Runs decode -> resize -> crop -> background composite -> encode for one
request. All pixel work goes through an injected ``ImageCodec``.
"""

import logging
from typing import Optional, Tuple

from api.exceptions import TransformError
from core.enums import CropPosition, FitMode, ImageFormat
from core.image.codec import ImageCodec, RasterCodec
from core.image.converters import ImageConverters
from schemas import TransformConfig
from transform.geometry import resolve_dimensions, round_dimension

logger = logging.getLogger(__name__)


def crop_offsets(
    width: int, height: int, target_width: int, target_height: int, position: CropPosition
) -> Tuple[int, int]:
    """
    Top-left corner of the crop rectangle for an anchor.

    Example:
        >>> crop_offsets(500, 400, 400, 400, CropPosition.CENTER)
        (50, 0)
    """
    centered_x = round_dimension((width - target_width) / 2)
    centered_y = round_dimension((height - target_height) / 2)

    if position == CropPosition.TOP:
        return centered_x, 0
    if position == CropPosition.BOTTOM:
        return centered_x, height - target_height
    if position == CropPosition.LEFT:
        return 0, centered_y
    if position == CropPosition.RIGHT:
        return width - target_width, centered_y
    return centered_x, centered_y


class TransformEngine:
    """Applies a TransformConfig to source image bytes."""

    def __init__(self, codec: Optional[ImageCodec] = None):
        """
        Initialize transform engine.

        Args:
            codec: Raster codec; defaults to RasterCodec
        """
        self.codec = codec or RasterCodec()

    def transform(
        self, data: bytes, config: TransformConfig, source_format: ImageFormat
    ) -> Tuple[bytes, ImageFormat]:
        """
        Transform image according to configuration.

        Args:
            data: Encoded source image
            config: Validated transformation config
            source_format: Format inferred from the source path

        Returns:
            Tuple of (encoded output, output format)

        Raises:
            TransformError: If the source cannot be decoded or the result
                cannot be encoded
        """
        try:
            image = self.codec.decode(data)
        except Exception as e:
            raise TransformError(f"Failed to decode image: {e}") from e

        natural_width, natural_height = self.codec.size(image)
        geometry = resolve_dimensions(
            natural_width, natural_height, config.width, config.height, config.fit
        )

        if (geometry.width, geometry.height) != (natural_width, natural_height):
            image = self.codec.resize(image, geometry.width, geometry.height)

        # Cover: trim the overflow back to the requested box
        if geometry.should_crop and config.width is not None and config.height is not None:
            x, y = crop_offsets(
                geometry.width, geometry.height, config.width, config.height, config.crop
            )
            if (x, y, geometry.width, geometry.height) != (0, 0, config.width, config.height):
                image = self.codec.crop(image, x, y, config.width, config.height)

        if config.fit in (FitMode.CONTAIN, FitMode.FILL) and config.background:
            canvas_width = config.width if config.width is not None else geometry.width
            canvas_height = config.height if config.height is not None else geometry.height
            image = self.codec.composite_over(
                image,
                ImageConverters.hex_to_rgb(config.background),
                canvas_width,
                canvas_height,
            )

        output_format = config.format or source_format

        try:
            encoded = self.codec.encode(image, output_format, config.quality)
        except Exception as e:
            raise TransformError(f"Failed to encode image: {e}") from e

        logger.debug(
            f"Transformed {natural_width}x{natural_height} -> "
            f"{geometry.width}x{geometry.height} ({output_format.value}, {len(encoded)} bytes)"
        )
        return encoded, output_format
