"""
Tests for cache key generation
"""

import pytest

from api.exceptions import ValidationError
from core.enums import ImageFormat
from transform.cache_key import (
    build_cache_key,
    get_extension_from_format,
    get_mime_type,
    infer_format_from_path,
)
from transform.params import parse_query_params


@pytest.fixture
def key_for(limits):
    """Build the cache key for raw query params"""

    def _key_for(**params):
        params.setdefault("path", "test.jpg")
        config = parse_query_params(params, limits)
        return build_cache_key(config, limits.default_quality, limits.default_bucket)

    return _key_for


class TestFormatHelpers:
    """Format/extension/MIME helpers"""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("a.jpg", ImageFormat.JPEG),
            ("a.JPEG", ImageFormat.JPEG),
            ("dir/a.png", ImageFormat.PNG),
            ("dir.png/a", ImageFormat.JPEG),
            ("a.webp", ImageFormat.JPEG),
            ("noext", ImageFormat.JPEG),
        ],
    )
    def test_infer_format_from_path(self, path, expected):
        assert infer_format_from_path(path) == expected

    def test_extension_and_mime(self):
        assert get_extension_from_format(ImageFormat.JPEG) == "jpg"
        assert get_extension_from_format(ImageFormat.PNG) == "png"
        assert get_mime_type(ImageFormat.JPEG) == "image/jpeg"
        assert get_mime_type(ImageFormat.PNG) == "image/png"


class TestBuildCacheKey:
    """Key layout and default collapsing"""

    def test_width_only(self, key_for):
        assert key_for(w="400") == "test__w=400.jpg"

    def test_no_params_keeps_path(self, key_for):
        assert key_for() == "test.jpg"

    def test_full_key_part_order(self, key_for):
        key = key_for(
            path="products/shoe.png",
            w="400",
            h="300",
            fit="contain",
            format="jpeg",
            q="60",
            bg="FFFFFF",
            crop="top",
        )
        assert key == (
            "products/shoe__w=400__h=300__fit=contain__fmt=jpeg"
            "__q=60__bg=ffffff__crop=top.jpg"
        )

    def test_explicit_defaults_share_key(self, key_for):
        implicit = key_for(w="400", h="300")
        explicit = key_for(w="400", h="300", fit="cover", crop="center", q="80", format="jpeg")
        assert implicit == explicit == "test__w=400__h=300.jpg"

    def test_fit_and_crop_ignored_without_dimensions(self, key_for):
        assert key_for(fit="fill", crop="left") == "test.jpg"

    def test_format_only_when_different(self, key_for):
        assert key_for(format="jpeg") == "test.jpg"
        assert key_for(format="png") == "test__fmt=png.png"
        assert key_for(path="logo.png", format="jpeg") == "logo__fmt=jpeg.jpg"

    def test_unknown_extension_defaults_to_jpg(self, key_for):
        assert key_for(path="photo.webp", w="10") == "photo__w=10.jpg"

    def test_non_default_quality(self, key_for, limits):
        assert key_for(q="81") == "test__q=81.jpg"
        config = parse_query_params({"path": "test.jpg", "q": "80"}, limits)
        assert build_cache_key(config, default_quality=70) == "test__q=80.jpg"

    def test_background_is_case_insensitive(self, key_for):
        assert key_for(bg="ABCDEF") == key_for(bg="abcdef") == "test__bg=abcdef.jpg"

    @pytest.mark.parametrize(
        "params",
        [
            {"w": "401"},
            {"h": "400"},
            {"w": "400", "fit": "fill"},
            {"w": "400", "crop": "bottom"},
            {"w": "400", "bg": "000000"},
            {"w": "400", "q": "50"},
            {"w": "400", "format": "png"},
        ],
    )
    def test_differing_fields_give_distinct_keys(self, key_for, params):
        assert key_for(**params) != key_for(w="400")

    def test_non_default_bucket_prefixes_key(self, key_for):
        assert key_for(bucket="images", w="10") == "test__w=10.jpg"
        assert key_for(bucket="avatars", w="10") == "__bucket=avatars/test__w=10.jpg"

    def test_bucket_prefix_differs_from_nested_path(self, key_for):
        in_bucket = key_for(bucket="avatars", path="a.jpg", w="10")
        nested = key_for(path="avatars/a.jpg", w="10")
        assert in_bucket != nested
        assert nested == "avatars/a__w=10.jpg"

    def test_path_cannot_spell_bucket_prefix(self, key_for):
        with pytest.raises(ValidationError):
            key_for(path="__bucket=avatars/a.jpg", w="10")

    def test_path_cannot_spell_parameter_part(self, key_for):
        with pytest.raises(ValidationError):
            key_for(path="test__w=400.jpg")
        assert key_for(w="400") == "test__w=400.jpg"

    def test_deterministic(self, key_for):
        assert key_for(w="400", bg="ffffff") == key_for(bg="ffffff", w="400")
