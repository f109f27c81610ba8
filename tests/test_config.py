"""
Tests for MemoLayoutConfig.
"""

from pathlib import Path

import pytest

from memoquill.config import MemoLayoutConfig
from memoquill.exceptions import ConfigurationError


class TestMemoLayoutConfig:
    """Test cases for MemoLayoutConfig."""

    def test_defaults(self):
        """Defaults match the memo layout."""
        config = MemoLayoutConfig()

        assert config.page_size == "A4"
        assert config.page_margin == 36.0
        assert config.footer_reserve == 84.0
        assert config.field_width == 420.0
        assert config.through_width is None
        assert config.through_field_width == 380.0
        assert config.line_thickness == 0.8
        assert config.label_color_en == "#1CA76A"
        assert config.label_color_ar == "#137B3C"
        assert config.underline_color == "#137B3C"
        assert config.bullet == "•"
        assert config.classification_placeholder == "—"

    def test_styles(self):
        """base_style and arabic_style use the configured fonts."""
        config = MemoLayoutConfig(latin_font="Latin", arabic_font="Arabic", font_size=12)

        assert config.base_style.font_family == "Latin"
        assert config.arabic_style.font_family == "Arabic"
        assert config.base_style.font_size == config.arabic_style.font_size == 12
        assert config.base_style.line_height == 1.35

    @pytest.mark.parametrize("value", [-1, "12", None, True])
    def test_invalid_lengths(self, value):
        """Lengths must be non-negative numbers."""
        with pytest.raises(ConfigurationError):
            MemoLayoutConfig(page_margin=value)

    def test_through_width_follows_field_width(self):
        """Through stays narrower than the other fields when they shrink."""
        config = MemoLayoutConfig.from_mapping({"field_width": 300})

        assert config.through_field_width == 260.0
        assert config.with_overrides(field_width=200).through_field_width == 160.0

    def test_explicit_through_width(self):
        """An explicit Through width is used as given."""
        config = MemoLayoutConfig.from_mapping({"through_width": "350"})

        assert config.through_width == 350.0
        assert config.through_field_width == 350.0

    def test_narrow_fields_clamp_through_width(self):
        """The derived width never goes negative."""
        assert MemoLayoutConfig(field_width=30).through_field_width == 0.0

    def test_invalid_through_width(self):
        """An explicit Through width is validated like other lengths."""
        with pytest.raises(ConfigurationError):
            MemoLayoutConfig(through_width=-5)

    def test_is_frozen(self):
        """Configs are immutable."""
        config = MemoLayoutConfig()

        with pytest.raises(AttributeError):
            config.page_margin = 10


class TestWithOverrides:
    """Test cases for with_overrides."""

    def test_returns_modified_copy(self):
        """Overrides produce a new config and leave the original alone."""
        config = MemoLayoutConfig()

        changed = config.with_overrides(page_margin=20, underline_color="#000000")

        assert changed.page_margin == 20
        assert changed.underline_color == "#000000"
        assert config.page_margin == 36.0

    def test_none_values_ignored(self):
        """None means keep the current value."""
        assert MemoLayoutConfig().with_overrides(page_margin=None).page_margin == 36.0

    def test_unknown_keys_rejected(self):
        """Unknown fields raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            MemoLayoutConfig().with_overrides(colour="red")
        assert "colour" in str(exc_info.value)


class TestFromMapping:
    """Test cases for from_mapping."""

    def test_builds_from_json_style_mapping(self):
        """Known keys are applied, numeric strings converted."""
        config = MemoLayoutConfig.from_mapping({
            "page_margin": "24",
            "field_width": 400,
            "latin_font": "DejaVuSans",
            "fonts_dir": "/tmp/fonts",
        })

        assert config.page_margin == 24.0
        assert config.field_width == 400
        assert config.latin_font == "DejaVuSans"
        assert config.fonts_dir == Path("/tmp/fonts")

    def test_unknown_keys_ignored(self):
        """Unknown keys do not fail."""
        assert MemoLayoutConfig.from_mapping({"theme": "dark"}) == MemoLayoutConfig()

    def test_none_gives_defaults(self):
        """None is an empty configuration."""
        assert MemoLayoutConfig.from_mapping(None) == MemoLayoutConfig()

    def test_invalid_numeric_string(self):
        """Non-numeric strings for lengths raise."""
        with pytest.raises(ConfigurationError):
            MemoLayoutConfig.from_mapping({"page_margin": "wide"})

    def test_non_mapping(self):
        """Lists and other values are rejected."""
        with pytest.raises(ConfigurationError):
            MemoLayoutConfig.from_mapping(["page_margin"])
