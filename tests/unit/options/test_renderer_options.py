"""Unit tests for tracking settings and renderer options."""

from dataclasses import FrozenInstanceError

import pytest

from tree2mjml.options import HtmlRendererOptions, MjmlRendererOptions, TrackingSettings


@pytest.mark.unit
class TestTrackingSettings:
    """Test TrackingSettings."""

    def test_defaults(self):
        """Test that default settings configure nothing."""
        settings = TrackingSettings()
        assert settings.enable_tracking is False
        assert settings.utm_params() == []
        assert not settings.has_utm_params()

    def test_utm_params_order(self):
        """Test that UTM params follow the canonical key order."""
        settings = TrackingSettings(utm_id="7", utm_campaign="c", utm_source="s")
        assert settings.utm_params() == [("utm_source", "s"), ("utm_campaign", "c"), ("utm_id", "7")]

    def test_from_dict_ignores_unknown_and_null(self):
        """Test lenient decoding of the wire form."""
        settings = TrackingSettings.from_dict(
            {"enable_tracking": True, "endpoint": "https://t.example", "utm_term": None, "extra": 1}
        )
        assert settings == TrackingSettings(enable_tracking=True, endpoint="https://t.example")
        assert TrackingSettings.from_dict(None) == TrackingSettings()

    def test_type_validation(self):
        """Test that wrongly typed fields raise ValueError."""
        with pytest.raises(ValueError, match="enable_tracking must be a bool"):
            TrackingSettings(enable_tracking="yes")
        with pytest.raises(ValueError, match="utm_source must be a string"):
            TrackingSettings(utm_source=3)

    def test_to_dict_omits_empty(self):
        """Test the encoded wire form."""
        assert TrackingSettings(utm_medium="email").to_dict() == {"enable_tracking": False, "utm_medium": "email"}

    def test_frozen_and_create_updated(self):
        """Test immutability and cloning."""
        settings = TrackingSettings(utm_source="a")
        with pytest.raises(FrozenInstanceError):
            settings.utm_source = "b"
        updated = settings.create_updated(message_id="m1")
        assert updated.message_id == "m1"
        assert updated.utm_source == "a"
        assert settings.message_id == ""


@pytest.mark.unit
class TestRendererOptions:
    """Test MJML and HTML renderer options."""

    def test_mjml_defaults(self):
        """Test MJML option defaults."""
        options = MjmlRendererOptions()
        assert options.indent == 0
        assert options.indent_step == 2
        assert options.tracking == TrackingSettings()

    @pytest.mark.parametrize("kwargs", [{"indent": -1}, {"indent_step": 0}, {"tracking": {"utm_source": "x"}}])
    def test_mjml_validation(self, kwargs):
        """Test MJML option validation."""
        with pytest.raises(ValueError):
            MjmlRendererOptions(**kwargs)

    def test_html_defaults(self):
        """Test HTML option defaults."""
        options = HtmlRendererOptions()
        assert options.decode_url_entities is True
        assert options.apply_link_tracking is True

    def test_html_validation(self):
        """Test HTML option validation."""
        with pytest.raises(ValueError):
            HtmlRendererOptions(tracking=None)

    def test_field_metadata(self):
        """Test that options document themselves through field metadata."""
        from dataclasses import fields

        for f in fields(MjmlRendererOptions):
            assert f.metadata.get("help")
