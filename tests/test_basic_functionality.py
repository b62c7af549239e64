"""
Basic functionality tests for Feat Explorer.
"""
import logging
import sys
import os
from logging.handlers import RotatingFileHandler
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from feat_explorer.core.config import Settings
from feat_explorer.models.schemas import PanelControlRequest, RemoveFilterRequest, ToggleFilterRequest


class TestBasicFunctionality:
    """Test basic application functionality."""

    def test_toggle_request_model(self):
        """Test that ToggleFilterRequest defaults to flipping the value."""
        request = ToggleFilterRequest(facet="Class", value="Fighter")
        assert request.facet == "Class"
        assert request.value == "Fighter"
        assert request.selected is None

    def test_feat_ids_keep_json_type(self):
        """Integer and string feat ids are not coerced into each other."""
        assert RemoveFilterRequest(facet="Feat", value=5).value == 5
        assert RemoveFilterRequest(facet="Feat", value="5").value == "5"
        assert PanelControlRequest(key=3, checked=True).key == 3

    def test_settings_parse_comma_lists(self):
        """Test comma-separated settings are parsed into lists."""
        settings = Settings(
            environment="testing",
            cors_origins="http://a.test, http://b.test",
            ancestry_group_order="Racial Power, Feat",
        )
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.class_group_order == ["Feature", "Talent", "Multiclass", "Spell"]
        assert settings.ancestry_group_order == ["Racial Power", "Feat"]
        assert settings.level_order == ["1st", "3rd", "5th", "7th", "9th"]
        assert settings.catalog_path == "feats.json"

    def test_settings_validation(self):
        """Test invalid environment and log level are rejected."""
        with pytest.raises(ValueError):
            Settings(environment="moon")
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_each_logger_has_its_own_file(self, test_settings):
        """Test the app and service loggers do not share a rotating file."""
        from feat_explorer.main import create_app
        create_app(test_settings)

        def log_files(name):
            return [h.baseFilename for h in logging.getLogger(name).handlers
                    if isinstance(h, RotatingFileHandler)]

        app_files = log_files("feat-explorer")
        service_files = log_files("feat-service")
        assert len(app_files) == 1 and len(service_files) == 1
        assert app_files != service_files
        assert os.path.dirname(app_files[0]) == os.path.abspath(test_settings.log_dir)
        assert os.path.basename(service_files[0]) == "feat-service.log"

    def test_imports_work(self):
        """Test that all imports work correctly."""
        try:
            from feat_explorer.main import create_app
            from feat_explorer.api import advanced, filters, status
            from feat_explorer.models import schemas
            from feat_explorer.services import feat_service
            from feat_explorer.utils import middleware
            assert create_app is not None
        except ImportError as e:
            pytest.fail(f"Import failed: {e}")
