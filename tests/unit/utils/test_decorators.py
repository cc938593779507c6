"""Unit tests for utils/decorators.py and utils/packages.py."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

import tree2mjml.utils.decorators
from tree2mjml.exceptions import DependencyError
from tree2mjml.utils.decorators import debug_timer, requires_dependencies
from tree2mjml.utils.packages import check_version_requirement, get_package_version


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the requires_dependencies decorator."""

    def test_missing_package_raises_error(self) -> None:
        """Test that a missing package raises DependencyError."""

        @requires_dependencies("html", [("nonexistent-package", "nonexistent_tree2mjml_pkg", "")])
        def sample_function() -> str:
            return "success"

        with pytest.raises(DependencyError) as exc_info:
            sample_function()

        assert exc_info.value.renderer_name == "html"
        assert ("nonexistent-package", "") in exc_info.value.missing_packages
        assert exc_info.value.original_import_error is not None
        assert "pip install --upgrade nonexistent-package" in str(exc_info.value)

    def test_version_mismatch_raises_error(self) -> None:
        """Test that an installed package with wrong version raises DependencyError."""
        with patch("tree2mjml.utils.decorators.importlib.import_module"):
            with patch.object(tree2mjml.utils.decorators, "check_version_requirement", return_value=(False, "1.0.0")):

                @requires_dependencies("html", [("mjml-python", "mjml", ">=2.0.0")])
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError) as exc_info:
                    sample_function()

                assert len(exc_info.value.missing_packages) == 0
                assert ("mjml-python", ">=2.0.0", "1.0.0") in exc_info.value.version_mismatches

    def test_correct_version_succeeds(self) -> None:
        """Test that an installed package with correct version allows execution."""
        with patch("tree2mjml.utils.decorators.importlib.import_module"):
            with patch.object(tree2mjml.utils.decorators, "check_version_requirement", return_value=(True, "2.5.0")):

                @requires_dependencies("html", [("mjml-python", "mjml", ">=2.0.0")])
                def sample_function() -> str:
                    return "success"

                assert sample_function() == "success"

    def test_no_version_spec_allows_any_version(self) -> None:
        """Test that empty version spec allows any installed version."""
        with patch("tree2mjml.utils.decorators.importlib.import_module"):

            @requires_dependencies("html", [("mjml-python", "mjml", "")])
            def sample_function() -> str:
                return "success"

            assert sample_function() == "success"

    def test_multiple_problems_are_collected(self) -> None:
        """Test that missing packages and version mismatches are reported together."""

        def mock_import(name: str) -> None:
            if name == "missing_package":
                raise ImportError(f"No module named '{name}'")

        with patch("tree2mjml.utils.decorators.importlib.import_module", side_effect=mock_import):
            with patch.object(tree2mjml.utils.decorators, "check_version_requirement", return_value=(False, "0.1")):

                @requires_dependencies(
                    "html", [("missing-package", "missing_package", ""), ("old-package", "old_package", ">=1.0")]
                )
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError) as exc_info:
                    sample_function()

                assert exc_info.value.missing_packages == [("missing-package", "")]
                assert exc_info.value.version_mismatches == [("old-package", ">=1.0", "0.1")]


@pytest.mark.unit
class TestPackageVersions:
    """Test installed distribution checks."""

    def test_missing_distribution(self) -> None:
        """Test that unknown distributions report no version."""
        assert get_package_version("definitely-not-installed-tree2mjml") is None
        assert check_version_requirement("definitely-not-installed-tree2mjml", ">=1.0") == (False, None)

    def test_installed_distribution(self) -> None:
        """Test a requirement against an installed distribution."""
        meets, installed = check_version_requirement("pytest", ">=1.0")
        assert meets is True
        assert installed

    def test_invalid_specifier(self) -> None:
        """Test that an invalid specifier never matches."""
        meets, installed = check_version_requirement("pytest", "not a spec")
        assert meets is False
        assert installed


@pytest.mark.unit
class TestDebugTimer:
    """Test the DEBUG timing helper."""

    def test_logs_when_debug_enabled(self, caplog) -> None:
        """Test that elapsed time is logged at DEBUG level."""
        logger = logging.getLogger("tree2mjml.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="tree2mjml.tests.timer"):
            with debug_timer(logger, "Compiling"):
                pass
        assert "Compiling completed in" in caplog.text

    def test_silent_otherwise(self, caplog) -> None:
        """Test that nothing is logged above DEBUG."""
        logger = logging.getLogger("tree2mjml.tests.timer_quiet")
        with caplog.at_level(logging.INFO, logger="tree2mjml.tests.timer_quiet"):
            with debug_timer(logger, "Compiling"):
                pass
        assert caplog.text == ""
