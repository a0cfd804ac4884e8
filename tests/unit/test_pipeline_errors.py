"""
Unit tests for pipeline error types
===================================
"""

from pathlib import Path

from pipeline_errors import (
    CompressionError, ConfigurationError, OutputWriteError,
    PatternError, SourceFileError, UnconfiguredCodecError
)


class TestCompressionErrors:
    """Test error formatting and hierarchy"""

    def test_str_includes_code_and_cause(self):
        """Test that __str__ shows the error code and the cause"""
        error = CompressionError("boom", cause=OSError("disk"), error_code="X")

        assert str(error) == "[X] boom (caused by OSError: disk)"

    def test_str_without_extras(self):
        """Test the plain message form"""
        assert str(CompressionError("plain")) == "plain"

    def test_repr(self):
        """Test that repr names the concrete class"""
        assert repr(PatternError("[", "unclosed")).startswith("PatternError(")

    def test_hierarchy(self):
        """Test that every error is a CompressionError"""
        path = Path("a.css")
        for error in (ConfigurationError("x"), UnconfiguredCodecError(), PatternError("[", "bad"),
                      SourceFileError("x", path), OutputWriteError("x", path)):
            assert isinstance(error, CompressionError)

    def test_configuration_errors_are_value_errors(self):
        """Test that configuration errors are ValueErrors"""
        assert isinstance(ConfigurationError("x"), ValueError)
        assert isinstance(UnconfiguredCodecError(), ValueError)

    def test_file_errors_carry_path(self):
        """Test that file errors record the offending path"""
        error = SourceFileError("Cannot open", "dist/app.js", cause=FileNotFoundError())

        assert error.path == Path("dist/app.js")
        assert error.details['path'] == "dist/app.js"
        assert error.error_code == 'SOURCE_UNREADABLE'
        assert OutputWriteError("x", "a").error_code == 'OUTPUT_UNWRITABLE'

    def test_pattern_error_details(self):
        """Test that pattern errors keep the pattern and reason"""
        error = PatternError("a**b", "bad wildcard")

        assert error.details == {'pattern': "a**b", 'reason': "bad wildcard"}
        assert "a**b" in str(error)

    def test_unconfigured_default_message(self):
        """Test the guidance in the default message"""
        assert "'brotli' or 'gzip'" in str(UnconfiguredCodecError())
