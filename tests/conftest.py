"""
Pytest configuration for memoquill
"""

import io
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from PIL import Image as PILImage

from memoquill.engine.layout_primitives import TextStyle


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Console-only logging, warnings and errors
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def base_style():
    """Latin text style used by the engine tests."""
    return TextStyle(font_family="Latin", font_size=11.0, color="#000000", line_height=1.35)


@pytest.fixture
def arabic_style():
    """Arabic text style, distinct from the Latin one so tests can tell them apart."""
    return TextStyle(font_family="Arabic", font_size=12.0, color="#111111", line_height=1.35)


@pytest.fixture
def fixed_now():
    """Generation timestamp used wherever the output depends on the clock."""
    return datetime(2026, 10, 18, 9, 30, 15, tzinfo=timezone.utc)


def _png_bytes(width: int, height: int, color: tuple) -> bytes:
    buffer = io.BytesIO()
    PILImage.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def banner_png():
    """Wide banner image."""
    return _png_bytes(120, 20, (28, 167, 106))


@pytest.fixture
def footer_png():
    """Footer art image."""
    return _png_bytes(120, 10, (19, 123, 60))


@pytest.fixture
def memo_fields():
    """Form-style memo input without images."""
    return {
        "to": "Finance Department",
        "from": "Operations",
        "subject": "Quarterly review",
        "body": "<p>Hello <strong>World</strong></p>",
        "classification": "Internal",
    }


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
