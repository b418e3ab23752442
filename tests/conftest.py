"""Test configuration and fixtures for cl_resize_tools.

This module provides function-scoped fixtures (temp dirs, sample files).
"""

from pathlib import Path

import pytest

from tests.helpers import encode_image


@pytest.fixture
def sample_jpeg_path(tmp_path: Path) -> Path:
    """800x600 JPEG written to a temporary directory."""
    path = tmp_path / "input.jpg"
    _ = path.write_bytes(encode_image(800, 600))
    return path


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
