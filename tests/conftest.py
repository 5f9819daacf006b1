"""Pytest configuration and fixtures for tmplgen tests."""
import pytest

from tmplgen.core.models import TemplateDescriptor
from tmplgen.core.settings import EngineSettings
from tmplgen.rendering.engine import TemplateEngine


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


@pytest.fixture
def settings():
    """Engine settings with fixed line endings so output is predictable."""
    return EngineSettings(indent="\t", newline="\n")


@pytest.fixture
def engine(settings):
    """A fresh engine per test; the cache is cleared on teardown."""
    with TemplateEngine(settings) as eng:
        yield eng


@pytest.fixture
def template_dir(tmp_path):
    """Directory holding partial templates for a test."""
    folder = tmp_path / "templates"
    folder.mkdir()
    return folder


@pytest.fixture
def make_descriptor(template_dir):
    """Build an inline descriptor whose partials resolve from template_dir."""

    def _make(text, **kwargs):
        kwargs.setdefault("input_folder", template_dir)
        return TemplateDescriptor(template_text=text, **kwargs)

    return _make
