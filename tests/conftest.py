"""
Shared fixtures for the Flask-FormBuilder tests.
"""

from flask import Flask
import pytest

from flask_formbuilder.const import DEFAULT_INDENT_SPACES
from flask_formbuilder.tags import default_renderer, TagRenderer


@pytest.fixture
def renderer():
    """A renderer of its own so tests never depend on the shared one."""
    return TagRenderer()


@pytest.fixture(autouse=True)
def reset_default_renderer():
    yield
    default_renderer.set_indent_spaces(DEFAULT_INDENT_SPACES)


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "formbuilder-test-secret",
        }
    )
    return app
