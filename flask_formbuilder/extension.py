import logging
from typing import Optional

from flask import current_app, Flask
from flask_babel import Babel

from .captcha import MathChallenge
from .const import (
    CONFIG_CAPTCHA_MAX_VALUE,
    CONFIG_CAPTCHA_MIN_VALUE,
    CONFIG_CAPTCHA_OPERATORS,
    CONFIG_INDENT_SPACES,
    DEFAULT_CAPTCHA_MAX_VALUE,
    DEFAULT_CAPTCHA_MIN_VALUE,
    DEFAULT_CAPTCHA_OPERATORS,
    DEFAULT_INDENT_SPACES,
    EXTENSION_NAME,
)
from .tags import default_renderer, TagRenderer

log = logging.getLogger(__name__)


class FormBuilder(object):
    """
    Flask extension wiring the form rendering defaults from the app config.

    Usage::

        app = Flask(__name__)
        formbuilder = FormBuilder(app)

    or, with an application factory::

        formbuilder = FormBuilder()
        formbuilder.init_app(app)

    :param app: the Flask application
    :param renderer: renderer to configure, defaults to the process-wide
        ``default_renderer``
    """

    def __init__(self, app: Optional[Flask] = None, renderer: Optional[TagRenderer] = None):
        self.app = app
        self.renderer = renderer or default_renderer
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.config.setdefault(CONFIG_INDENT_SPACES, DEFAULT_INDENT_SPACES)
        app.config.setdefault(CONFIG_CAPTCHA_MIN_VALUE, DEFAULT_CAPTCHA_MIN_VALUE)
        app.config.setdefault(CONFIG_CAPTCHA_MAX_VALUE, DEFAULT_CAPTCHA_MAX_VALUE)
        app.config.setdefault(CONFIG_CAPTCHA_OPERATORS, list(DEFAULT_CAPTCHA_OPERATORS))

        self.renderer.set_indent_spaces(app.config[CONFIG_INDENT_SPACES])

        app.extensions = getattr(app, "extensions", {})
        # labels and messages go through gettext
        if "babel" not in app.extensions:
            Babel(app)

        app.extensions[EXTENSION_NAME] = self
        log.info(
            "FormBuilder initialized, indent of %s spaces", self.renderer.indent_spaces
        )

    def challenge(self, store=None) -> MathChallenge:
        """
        A ``MathChallenge`` using the captcha limits of the current app.

        :param store: mapping for the expected answer, defaults to the
            Flask session
        """
        config = (self.app or current_app).config
        return MathChallenge(
            config.get(CONFIG_CAPTCHA_MIN_VALUE, DEFAULT_CAPTCHA_MIN_VALUE),
            config.get(CONFIG_CAPTCHA_MAX_VALUE, DEFAULT_CAPTCHA_MAX_VALUE),
            config.get(CONFIG_CAPTCHA_OPERATORS, DEFAULT_CAPTCHA_OPERATORS),
            store=store,
        )
