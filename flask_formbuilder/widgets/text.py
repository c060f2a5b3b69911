"""
Free text input widgets.
"""

from ..captcha import MathChallenge
from ..escaping import escape_value
from ..i18n import gettext
from .core import Widget, positive_int


class StringWidget(Widget):
    """
    A widget for collecting fixed-length string input.

    Valid entries for ``options`` are:
        value: initial value
        size: width of the text box (default 30)
        maxlength: maximum length of the string (default 255)
    """

    widget_name = "StringWidget"
    input_type = "text"

    def _configure(self, options):
        self.size = positive_int(options, "size", 30)
        self.max_length = positive_int(options, "maxlength", 255)

    def render(self, inner_html: str = "") -> str:
        attrs = [
            ("type", self.input_type),
            ("name", self.name),
            ("id", self.name),
            ("value", self.value),
            ("size", self.size),
            ("maxlength", self.max_length),
            ("tabindex", self._tab_index_attribute()),
            ("disabled", self._disabled_attribute()),
        ]
        html = self.renderer.render_tag("input", attrs, True, True, 1)
        if self.disabled:
            html += "\n" + self._render_hidden_input(self.name, self.value)
        return super().render(html)


class PasswordWidget(StringWidget):
    """A ``StringWidget`` rendering a password input."""

    widget_name = "PasswordWidget"
    input_type = "password"


class TextAreaWidget(Widget):
    """
    A widget for collecting multi-line string input.

    Valid entries for ``options`` are:
        value: initial value
        rows: height of the text box (default 5)
        cols: width of the text box (default 40)
    """

    widget_name = "TextAreaWidget"

    def _configure(self, options):
        self.rows = positive_int(options, "rows", 5)
        self.cols = positive_int(options, "cols", 40)

    def render(self, inner_html: str = "") -> str:
        attrs = [
            ("name", self.name),
            ("id", self.name),
            ("rows", self.rows),
            ("cols", self.cols),
            ("tabindex", self._tab_index_attribute()),
            ("disabled", self._disabled_attribute()),
        ]
        html = self.renderer.render_tag("textarea", attrs, False, True, 1)
        html += escape_value(self.value) + "</textarea>"
        if self.disabled:
            html += "\n" + self._render_hidden_input(self.name, self.value)
        return super().render(html)


class CaptchaWidget(Widget):
    """
    A widget asking a generated math question to tell humans and
    bots apart.

    Valid entries for ``options`` are:
        challenge: question generator with a ``get_question()`` method,
            defaults to a new ``MathChallenge``
    """

    widget_name = "CaptchaWidget"

    def _configure(self, options):
        challenge = options.get("challenge")
        if challenge is None or not hasattr(challenge, "get_question"):
            challenge = MathChallenge()
        self.challenge = challenge

    def render(self, inner_html: str = "") -> str:
        question = gettext("What is %(question)s?", question=self.challenge.get_question())
        html = self.renderer.render_tag("div", {"class": "ksht-question"}, False, False, 1)
        html += escape_value(question) + "</div>\n"

        attrs = [
            ("type", "text"),
            ("name", self.name),
            ("id", self.name),
            ("value", self.value),
            ("size", 10),
            ("maxlength", 10),
            ("tabindex", self._tab_index_attribute()),
        ]
        html += self.renderer.render_tag("input", attrs, True, True, 1)
        return super().render(html)
