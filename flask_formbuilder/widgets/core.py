"""
Base widget and the simple content widgets.

Every widget builds the markup for its own input element(s) and hands it
to ``Widget.render`` which wraps it with the container, label,
description and error markup shared by all widgets.
"""

import enum
import logging
from typing import Any, Optional

from markupsafe import Markup

from ..const import FIELD_ID_PREFIX
from ..escaping import escape_value, sanitize_html
from ..exceptions import InvalidWidgetName
from ..i18n import gettext
from ..tags import TagRenderer, default_renderer

log = logging.getLogger(__name__)


class WidgetKind(enum.Enum):
    """How a form treats a widget when routing and binding values."""

    FIELD = "field"
    HIDDEN = "hidden"
    CONTENT = "content"
    COMPOSITE = "composite"


def positive_int(options, key, default):
    """
    Read a positive integer option, falling back to ``default`` when it
    is missing or malformed.
    """
    value = options.get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        value = int(value)
    except (TypeError, ValueError):
        log.debug("Ignoring malformed option %s=%r", key, options.get(key))
        return default
    if value <= 0:
        log.debug("Ignoring non positive option %s=%r", key, value)
        return default
    return value


class Widget(object):
    """
    A base widget for collecting input from a user as part of an HTML form.

    Valid entries for ``options`` are:
        value: passed to ``set_value``
        disabled: bool, passed to ``disable``

    :param name: name of the input element, used for binding and lookups
    :param label: label text displayed with the input element
    :param description: descriptive text displayed along with the label
    :param required: whether the input must be provided
    :param tab_index: tab order of the input element, -1 leaves it unset
    :param renderer: ``TagRenderer`` to build markup with, defaults to the
        process-wide renderer
    """

    widget_name = "Widget"
    kind = WidgetKind.FIELD

    # Rendered as a fieldset because it holds several input elements
    widget_is_fieldset = False
    render_label_as_div = False

    def __init__(
        self,
        name: str,
        label: str = "",
        description: str = "",
        required: bool = False,
        tab_index: int = -1,
        renderer: Optional[TagRenderer] = None,
        **options
    ):
        if not isinstance(name, str) or not name.strip():
            raise InvalidWidgetName(name)
        self.name = name
        self.label = label
        self.description = description
        self.required = required
        self.tab_index = tab_index
        self.renderer = renderer or default_renderer
        self.value = ""
        self.disabled = False
        self.error_text = ""

        self._configure(options)

        if "value" in options:
            self.set_value(options["value"])
        if isinstance(options.get("disabled"), bool):
            self.disable(options["disabled"])

    def _configure(self, options):
        """Read widget specific options, called before any value is set."""
        pass

    def __repr__(self):
        return "<%s name=%r>" % (self.__class__.__name__, self.name)

    def get_name(self) -> str:
        return self.name

    def get_widget_name(self) -> str:
        return self.widget_name

    def get_label(self) -> str:
        return self.label

    def get_description(self) -> str:
        return self.description

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value

    def set_error_text(self, text) -> None:
        """
        Set the error message displayed with this widget.

        A list of messages is joined into one line.
        """
        if isinstance(text, (list, tuple)):
            text = "; ".join(str(item) for item in text)
        self.error_text = text or ""

    def disable(self, disabled: bool = True) -> None:
        """Disable (or re-enable) user input, non bool values are ignored."""
        if isinstance(disabled, bool):
            self.disabled = disabled

    def render(self, inner_html: str = "") -> str:
        """
        Wrap the widget specific ``inner_html`` with the container, label,
        description and error markup.

        :param inner_html: markup of the widget's input element(s)
        :return: the HTML code necessary to display this widget
        """
        tag = "fieldset" if self.widget_is_fieldset else "div"
        lines = [
            self.renderer.render_tag(tag, self._container_attributes(), False, False, 0),
            self._render_label(),
            self._render_description(),
            self._render_error_text(),
            inner_html,
            "</%s>" % tag,
        ]
        return "\n" + "\n".join(lines) + "\n"

    def _container_attributes(self, with_disabled=True):
        classes = ["field", self.widget_name]
        if self.error_text:
            classes.append("error")
        if with_disabled and self.disabled:
            classes.append("disabled")
        return {"class": " ".join(classes), "id": FIELD_ID_PREFIX + self.name}

    def _tab_index_attribute(self):
        if isinstance(self.tab_index, int) and not isinstance(self.tab_index, bool):
            if self.tab_index >= 0:
                return self.tab_index
        return None

    def _disabled_attribute(self):
        return "disabled" if self.disabled else None

    def _render_label(self) -> str:
        if self.widget_is_fieldset:
            tag = "legend"
        elif self.render_label_as_div:
            tag = "div"
        else:
            tag = "label"
        attrs = {"class": "formLabel"}
        if tag == "label":
            attrs["for"] = self.name

        html = self.renderer.render_tag(tag, attrs, False, False, 1)
        html += escape_value(self.label)
        if self.widget_is_fieldset and self.required:
            html += " " + self._render_required()
        html += "</%s>" % tag
        if not self.widget_is_fieldset and self.required:
            html += "\n" + self.renderer.indent(self._render_required(), 1)
        return html

    def _render_description(self) -> str:
        attrs = {"class": "formDescription", "id": self.name + "-description"}
        html = self.renderer.render_tag("div", attrs, False, False, 1)
        return html + escape_value(self.description) + "</div>"

    def _render_required(self) -> str:
        attrs = {"class": "fieldRequired", "title": gettext("Required")}
        html = self.renderer.render_tag("span", attrs, False, False, 0)
        return html + escape_value(gettext("(Required)")) + "</span>"

    def _render_error_text(self) -> str:
        html = self.renderer.render_tag("div", {"class": "fieldErrorBox"}, False, False, 1)
        return html + escape_value(self.error_text) + "</div>"

    def _render_hidden_input(self, name, value, indent_level=1) -> str:
        """Hidden copy of a value so a disabled input is still submitted."""
        attrs = {"type": "hidden", "name": name, "value": "" if value is None else value}
        return self.renderer.render_tag("input", attrs, True, False, indent_level)


class HiddenWidget(Widget):
    """
    A widget for including hidden data as part of an HTML form.

    Label, description, required and tab index have no meaning here and
    are blanked. Valid entries for ``options`` are ``value`` and ``id``
    (defaults to the name without square brackets).
    """

    widget_name = "HiddenWidget"
    kind = WidgetKind.HIDDEN

    def __init__(self, name, label="", description="", required=False, tab_index=-1,
                 renderer=None, **options):
        super().__init__(name, "", "", False, -1, renderer, **options)

    def _configure(self, options):
        element_id = options.get("id")
        self.id = element_id if isinstance(element_id, str) and element_id else ""

    def render(self, inner_html: str = "") -> str:
        element_id = (self.id or self.name).replace("[", "").replace("]", "")
        attrs = {"type": "hidden", "name": self.name, "id": element_id, "value": self.value}
        return self.renderer.render_tag("input", attrs, True, False, 0) + "\n"


class HTMLWidget(Widget):
    """
    A widget for displaying any HTML as part of a form.

    The value is trusted markup and is emitted as it is, unless the
    ``sanitize`` option is set in which case it is cleaned with bleach.
    Label and description are only shown when a label is given.

    Valid entries for ``options`` are ``value``, ``id`` and ``sanitize``.
    """

    widget_name = "HTMLWidget"
    kind = WidgetKind.CONTENT
    render_label_as_div = True

    def __init__(self, name, label="", description="", required=False, tab_index=-1,
                 renderer=None, **options):
        super().__init__(name, label, description, False, -1, renderer, **options)

    def _configure(self, options):
        element_id = options.get("id")
        self.id = element_id if isinstance(element_id, str) and element_id else ""
        self.sanitize = options.get("sanitize") is True

    def _content(self):
        if self.value is None:
            return ""
        if self.sanitize:
            return str(sanitize_html(self.value))
        return str(self.value)

    def render(self, inner_html: str = "") -> str:
        attrs = self._container_attributes(with_disabled=False)
        attrs["id"] = FIELD_ID_PREFIX + (self.id or self.name)

        lines = [self.renderer.render_tag("div", attrs, False, False, 0)]
        if self.label:
            lines.append(self._render_label())
            lines.append(self._render_description())
        lines.append(self._render_error_text())
        lines.append(self.renderer.indent(self._content(), 1))
        lines.append("</div>")
        return "\n" + "\n".join(lines) + "\n"


class ParagraphWidget(HTMLWidget):
    """
    A widget for displaying a paragraph of text as part of a form.

    The ``text`` option is escaped and every line of it becomes a
    ``<p>`` element.
    """

    widget_name = "ParagraphWidget"

    def _configure(self, options):
        super()._configure(options)
        text = options.get("text")
        if isinstance(text, str) and text:
            paragraphs = escape_value(text).split("\n")
            self.value = Markup("<p>%s</p>" % "</p><p>".join(paragraphs))
