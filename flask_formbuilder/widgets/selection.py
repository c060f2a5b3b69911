"""
Widgets letting a user pick one or more values out of a set of choices.

Selected values are compared to choice values in their HTML-escaped string
form, for single and multiple selections alike. ``2`` and ``"2"`` select the
same choice, and so do ``"R&D"`` and the escaped ``Markup("R&amp;D")`` that
``SafeValues`` returns for it.
"""

import enum
import logging
from typing import Any, List, Mapping, Tuple

from ..const import FLEX_LIST_THRESHOLD, MAX_MULTI_SELECT_SIZE
from ..escaping import escape_value
from ..i18n import gettext, lazy_gettext as _
from .core import Widget

log = logging.getLogger(__name__)


def same_value(first: Any, second: Any) -> bool:
    """Whether two values are equal once both are in escaped string form."""
    return escape_value(first) == escape_value(second)


class SelectionFormat(str, enum.Enum):
    """
    How the choices are presented.

    ``FLEX`` is resolved once, when the format is set, to ``LIST`` for more
    than five choices and to ``INDIVIDUAL`` otherwise.
    """

    FLEX = "flex"
    LIST = "list"
    INDIVIDUAL = "individual"


def normalize_choices(choices: Any) -> List[Tuple[Any, Any]]:
    """
    Turn the accepted choice notations into a list of (value, label) pairs.

    Accepted: a mapping of value to label, or a sequence whose items are
    (value, label) pairs, dicts with ``value`` and ``name``/``label`` keys,
    or plain values used as their own label.
    """
    if isinstance(choices, Mapping):
        return list(choices.items())
    if not isinstance(choices, (list, tuple)):
        if choices is not None:
            log.debug("Ignoring malformed choices %r", choices)
        return []
    normalized = []
    for choice in choices:
        if isinstance(choice, Mapping):
            label = choice.get("name", choice.get("label", choice.get("value")))
            normalized.append((choice.get("value"), label))
        elif isinstance(choice, (list, tuple)) and len(choice) == 2:
            normalized.append((choice[0], choice[1]))
        else:
            normalized.append((choice, choice))
    return normalized


class SelectionWidget(Widget):
    """
    A widget for collecting a choice.

    Valid entries for ``options`` are:
        value: initial value
        choices: the choices, see ``normalize_choices``
        format: ``SelectionFormat`` or its string value (default flex)
        default_value: value of the default option in a list
        default_label: label of the default option in a list, no default
            option is rendered when it is blank (default ``--``)
    """

    widget_name = "SelectionWidget"
    multi_select = False

    def _configure(self, options):
        self.choices = normalize_choices(options.get("choices"))
        self.default_value = options.get("default_value", "")
        default_label = options.get("default_label", "--")
        self.default_label = default_label if isinstance(default_label, str) else "--"
        if self.multi_select:
            self.value = []
        self.set_format(options.get("format", SelectionFormat.FLEX))

    def set_format(self, format) -> None:
        """
        Set how the choices are presented, unknown formats fall back to
        flex which is then resolved based on the number of choices.
        """
        try:
            resolved = SelectionFormat(str(getattr(format, "value", format)).lower())
        except ValueError:
            log.debug("Unknown selection format %r for %s, using flex", format, self.name)
            resolved = SelectionFormat.FLEX
        if resolved is SelectionFormat.FLEX:
            if len(self.choices) > FLEX_LIST_THRESHOLD:
                resolved = SelectionFormat.LIST
            else:
                resolved = SelectionFormat.INDIVIDUAL
        self.format = resolved
        self.widget_is_fieldset = resolved is SelectionFormat.INDIVIDUAL

    def set_value(self, value: Any) -> None:
        if not self.multi_select:
            self.value = value
        elif value is None:
            self.value = []
        elif isinstance(value, (list, tuple, set)):
            self.value = list(value)
        else:
            self.value = [value]

    def selected_values(self) -> List[Any]:
        """The current value as a list, empty when nothing is selected."""
        if isinstance(self.value, (list, tuple, set)):
            return list(self.value)
        if self.value is None:
            return []
        return [self.value]

    def is_selected(self, choice_value: Any) -> bool:
        if self.multi_select:
            return any(same_value(choice_value, value) for value in self.selected_values())
        if self.value is None or isinstance(self.value, (list, tuple, set)):
            return False
        return same_value(choice_value, self.value)

    @property
    def input_name(self) -> str:
        return self.name + "[]" if self.multi_select else self.name

    def render(self, inner_html: str = "") -> str:
        if self.format is SelectionFormat.LIST:
            html = self._render_list(1)
        else:
            html = self._render_individual(1)

        if self.disabled:
            for value in self.selected_values():
                html += "\n" + self._render_hidden_input(self.input_name, value)
        return super().render(html)

    def _render_list(self, indent_level) -> str:
        attrs = [
            ("name", self.input_name),
            ("id", self.name),
            ("tabindex", self._tab_index_attribute()),
            ("disabled", self._disabled_attribute()),
        ]
        if self.multi_select:
            attrs.append(("multiple", "multiple"))
            attrs.append(("size", min(len(self.choices), MAX_MULTI_SELECT_SIZE)))
        lines = [self.renderer.render_tag("select", attrs, False, True, indent_level)]

        option_lines = []
        value_selected = False
        for value, label in self.choices:
            attrs = {"value": value}
            if self.is_selected(value):
                attrs["selected"] = "selected"
                value_selected = True
            option_lines.append(
                self.renderer.render_tag("option", attrs, False, False, indent_level + 1)
                + escape_value(label)
                + "</option>"
            )

        if not self.multi_select and self.default_label:
            attrs = {"value": self.default_value}
            if not value_selected:
                attrs["selected"] = "selected"
            lines.append(
                self.renderer.render_tag("option", attrs, False, False, indent_level + 1)
                + escape_value(self.default_label)
                + "</option>"
            )
        lines.extend(option_lines)
        lines.append(self.renderer.indent("</select>", indent_level))
        return "\n".join(lines)

    def _render_individual(self, indent_level) -> str:
        input_type = "checkbox" if self.multi_select else "radio"
        lines = [self.renderer.render_tag("ol", None, False, False, indent_level)]

        for value, label in self.choices:
            choice_id = "%s-%s" % (self.name, value)
            lines.append(
                self.renderer.render_tag("li", {"class": "select-field"}, False, False, indent_level + 1)
            )
            # label after the input, tied to it through for/id
            attrs = [
                ("type", input_type),
                ("name", self.input_name),
                ("id", choice_id),
                ("value", value),
                ("disabled", self._disabled_attribute()),
                ("checked", "checked" if self.is_selected(value) else None),
            ]
            lines.append(self.renderer.render_tag("input", attrs, True, True, indent_level + 2))
            lines.append(
                self.renderer.render_tag("label", {"for": choice_id}, False, False, indent_level + 2)
                + escape_value(label)
                + "</label>"
            )
            lines.append(self.renderer.indent("</li>", indent_level + 1))

        lines.append(self.renderer.indent("</ol>", indent_level))
        return "\n".join(lines)


class MultiSelectionWidget(SelectionWidget):
    """A ``SelectionWidget`` allowing more than one choice."""

    widget_name = "MultiSelectionWidget"
    multi_select = True


class YesNoWidget(SelectionWidget):
    """
    A widget for collecting a yes or no answer, rendered as radio buttons.

    Stores ``"Y"``/``"N"``; ``get_value`` returns ``True``/``False``, or
    ``None`` while unanswered.
    """

    widget_name = "YesNoWidget"

    def _configure(self, options):
        options = dict(options, choices=[("Y", _("Yes")), ("N", _("No"))])
        super()._configure(options)
        self.set_format(SelectionFormat.INDIVIDUAL)

    def get_value(self):
        value = str(self.value or "").upper()
        if value == "Y":
            return True
        if value == "N":
            return False
        return None

    def set_value(self, value: Any) -> None:
        if isinstance(value, bool):
            self.value = "Y" if value else "N"
        elif isinstance(value, str) and value.strip().upper() in ("Y", "N"):
            self.value = value.strip().upper()


class ColorSelectionWidget(SelectionWidget):
    """
    A dropdown of colors, each option styled with its own colors.

    Valid entries for ``options`` are:
        value: id of the selected color
        colors: list of mappings with ``id``, ``bg`` and ``fg`` (hex
            colors without ``#``)
    """

    widget_name = "ColorSelectionWidget"

    def _configure(self, options):
        super()._configure(options)
        colors = options.get("colors")
        self.colors = [
            color for color in colors if isinstance(color, Mapping) and "id" in color
        ] if isinstance(colors, (list, tuple)) else []
        self.set_format(SelectionFormat.LIST)

    def is_selected(self, choice_value: Any) -> bool:
        if self.value is None or isinstance(self.value, (list, tuple, set)):
            return False
        return same_value(choice_value, self.value)

    def render(self, inner_html: str = "") -> str:
        lines = [self.renderer.indent("<div>", 1)]
        attrs = [
            ("name", self.name),
            ("id", self.name),
            ("tabindex", self._tab_index_attribute()),
            ("disabled", self._disabled_attribute()),
        ]
        lines.append(self.renderer.render_tag("select", attrs, False, True, 2))

        option_lines = []
        value_selected = False
        for color in self.colors:
            attrs = {
                "value": color["id"],
                "style": "background-color: #%s; color: #%s;" % (
                    color.get("bg", "FFFFFF"), color.get("fg", "000000")
                ),
            }
            if self.is_selected(color["id"]):
                attrs["selected"] = "selected"
                value_selected = True
            option_lines.append(
                self.renderer.render_tag("option", attrs, False, False, 3)
                + escape_value(gettext("Text"))
                + "</option>"
            )

        attrs = {"value": ""}
        if not value_selected:
            attrs["selected"] = "selected"
        lines.append(self.renderer.render_tag("option", attrs, False, False, 3) + "--</option>")
        lines.extend(option_lines)
        lines.append(self.renderer.indent("</select>", 2))
        lines.append(self.renderer.indent("</div>", 1))

        if self.disabled:
            lines.append(self._render_hidden_input(self.name, self.value))
        return Widget.render(self, "\n".join(lines))
