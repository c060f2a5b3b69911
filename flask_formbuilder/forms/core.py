"""
The form container: an ordered, groupable collection of widgets that binds
submitted values and validation errors and renders itself as one block of
HTML.
"""

from dataclasses import dataclass
import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..const import (
    FIELDSET_ID_PREFIX,
    FORM_ID_PREFIX,
    MSG_TYPE_VALIDATION,
    PRIMARY_BUTTON_CLASSES,
    SECONDARY_BUTTON_CLASSES,
    SUBMITTED_FIELD_NAME,
    SUBMITTED_FIELD_VALUE,
)
from ..escaping import humanize, slugify
from ..sources import SafeValueSource, ValidationErrorSource
from ..tags import TagRenderer, default_renderer
from ..widgets.core import Widget, WidgetKind

log = logging.getLogger(__name__)


@dataclass
class FormButton:
    label: str
    name: str
    is_primary: bool = False


@dataclass
class SchemaEntry:
    widget: Widget
    group: str = ""


class Form(object):
    """
    An HTML form built out of widgets.

    Widgets added with a group are rendered inside a ``fieldset`` per group,
    in the order the groups were first used; ungrouped widgets come first.
    Hidden widgets are kept apart and rendered with the buttons.

    :param name: name of the form, also used for its id
    :param action: URL the form submits to
    :param renderer: ``TagRenderer`` to build markup with, defaults to the
        process-wide renderer
    """

    def __init__(self, name: str = "", action: str = "", renderer: Optional[TagRenderer] = None):
        self.name = ""
        self.action = ""
        self.renderer = renderer or default_renderer
        self.schema: List[SchemaEntry] = []
        self.hidden_widgets: List[Widget] = []
        self.buttons: List[FormButton] = []
        self.set_name(name)
        self.set_action(action)

    def __repr__(self):
        return "<Form name=%r widgets=%d>" % (self.name, len(self.schema))

    def set_name(self, name: str) -> None:
        self.name = str(name or "").strip()

    def set_action(self, url: str) -> None:
        self.action = str(url or "").strip()

    def add_widget(self, widget: Widget, group: str = "") -> None:
        """
        Add a widget to the form, optionally to a named group.

        Hidden widgets ignore the group.
        """
        if widget.kind is WidgetKind.HIDDEN:
            self.hidden_widgets.append(widget)
        else:
            self.schema.append(SchemaEntry(widget, group or ""))

    def add_button(self, label: str, name: str = "", primary: bool = False) -> None:
        """
        Add a submit button.

        :param label: text shown on the button
        :param name: name of the button, generated from the label when blank
        :param primary: whether this is the main action of the form
        """
        if not name:
            name = label
        self.buttons.append(FormButton(label, slugify(name), bool(primary)))

    def remove_widgets(self, names: Union[str, Iterable[str]]) -> int:
        """
        Remove the widgets with the given name(s).

        :return: the number of widgets removed
        """
        names = _name_set(names)
        found = {entry.widget.name for entry in self.schema if entry.widget.name in names}
        kept = [entry for entry in self.schema if entry.widget.name not in names]
        removed = len(self.schema) - len(kept)
        self.schema = kept

        remaining = names - found
        if remaining:
            hidden = [widget for widget in self.hidden_widgets if widget.name not in remaining]
            removed += len(self.hidden_widgets) - len(hidden)
            self.hidden_widgets = hidden
        return removed

    def disable_widgets(self, names: Union[str, Iterable[str]]) -> int:
        """Disable the widgets with the given name(s), returns how many."""
        return self._set_disabled(names, True)

    def enable_widgets(self, names: Union[str, Iterable[str]]) -> int:
        """Enable the widgets with the given name(s), returns how many."""
        return self._set_disabled(names, False)

    def _set_disabled(self, names, disabled) -> int:
        names = _name_set(names)
        count = 0
        for widget in self._all_widgets():
            if widget.name in names:
                widget.disable(disabled)
                count += 1
        return count

    def replace_widget(self, existing_name: str, widget: Widget, new_group: str = "") -> bool:
        """
        Replace the widget named ``existing_name`` by ``widget``.

        Hidden widgets replace hidden widgets, any other widget replaces a
        schema entry and is moved to ``new_group``.

        :return: whether a widget was replaced
        """
        replaced = False
        if widget.kind is WidgetKind.HIDDEN:
            for index, hidden in enumerate(self.hidden_widgets):
                if hidden.name == existing_name:
                    self.hidden_widgets[index] = widget
                    replaced = True
        else:
            for entry in self.schema:
                if entry.widget.name == existing_name:
                    entry.widget = widget
                    entry.group = new_group or ""
                    replaced = True
        return replaced

    def get_widgets(self, group: str = "") -> List[Widget]:
        """
        Get the widgets of the form, or only those of ``group``
        (case-insensitive) when one is given.
        """
        if not group:
            return [entry.widget for entry in self.schema]
        group = group.lower()
        return [entry.widget for entry in self.schema if entry.group.lower() == group]

    def get_widget(self, name: str) -> Optional[Widget]:
        for widget in self._all_widgets():
            if widget.name == name:
                return widget
        return None

    def get_groups(self) -> List[str]:
        """The groups in use, in the order they were first used."""
        groups = []
        for entry in self.schema:
            if entry.group and entry.group not in groups:
                groups.append(entry.group)
        return groups

    def set_value(self, name: str, value: Any) -> bool:
        """
        Set the value of the widget named ``name``.

        :return: whether the widget was found
        """
        found = False
        for widget in self._all_widgets():
            if widget.name == name:
                widget.set_value(value)
                found = True
        return found

    def _all_widgets(self):
        for entry in self.schema:
            yield entry.widget
        for widget in self.hidden_widgets:
            yield widget

    def bind_values(self, values: Union[SafeValueSource, Mapping, None]) -> None:
        """
        Give every widget the submitted value carrying its name.

        Composite widgets are only updated when all their sub-fields were
        submitted with a non blank value.
        """
        values = _resolve_values(values)
        if not values:
            return
        for widget in self._all_widgets():
            if widget.kind is WidgetKind.COMPOSITE:
                subfields = {}
                for key in widget.subfield_names():
                    submitted = values.get("%s-%s" % (widget.name, key))
                    if submitted is None or submitted == "":
                        log.debug("Incomplete submission for %s, missing %s", widget.name, key)
                        break
                    subfields[key] = submitted
                else:
                    widget.set_value(subfields)
            elif widget.name in values:
                widget.set_value(values[widget.name])

    def bind_errors(self, errors: Union[ValidationErrorSource, Mapping, None]) -> None:
        """Show the validation message of every widget that has one."""
        messages = _resolve_errors(errors)
        if not messages:
            return
        for entry in self.schema:
            if entry.widget.name in messages:
                entry.widget.set_error_text(messages[entry.widget.name])

    def render(
        self,
        indent_level: int = 0,
        values: Union[SafeValueSource, Mapping, None] = None,
        errors: Union[ValidationErrorSource, Mapping, None] = None,
    ) -> str:
        """
        Bind values and errors, then render the whole form.

        :param indent_level: number of levels (not spaces) to indent
        :param values: submitted values to bind to the widgets
        :param errors: validation messages to show with the widgets
        :return: the HTML code of the form
        """
        self.bind_values(values)
        self.bind_errors(errors)

        attrs = [
            ("action", self.action),
            ("name", self.name),
            ("id", FORM_ID_PREFIX + self.name),
            ("method", "post"),
            ("enctype", "multipart/form-data"),
        ]
        html = "\n"
        html += self.renderer.render_tag("form", attrs, False, True, indent_level) + "\n"
        html += self._render_widgets("", indent_level + 1)

        for group in self.get_groups():
            attrs = {"id": FIELDSET_ID_PREFIX + slugify(group)}
            html += self.renderer.render_tag("fieldset", attrs, False, False, indent_level + 1) + "\n"
            html += self.renderer.indent("<legend>%s</legend>" % humanize(group), indent_level + 2) + "\n"
            html += self._render_widgets(group, indent_level + 2)
            html += self.renderer.indent("</fieldset>", indent_level + 1) + "\n\n"

        html += self._render_controls(indent_level + 1)
        html += self.renderer.indent("</form>", indent_level) + "\n"
        return html

    def _render_widgets(self, group: str, indent_level: int) -> str:
        items = []
        for entry in self.schema:
            if entry.group != group:
                continue
            items.append(self.renderer.indent("<li>", indent_level + 1))
            items.append(self.renderer.indent(entry.widget.render().strip("\n"), indent_level + 2))
            items.append(self.renderer.indent("</li>", indent_level + 1))

        html = "\n"
        if items:
            html += self.renderer.render_tag("ol", {"class": "fieldList"}, False, False, indent_level) + "\n"
            html += "\n".join(items) + "\n"
            html += self.renderer.indent("</ol>", indent_level) + "\n"
        return html

    def _render_controls(self, indent_level: int) -> str:
        html = self.renderer.render_tag("div", {"class": "formControls"}, False, False, indent_level) + "\n"
        for widget in self.hidden_widgets:
            html += self.renderer.indent(widget.render().strip("\n"), indent_level + 1) + "\n"

        attrs = [
            ("type", "hidden"),
            ("name", SUBMITTED_FIELD_NAME),
            ("value", SUBMITTED_FIELD_VALUE),
        ]
        html += self.renderer.render_tag("input", attrs, True, False, indent_level + 1) + "\n"

        for button in self.buttons:
            classes = PRIMARY_BUTTON_CLASSES if button.is_primary else SECONDARY_BUTTON_CLASSES
            attrs = [
                ("type", "submit"),
                ("value", button.label),
                ("name", button.name),
                ("id", button.name),
                ("class", " ".join(classes)),
            ]
            html += self.renderer.render_tag("input", attrs, True, False, indent_level + 1) + "\n"

        html += self.renderer.indent("</div>", indent_level) + "\n"
        return html


def _name_set(names) -> set:
    if isinstance(names, str):
        return {names}
    if names is None:
        return set()
    return {name for name in names if isinstance(name, str)}


def _resolve_values(values) -> Mapping:
    if values is None:
        return {}
    if isinstance(values, SafeValueSource) or (
        not isinstance(values, Mapping) and hasattr(values, "get_all")
    ):
        return values.get_all() or {}
    if isinstance(values, Mapping):
        return values
    log.debug("Ignoring unsupported value source %r", values)
    return {}


def _resolve_errors(errors) -> Mapping:
    if errors is None:
        return {}
    if isinstance(errors, ValidationErrorSource):
        return errors.get(MSG_TYPE_VALIDATION) or {}
    if isinstance(errors, Mapping):
        return errors
    if hasattr(errors, "get"):
        return errors.get(MSG_TYPE_VALIDATION) or {}
    log.debug("Ignoring unsupported error source %r", errors)
    return {}
