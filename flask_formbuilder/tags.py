"""
Element tag rendering and indentation.

Every widget and form builds its markup through a ``TagRenderer`` so the
resulting HTML is consistently indented. A process-wide ``default_renderer``
is shared by all callers that do not inject their own instance; its indent
unit is meant to be configured once at start-up (see
``flask_formbuilder.extension.FormBuilder``).
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .const import DEFAULT_INDENT_SPACES
from .escaping import escape_value

log = logging.getLogger(__name__)

Attributes = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class TagRenderer(object):
    """
    Renders element tags and indents lines of HTML.

    :param indent_spaces: number of spaces per indent level
    """

    def __init__(self, indent_spaces: int = DEFAULT_INDENT_SPACES):
        self._indent_spaces = DEFAULT_INDENT_SPACES
        self.set_indent_spaces(indent_spaces)

    @property
    def indent_spaces(self) -> int:
        return self._indent_spaces

    def set_indent_spaces(self, spaces: Any) -> None:
        """
        Set the number of spaces per indent level.

        Anything that is not a positive integer is ignored and the
        current value is kept.
        """
        if isinstance(spaces, bool) or (
            isinstance(spaces, float) and not spaces.is_integer()
        ):
            log.debug("Ignoring invalid indent spaces %r", spaces)
            return
        try:
            value = int(spaces)
        except (TypeError, ValueError):
            log.debug("Ignoring non numeric indent spaces %r", spaces)
            return
        if value < 1:
            log.debug("Ignoring non positive indent spaces %r", spaces)
            return
        self._indent_spaces = value

    def render_tag(
        self,
        tag: str,
        attributes: Optional[Attributes] = None,
        self_close: bool = True,
        multi_line: bool = False,
        indent_level: int = 0,
    ) -> str:
        """
        Generate the HTML for an element tag and its attributes.

        :param tag: element name
        :param attributes: ordered mapping (or pairs) of attribute values,
            ``None`` values are left out
        :param self_close: close the tag with ``/>`` instead of ``>``
        :param multi_line: put every attribute on its own line, aligned
            one column past the tag name
        :param indent_level: number of levels (not spaces) to indent
        :return: the rendered tag, without a trailing newline
        """
        pairs = [
            '%s="%s"' % (name, escape_value(value))
            for name, value in _iter_attributes(attributes)
            if value is not None
        ]
        closing = " />" if self_close else ">"
        main_indent = indent_level * self._indent_spaces

        if multi_line and pairs:
            sub_indent = main_indent + len(tag) + 2
            lines = [self._prefix("<%s %s" % (tag, pairs[0]), main_indent)]
            lines.extend(self._prefix(pair, sub_indent) for pair in pairs[1:])
            lines[-1] += closing
            return "\n".join(lines)

        html = "<" + tag
        for pair in pairs:
            html += " " + pair
        html += closing
        return self._prefix(html, main_indent)

    def indent(self, html: str, indent_level: int) -> str:
        """
        Indent a line or multiple lines of HTML by ``indent_level``.
        """
        spaces = indent_level * self._indent_spaces
        if "\n" in html:
            return "\n".join(self._prefix(line, spaces) for line in html.split("\n"))
        return self._prefix(html, spaces)

    @staticmethod
    def _prefix(text: str, spaces: int) -> str:
        if spaces <= 0:
            return text
        return " " * spaces + text


def _iter_attributes(attributes):
    if not attributes:
        return []
    if isinstance(attributes, Mapping):
        return attributes.items()
    return attributes


default_renderer = TagRenderer()


def render_tag(tag, attributes=None, self_close=True, multi_line=False, indent_level=0):
    """Render a tag with the process-wide default renderer."""
    return default_renderer.render_tag(
        tag, attributes, self_close, multi_line, indent_level
    )


def indent(html, indent_level):
    """Indent HTML with the process-wide default renderer."""
    return default_renderer.indent(html, indent_level)


def set_indent_spaces(spaces):
    """Configure the indent unit of the process-wide default renderer."""
    default_renderer.set_indent_spaces(spaces)
