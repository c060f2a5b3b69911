"""
Date and time widgets built from a set of dropdown selectors.

The value is kept decomposed into year, month, day, hour, minute and
meridiem sub-fields; each one is submitted as ``<name>-<sub-field>`` and
the form puts them back together before binding.
"""

import datetime
import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

from ..const import (
    DATE_SUBFIELDS,
    DEFAULT_MAX_YEAR,
    DEFAULT_MIN_YEAR,
    MINUTE_INCREMENT,
    TIME_SUBFIELDS,
)
from ..escaping import escape_value
from ..i18n import gettext, lazy_gettext as _
from .core import Widget, WidgetKind, positive_int

log = logging.getLogger(__name__)

MONTH_NAMES = [
    _("January"), _("February"), _("March"), _("April"), _("May"), _("June"),
    _("July"), _("August"), _("September"), _("October"), _("November"),
    _("December"),
]

_NUMERIC_RE = re.compile(r"^\d+(\.\d+)?$")
# "10:0 am", "3:5pm" -> "10:00 am", "3:05pm"
_SINGLE_DIGIT_MINUTE_RE = re.compile(r"(?<=\d):(\d)(?=\D|$)")


def round_to_five_minute_increment(minutes: int) -> int:
    """
    Round ``minutes`` down to the closest 5 minute increment, clamped
    to 59.
    """
    rounded = (int(minutes) // MINUTE_INCREMENT) * MINUTE_INCREMENT
    if rounded > 59:
        rounded = 59
    return rounded


def normalize_time_string(value: str) -> str:
    """Pad a single digit minute to two digits so it parses reliably."""
    return _SINGLE_DIGIT_MINUTE_RE.sub(r":0\1", value)


class DateTimeWidget(Widget):
    """
    A widget for collecting date and time input.

    ``set_value`` accepts a timestamp, a ``datetime``/``date``/``time``, a
    date/time string or a mapping of sub-fields.

    Valid entries for ``options`` are:
        value: initial value
        min_year: oldest year in the year dropdown (default 2000)
        max_year: newest year in the year dropdown (default 2100)
        twenty_four_hour: bool, use 0-23 hours without meridiem
    """

    widget_name = "DateTimeWidget"
    kind = WidgetKind.COMPOSITE
    include_date = True
    include_time = True

    def _configure(self, options):
        self.year = None
        self.month = None
        self.day = None
        self.hour = None
        self.minute = None
        self.ampm = ""
        self.min_year = positive_int(options, "min_year", DEFAULT_MIN_YEAR)
        self.max_year = positive_int(options, "max_year", DEFAULT_MAX_YEAR)
        twenty_four_hour = options.get("twenty_four_hour")
        self.twenty_four_hour = twenty_four_hour if isinstance(twenty_four_hour, bool) else False

    def subfield_names(self) -> List[str]:
        """Names of the sub-fields this widget submits."""
        names = []
        if self.include_date:
            names.extend(DATE_SUBFIELDS)
        if self.include_time:
            names.extend(TIME_SUBFIELDS[:2])
            if not self.twenty_four_hour:
                names.append(TIME_SUBFIELDS[2])
        return names

    def get_value(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in self.subfield_names()}

    def set_value(self, value: Any) -> None:
        if isinstance(value, bool) or not value:
            return
        if isinstance(value, Mapping):
            self._set_subfields(value)
            return
        moment = self._parse(value)
        if moment is None:
            log.debug("Ignoring unparseable value %r for %s", value, self.name)
            return
        self.year = moment.year
        self.month = moment.month
        self.day = moment.day
        self.minute = round_to_five_minute_increment(moment.minute)
        if self.twenty_four_hour:
            self.hour = moment.hour
            self.ampm = ""
        else:
            self.hour = moment.hour % 12 or 12
            self.ampm = "am" if moment.hour < 12 else "pm"

    def _set_subfields(self, value):
        for key in ("month", "day", "year", "ampm", "hour", "minute"):
            if key not in value:
                continue
            item = value[key]
            if key == "ampm":
                meridiem = str(item).strip().lower()
                if meridiem in ("am", "pm", ""):
                    self.ampm = meridiem
                continue
            try:
                setattr(self, key, int(str(item).strip()))
            except ValueError:
                log.debug("Ignoring malformed %s=%r for %s", key, item, self.name)

    @staticmethod
    def _parse(value) -> Optional[datetime.datetime]:
        if isinstance(value, datetime.datetime):
            return value
        if isinstance(value, datetime.date):
            return datetime.datetime.combine(value, datetime.time())
        if isinstance(value, datetime.time):
            return datetime.datetime.combine(datetime.date.today(), value)
        if isinstance(value, str):
            value = value.strip()
            if _NUMERIC_RE.match(value):
                value = float(value)
            else:
                try:
                    return date_parser.parse(normalize_time_string(value))
                except (ValueError, OverflowError):
                    return None
        if isinstance(value, (int, float)):
            if value <= 0:
                return None
            try:
                return datetime.datetime.fromtimestamp(value)
            except (OverflowError, OSError, ValueError):
                return None
        return None

    def _hour_24(self) -> Optional[int]:
        if self.hour is None:
            return None
        if self.twenty_four_hour:
            return self.hour
        if self.ampm not in ("am", "pm"):
            return None
        return self.hour % 12 + (12 if self.ampm == "pm" else 0)

    def to_date(self) -> Optional[datetime.date]:
        """The selected date, ``None`` when incomplete or invalid."""
        try:
            return datetime.date(self.year, self.month, self.day)
        except (TypeError, ValueError):
            return None

    def to_time(self) -> Optional[datetime.time]:
        """The selected time, ``None`` when incomplete or invalid."""
        try:
            return datetime.time(self._hour_24(), self.minute)
        except (TypeError, ValueError):
            return None

    def to_datetime(self) -> Optional[datetime.datetime]:
        """The selected date and time, ``None`` when incomplete."""
        date = self.to_date()
        time = self.to_time()
        if date is None or time is None:
            return None
        return datetime.datetime.combine(date, time)

    def render(self, inner_html: str = "") -> str:
        lines = [self.renderer.render_tag("div", {"class": "datetime-selectors"}, False, False, 1)]
        if self.include_date:
            lines.extend(self._render_drop_downs(self._date_selectors(), 2))
        if self.include_date and self.include_time:
            lines.append(self.renderer.indent('<span class="datetime-spacer">&nbsp;</span>', 2))
        if self.include_time:
            lines.extend(self._render_drop_downs(self._time_selectors(), 2))
        lines.append(self.renderer.indent("</div>", 1))

        if self.disabled:
            for key in self.subfield_names():
                lines.append(
                    self._render_hidden_input("%s-%s" % (self.name, key), getattr(self, key))
                )
        return super().render("\n".join(lines))

    def _date_selectors(self):
        years = [(year, year) for year in range(self.min_year, self.max_year + 1)]
        months = [(number, month) for number, month in enumerate(MONTH_NAMES, start=1)]
        days = [(day, day) for day in range(1, 32)]
        return [
            ("year", years, self.year, "/"),
            ("month", months, self.month, "/"),
            ("day", days, self.day, ""),
        ]

    def _time_selectors(self):
        if self.twenty_four_hour:
            hours = [(hour, hour) for hour in range(0, 24)]
        else:
            hours = [(12, 12)] + [(hour, hour) for hour in range(1, 12)]
        minutes = [(minute, "%02d" % minute) for minute in range(0, 60, MINUTE_INCREMENT)]
        selectors = [
            ("hour", hours, self.hour, ":"),
            ("minute", minutes, self.minute, ""),
        ]
        if not self.twenty_four_hour:
            meridiems = [("am", gettext("AM")), ("pm", gettext("PM"))]
            selectors.append(("ampm", meridiems, self.ampm, ""))
        return selectors

    def _render_drop_downs(self, selectors, indent_level=0) -> List[str]:
        """
        Render a series of dropdown boxes.

        :param selectors: tuples of (sub-field, [(value, label), ...],
            selected value, separator shown after the dropdown)
        :param indent_level: level the span tags are indented at
        :return: lines of HTML
        """
        lines = []
        for key, options, selected, separator in selectors:
            name = "%s-%s" % (self.name, key)
            lines.append(self.renderer.indent("<span>", indent_level))
            attrs = [
                ("name", name),
                ("id", name),
                ("size", 1),
                ("disabled", self._disabled_attribute()),
            ]
            lines.append(self.renderer.render_tag("select", attrs, False, True, indent_level + 1))

            option_lines = []
            value_selected = False
            for value, label in options:
                attrs = {"value": value}
                if selected is not None and selected != "" and str(value) == str(selected):
                    attrs["selected"] = "selected"
                    value_selected = True
                option_lines.append(
                    self.renderer.render_tag("option", attrs, False, False, indent_level + 2)
                    + escape_value(label)
                    + "</option>"
                )

            attrs = {"value": ""}
            if not value_selected:
                attrs["selected"] = "selected"
            lines.append(
                self.renderer.render_tag("option", attrs, False, False, indent_level + 2)
                + "--</option>"
            )
            lines.extend(option_lines)
            lines.append(self.renderer.indent("</select>", indent_level + 1))
            lines.append(self.renderer.indent("</span>", indent_level))
            if separator:
                lines.append(self.renderer.indent("<span>%s</span>" % separator, indent_level))
        return lines


class DateWidget(DateTimeWidget):
    """A ``DateTimeWidget`` showing only the year, month and day selectors."""

    widget_name = "DateWidget"
    include_date = True
    include_time = False


class TimeWidget(DateTimeWidget):
    """A ``DateTimeWidget`` showing only the hour, minute and meridiem selectors."""

    widget_name = "TimeWidget"
    include_date = False
    include_time = True
