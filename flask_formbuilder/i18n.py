"""
Translation helpers for user visible strings.

Flask-Babel is used when the current app has it initialized. Inside an app
without Flask-Babel the source string is interpolated and returned as it is.
"""

from flask import current_app, has_app_context
import flask_babel
from flask_babel.speaklater import LazyString


def babel_enabled() -> bool:
    """Whether translations can be looked up for the current context."""
    if not has_app_context():
        # flask_babel falls back to untranslated strings without an app
        return True
    return "babel" in getattr(current_app, "extensions", {})


def gettext(string: str, **variables) -> str:
    if babel_enabled():
        return flask_babel.gettext(string, **variables)
    return string % variables if variables else string


def lazy_gettext(string: str, **variables) -> LazyString:
    """Like ``gettext`` but resolved each time the result is rendered."""
    return LazyString(gettext, string, **variables)
