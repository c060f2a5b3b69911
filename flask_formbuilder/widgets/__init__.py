from .core import (  # noqa: F401
    HiddenWidget,
    HTMLWidget,
    ParagraphWidget,
    Widget,
    WidgetKind,
)
from .dates import DateTimeWidget, DateWidget, TimeWidget  # noqa: F401
from .selection import (  # noqa: F401
    ColorSelectionWidget,
    MultiSelectionWidget,
    SelectionFormat,
    SelectionWidget,
    YesNoWidget,
)
from .text import (  # noqa: F401
    CaptchaWidget,
    PasswordWidget,
    StringWidget,
    TextAreaWidget,
)
