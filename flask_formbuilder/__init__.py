__version__ = "1.0.0"

from .captcha import MathChallenge  # noqa: F401
from .exceptions import FormBuilderException, InvalidWidgetName  # noqa: F401
from .extension import FormBuilder  # noqa: F401
from .forms import Form, FormButton  # noqa: F401
from .sources import (  # noqa: F401
    SafeValues,
    SafeValueSource,
    ValidationErrorSource,
    ValidationMessages,
    WTFormErrors,
)
from .tags import default_renderer, TagRenderer  # noqa: F401
from .widgets import (  # noqa: F401
    CaptchaWidget,
    ColorSelectionWidget,
    DateTimeWidget,
    DateWidget,
    HiddenWidget,
    HTMLWidget,
    MultiSelectionWidget,
    ParagraphWidget,
    PasswordWidget,
    SelectionFormat,
    SelectionWidget,
    StringWidget,
    TextAreaWidget,
    TimeWidget,
    Widget,
    WidgetKind,
    YesNoWidget,
)
