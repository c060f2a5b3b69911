"""
Constants shared by the renderer, the widgets and the form.
"""

# Indentation
DEFAULT_INDENT_SPACES = 2

# Flask configuration keys
CONFIG_INDENT_SPACES = "FORMBUILDER_INDENT_SPACES"
CONFIG_CAPTCHA_MIN_VALUE = "FORMBUILDER_CAPTCHA_MIN_VALUE"
CONFIG_CAPTCHA_MAX_VALUE = "FORMBUILDER_CAPTCHA_MAX_VALUE"
CONFIG_CAPTCHA_OPERATORS = "FORMBUILDER_CAPTCHA_OPERATORS"

EXTENSION_NAME = "formbuilder"

# Message categories used by validation error sources
MSG_TYPE_VALIDATION = "validation"

# Markup identifiers
FIELD_ID_PREFIX = "framework-fieldname-"
FORM_ID_PREFIX = "form-"
FIELDSET_ID_PREFIX = "fieldset-"

SUBMITTED_FIELD_NAME = "submitted"
SUBMITTED_FIELD_VALUE = "ok"

PRIMARY_BUTTON_CLASSES = ("primary", "context")
SECONDARY_BUTTON_CLASSES = ("secondary", "standalone")

# Selection widgets
FLEX_LIST_THRESHOLD = 5
MAX_MULTI_SELECT_SIZE = 10

# Date/time widgets
DEFAULT_MIN_YEAR = 2000
DEFAULT_MAX_YEAR = 2100
MINUTE_INCREMENT = 5
DATE_SUBFIELDS = ("year", "month", "day")
TIME_SUBFIELDS = ("hour", "minute", "ampm")

# Captcha
DEFAULT_CAPTCHA_MIN_VALUE = 1
DEFAULT_CAPTCHA_MAX_VALUE = 20
DEFAULT_CAPTCHA_OPERATORS = ("+", "-")
CAPTCHA_SESSION_KEY = "ksht"
