class FormBuilderException(Exception):
    """Base exception for all Flask-FormBuilder errors."""

    pass


class InvalidWidgetName(FormBuilderException):
    """Raised when a widget is constructed without a usable name."""

    def __init__(self, name=None):
        super().__init__("Widget name must be a non-empty string, got %r" % (name,))
        self.name = name
