from .core import Form, FormButton, SchemaEntry  # noqa: F401
