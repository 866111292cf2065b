from .configuration import RECOGNIZED_KEYS, TemplateConfiguration, parse_bool
from .template import Template, TemplateFactory

__all__ = [
    "RECOGNIZED_KEYS",
    "Template",
    "TemplateConfiguration",
    "TemplateFactory",
    "parse_bool",
]
