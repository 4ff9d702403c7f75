from .messages import MESSAGES, SUPPORTED_LANGUAGES
from .translator import Message, Translator

__all__ = ["MESSAGES", "SUPPORTED_LANGUAGES", "Message", "Translator"]
