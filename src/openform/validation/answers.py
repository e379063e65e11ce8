from __future__ import annotations

import re
from typing import Callable
from urllib.parse import urlsplit

from openform.models.question import AnswerValue, QuestionDefinition, QuestionType

REQUIRED_MESSAGE = "This field is required."
EMAIL_MESSAGE = "Please enter a valid email address."
URL_MESSAGE = "Please enter a valid URL."
PHONE_MESSAGE = "Please enter a valid phone number."

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-().]+$")
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

AnswerRule = Callable[[QuestionDefinition, AnswerValue | None], str | None]


def is_blank(value: AnswerValue | None) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, list):
        return len(value) == 0
    return False


def is_absolute_url(text: str) -> bool:
    """Accept what a WHATWG URL parser accepts without a base URL."""
    if not text or text != text.strip() or any(c.isspace() for c in text):
        return False
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        return False
    if parts.scheme.lower() in ("http", "https", "ftp", "ws", "wss"):
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path)


def required(question: QuestionDefinition, value: AnswerValue | None) -> str | None:
    if question.required and is_blank(value):
        return REQUIRED_MESSAGE
    return None


def email_format(question: QuestionDefinition, value: AnswerValue | None) -> str | None:
    if question.type != QuestionType.EMAIL or is_blank(value):
        return None
    if not _EMAIL_PATTERN.match(str(value)):
        return EMAIL_MESSAGE
    return None


def url_format(question: QuestionDefinition, value: AnswerValue | None) -> str | None:
    if question.type != QuestionType.URL or is_blank(value):
        return None
    if not is_absolute_url(str(value)):
        return URL_MESSAGE
    return None


def phone_format(question: QuestionDefinition, value: AnswerValue | None) -> str | None:
    if question.type != QuestionType.PHONE or is_blank(value):
        return None
    if not _PHONE_PATTERN.match(str(value)):
        return PHONE_MESSAGE
    return None


ANSWER_RULES: list[AnswerRule] = [
    required,
    email_format,
    url_format,
    phone_format,
]


def validate_answer(question: QuestionDefinition, value: AnswerValue | None) -> str | None:
    """Return the first rule's error message, or None when the answer is acceptable."""
    for rule in ANSWER_RULES:
        message = rule(question, value)
        if message is not None:
            return message
    return None
