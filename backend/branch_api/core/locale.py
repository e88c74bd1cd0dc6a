from fastapi import Request

from .config import get_settings

settings = get_settings()


def resolve_locale(accept_language: str | None) -> str:
    """Primary language of an Accept-Language header ("ar-SA" -> "ar").

    Unsupported or missing values resolve to the configured default locale.
    """
    if not accept_language:
        return settings.default_locale
    primary = accept_language.strip()[:2].lower()
    if primary in settings.supported_locales:
        return primary
    return settings.default_locale


def get_locale(request: Request) -> str:
    return resolve_locale(request.headers.get("accept-language"))


def translate(values: dict | None, locale: str) -> str | None:
    # requested locale, then the fallback locale, then whatever is stored first
    if not isinstance(values, dict) or not values:
        return None
    if values.get(locale) is not None:
        return values[locale]
    if values.get(settings.fallback_locale) is not None:
        return values[settings.fallback_locale]
    return next(iter(values.values()), None)
