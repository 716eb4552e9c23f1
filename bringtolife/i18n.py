"""Interface locales and the user-facing texts that depend on them."""

from typing import Literal

Locale = Literal["en", "ar"]

LOCALES: tuple[str, ...] = ("en", "ar")

# Label used in the prompt's context clause
LOCALE_CONTEXT = {
    "en": "English (LTR)",
    "ar": "Arabic (RTL)",
}

DEFAULT_CREATION_NAME = {
    "en": "New Creation",
    "ar": "مشروع جديد",
}

NOTICES = {
    "generation_failed": {
        "en": "Something went wrong while bringing your idea to life. Please try again.",
        "ar": "حدث خطأ ما أثناء توليد التطبيق. يرجى المحاولة مرة أخرى.",
    },
    "unsupported_file": {
        "en": "Please upload an image or PDF.",
        "ar": "يرجى تحميل صورة أو ملف PDF.",
    },
    "invalid_import": {
        "en": "Invalid creation file format.",
        "ar": "صيغة الملف غير صحيحة.",
    },
    "import_failed": {
        "en": "Failed to import creation.",
        "ar": "فشل استيراد الملف.",
    },
}


def validate_locale(locale: str) -> Locale:
    """Return locale unchanged if supported, raise ValueError otherwise."""
    if locale not in LOCALES:
        raise ValueError(f"Invalid locale: {locale}. Valid: {list(LOCALES)}")
    return locale  # type: ignore[return-value]


def notice(key: str, locale: str) -> str:
    """Look up a user-facing notice in the given locale."""
    return NOTICES[key][locale]
