"""Hijri month names for each supported display locale."""

DEFAULT_LOCALE = 'en'

# Month names indexed 0-11 (Muharram first)
HIJRI_MONTHS = {
    'en': [
        'Muharram', 'Safar', "Rabi' al-Awwal", "Rabi' al-Thani",
        'Jumada al-Awwal', 'Jumada al-Thani', 'Rajab', "Sha'ban",
        'Ramadan', 'Shawwal', "Dhul-Qi'dah", 'Dhul-Hijjah',
    ],
    'ur': [
        'محرم', 'صفر', 'ربیع الاول', 'ربیع الثانی',
        'جمادی الاول', 'جمادی الثانی', 'رجب', 'شعبان',
        'رمضان', 'شوال', 'ذو القعدہ', 'ذو الحجہ',
    ],
    'ar': [
        'محرم', 'صفر', 'ربيع الأول', 'ربيع الثاني',
        'جمادى الأولى', 'جمادى الآخرة', 'رجب', 'شعبان',
        'رمضان', 'شوال', 'ذو القعدة', 'ذو الحجة',
    ],
    'hi': [
        'मुहर्रम', 'सफर', 'रबी अल-अव्वल', 'रबी अल-थानी',
        'जुमादा अल-अव्वल', 'जुमादा अल-थानी', 'रजब', 'शाबान',
        'रमजान', 'शव्वाल', 'धुल-क़ादा', 'धुल-हिज्जा',
    ],
}

# Locales rendered right-to-left
RTL_LOCALES = ('ur', 'ar')


def get_supported_locales() -> list[str]:
    """Get locale codes that have a month-name table."""
    return list(HIJRI_MONTHS.keys())


def is_valid_locale(locale: str) -> bool:
    return locale in HIJRI_MONTHS


def get_month_names(locale: str) -> list[str]:
    """Get all twelve month names, falling back to the default locale."""
    return list(HIJRI_MONTHS.get(locale, HIJRI_MONTHS[DEFAULT_LOCALE]))


def is_rtl(locale: str) -> bool:
    return locale in RTL_LOCALES
