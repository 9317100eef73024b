"""
Display labels for domain enums.

Language is always passed explicitly; there is no ambient culture. Missing
entries fall back to English, then to the raw enum value.
"""

from enum import Enum

from app.domain.entities.booking import BookingStatus
from app.domain.entities.catalog import VehicleStatus
from app.domain.entities.loyalty import LoyaltyEarnReason, LoyaltyTransactionType


class Language(str, Enum):
    EN = "en"
    AR = "ar"

    @classmethod
    def parse(cls, value: str | None, default: "Language | None" = None) -> "Language":
        """Accepts 'ar', 'ar-EG', 'en-US,en;q=0.9'... Unknown values give the default."""
        fallback = default or cls.EN
        if not value:
            return fallback
        primary = value.split(",")[0].split(";")[0].strip().lower()
        primary = primary.split("-")[0].split("_")[0]
        for language in cls:
            if language.value == primary:
                return language
        return fallback


_LABELS: dict[Enum, dict[Language, str]] = {
    BookingStatus.OPEN: {Language.EN: "Open", Language.AR: "مفتوح"},
    BookingStatus.CONFIRMED: {Language.EN: "Confirmed", Language.AR: "مؤكد"},
    BookingStatus.IN_PROGRESS: {Language.EN: "In Progress", Language.AR: "قيد التنفيذ"},
    BookingStatus.COMPLETED: {Language.EN: "Completed", Language.AR: "مكتمل"},
    BookingStatus.CANCELED: {Language.EN: "Canceled", Language.AR: "ملغي"},
    BookingStatus.CLOSED: {Language.EN: "Closed", Language.AR: "مغلق"},
    VehicleStatus.AVAILABLE: {Language.EN: "Available", Language.AR: "متاح"},
    VehicleStatus.RENTED: {Language.EN: "Rented", Language.AR: "مؤجر"},
    VehicleStatus.MAINTENANCE: {Language.EN: "Maintenance", Language.AR: "صيانة"},
    VehicleStatus.OUT_OF_SERVICE: {Language.EN: "Out of Service", Language.AR: "خارج الخدمة"},
    LoyaltyTransactionType.EARNED: {Language.EN: "Earned", Language.AR: "مكتسبة"},
    LoyaltyTransactionType.REDEEMED: {Language.EN: "Redeemed", Language.AR: "مستبدلة"},
    LoyaltyTransactionType.EXPIRED: {Language.EN: "Expired", Language.AR: "منتهية الصلاحية"},
    LoyaltyTransactionType.BONUS: {Language.EN: "Bonus", Language.AR: "مكافأة"},
    LoyaltyTransactionType.REFUND: {Language.EN: "Refund", Language.AR: "استرداد"},
    LoyaltyTransactionType.ADJUSTMENT: {Language.EN: "Adjustment", Language.AR: "تعديل"},
    LoyaltyEarnReason.BOOKING_COMPLETED: {
        Language.EN: "Points earned from completed booking",
        Language.AR: "نقاط مكتسبة من حجز مكتمل",
    },
    LoyaltyEarnReason.REFERRAL: {
        Language.EN: "Points earned from referral",
        Language.AR: "نقاط مكتسبة من الإحالة",
    },
    LoyaltyEarnReason.REGISTRATION: {
        Language.EN: "Welcome bonus for registration",
        Language.AR: "مكافأة الترحيب للتسجيل",
    },
    LoyaltyEarnReason.REVIEW: {
        Language.EN: "Points earned from review",
        Language.AR: "نقاط مكتسبة من التقييم",
    },
    LoyaltyEarnReason.BIRTHDAY: {
        Language.EN: "Birthday bonus points",
        Language.AR: "نقاط مكافأة عيد الميلاد",
    },
    LoyaltyEarnReason.PROMOTION: {
        Language.EN: "Promotional points",
        Language.AR: "نقاط ترويجية",
    },
    LoyaltyEarnReason.LONG_TERM_RENTAL: {
        Language.EN: "Long-term rental bonus",
        Language.AR: "مكافأة الإيجار طويل المدى",
    },
    LoyaltyEarnReason.PREMIUM_CAR: {
        Language.EN: "Premium car rental bonus",
        Language.AR: "مكافأة استئجار سيارة فاخرة",
    },
}

# (singular, plural) per billing unit
_UNITS: dict[Language, dict[str, tuple[str, str]]] = {
    Language.EN: {"month": ("month", "months"), "week": ("week", "weeks"), "day": ("day", "days")},
    Language.AR: {"month": ("شهر", "أشهر"), "week": ("أسبوع", "أسابيع"), "day": ("يوم", "أيام")},
}

NO_PERIODS: dict[Language, str] = {Language.EN: "No periods", Language.AR: "لا توجد فترات"}


def describe(value: Enum, language: Language = Language.EN) -> str:
    """Display text of an enum member."""
    entry = _LABELS.get(value)
    if entry is None:
        return str(value.value)
    return entry.get(language) or entry.get(Language.EN) or str(value.value)


def unit_label(unit: str, count: int, language: Language = Language.EN) -> str:
    """'1 month', '2 weeks', '3 أيام'..."""
    singular, plural = _UNITS[language][unit]
    return f"{count} {singular if count == 1 else plural}"


def no_periods(language: Language = Language.EN) -> str:
    return NO_PERIODS[language]
