from enum import Enum


class FailureReason(Enum):
    CANCELLED = 'cancelled'
    ERROR = 'error'
    TIMEOUT = 'timeout'


class LookupStatus(Enum):
    ALL_SOURCES_FAILED = 'all_sources_failed'
    CANCELLED = 'cancelled'
    NO_SOURCES_AVAILABLE = 'no_sources_available'
    SUCCESS = 'success'


class PaymentOutcome(Enum):
    CHARGE_FAILED = 'charge_failed'
    NO_PAYER = 'no_payer'
    PAID = 'paid'
    VERIFICATION_FAILED = 'verification_failed'
