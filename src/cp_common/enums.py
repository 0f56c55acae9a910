"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class TripStatus(str, Enum):
    ACTIVE = "active"
    STARTED = "started"
    FINISHED = "finished"
    CANCELED = "canceled"


class TransactionType(str, Enum):
    CHARGE = "cobro"
    REFUND = "devolución"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"


class PriceStatus(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"


class TripAction(str, Enum):
    START = "start"
    CANCEL = "cancel"
    FINISH = "finish"
