"""
Session states.

One frozen dataclass per conversation step. A user with no session is idle.
"""

from dataclasses import dataclass
from decimal import Decimal

from app.models.enums import PriceTier


# Verification

@dataclass(frozen=True)
class AwaitingVerification:
    pass


@dataclass(frozen=True)
class AwaitingCaptcha:
    expected_answer: int


# Purchase

@dataclass(frozen=True)
class AwaitingCategorySelection:
    pass


@dataclass(frozen=True)
class AwaitingQuantitySelection:
    category_id: str


@dataclass(frozen=True)
class AwaitingCustomQuantity:
    category_id: str


@dataclass(frozen=True)
class AwaitingPaymentProof:
    category_id: str
    quantity: int
    total_cost: Decimal


@dataclass(frozen=True)
class AwaitingScreenshot:
    category_id: str
    quantity: int
    total_cost: Decimal


@dataclass(frozen=True)
class AwaitingUtr:
    category_id: str
    quantity: int
    total_cost: Decimal
    proof_ref: str


# Orders and support

@dataclass(frozen=True)
class AwaitingRecoveryOrderId:
    pass


@dataclass(frozen=True)
class InSupportMode:
    pass


# Admin

@dataclass(frozen=True)
class AdminAwaitingCategoryValue:
    pass


@dataclass(frozen=True)
class AdminAwaitingCategoryPrice:
    face_value: int


@dataclass(frozen=True)
class AdminAwaitingTierPrice:
    category_id: str
    tier: PriceTier


@dataclass(frozen=True)
class AdminAwaitingStockCodes:
    category_id: str


@dataclass(frozen=True)
class AdminAwaitingCodeToRemove:
    pass


@dataclass(frozen=True)
class AdminAwaitingBroadcastText:
    pass


@dataclass(frozen=True)
class AdminAwaitingDmTarget:
    pass


@dataclass(frozen=True)
class AdminAwaitingDmText:
    target_id: str


@dataclass(frozen=True)
class AdminAwaitingBlockTarget:
    pass


SessionState = (
    AwaitingVerification
    | AwaitingCaptcha
    | AwaitingCategorySelection
    | AwaitingQuantitySelection
    | AwaitingCustomQuantity
    | AwaitingPaymentProof
    | AwaitingScreenshot
    | AwaitingUtr
    | AwaitingRecoveryOrderId
    | InSupportMode
    | AdminAwaitingCategoryValue
    | AdminAwaitingCategoryPrice
    | AdminAwaitingTierPrice
    | AdminAwaitingStockCodes
    | AdminAwaitingCodeToRemove
    | AdminAwaitingBroadcastText
    | AdminAwaitingDmTarget
    | AdminAwaitingDmText
    | AdminAwaitingBlockTarget
)

ADMIN_STATES: tuple[type, ...] = (
    AdminAwaitingCategoryValue,
    AdminAwaitingCategoryPrice,
    AdminAwaitingTierPrice,
    AdminAwaitingStockCodes,
    AdminAwaitingCodeToRemove,
    AdminAwaitingBroadcastText,
    AdminAwaitingDmTarget,
    AdminAwaitingDmText,
    AdminAwaitingBlockTarget,
)


def is_admin_state(state: object) -> bool:
    return isinstance(state, ADMIN_STATES)
