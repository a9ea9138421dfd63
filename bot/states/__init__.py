"""
Session states.

Conversation steps for every user and admin flow.
"""

from bot.states.session_states import (
    ADMIN_STATES,
    AdminAwaitingBlockTarget,
    AdminAwaitingBroadcastText,
    AdminAwaitingCategoryPrice,
    AdminAwaitingCategoryValue,
    AdminAwaitingCodeToRemove,
    AdminAwaitingDmTarget,
    AdminAwaitingDmText,
    AdminAwaitingStockCodes,
    AdminAwaitingTierPrice,
    AwaitingCaptcha,
    AwaitingCategorySelection,
    AwaitingCustomQuantity,
    AwaitingPaymentProof,
    AwaitingQuantitySelection,
    AwaitingRecoveryOrderId,
    AwaitingScreenshot,
    AwaitingUtr,
    AwaitingVerification,
    InSupportMode,
    SessionState,
    is_admin_state,
)

__all__ = [
    "ADMIN_STATES",
    "AdminAwaitingBlockTarget",
    "AdminAwaitingBroadcastText",
    "AdminAwaitingCategoryPrice",
    "AdminAwaitingCategoryValue",
    "AdminAwaitingCodeToRemove",
    "AdminAwaitingDmTarget",
    "AdminAwaitingDmText",
    "AdminAwaitingStockCodes",
    "AdminAwaitingTierPrice",
    "AwaitingCaptcha",
    "AwaitingCategorySelection",
    "AwaitingCustomQuantity",
    "AwaitingPaymentProof",
    "AwaitingQuantitySelection",
    "AwaitingRecoveryOrderId",
    "AwaitingScreenshot",
    "AwaitingUtr",
    "AwaitingVerification",
    "InSupportMode",
    "SessionState",
    "is_admin_state",
]
