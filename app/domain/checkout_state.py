# app/domain/checkout_state.py
from enum import Enum
from typing import Dict, List

from app.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutState(str, Enum):
    START = "START"
    CART_LOADED = "CART_LOADED"
    INVENTORY_RESERVED = "INVENTORY_RESERVED"
    ORDER_PERSISTED = "ORDER_PERSISTED"
    CART_CLEARED = "CART_CLEARED"
    DONE = "DONE"
    FAILED = "FAILED"


TERMINAL_STATES = {CheckoutState.DONE, CheckoutState.FAILED}


class CheckoutStateMachine:
    """Allowed transitions of one checkout attempt"""

    TRANSITIONS: Dict[CheckoutState, List[CheckoutState]] = {
        CheckoutState.START: [CheckoutState.CART_LOADED],
        CheckoutState.CART_LOADED: [CheckoutState.INVENTORY_RESERVED],
        CheckoutState.INVENTORY_RESERVED: [CheckoutState.ORDER_PERSISTED],
        CheckoutState.ORDER_PERSISTED: [CheckoutState.CART_CLEARED, CheckoutState.DONE],
        CheckoutState.CART_CLEARED: [CheckoutState.DONE],
    }

    @classmethod
    def can_transition(cls, from_state: CheckoutState, to_state: CheckoutState) -> bool:
        if to_state == CheckoutState.FAILED:
            return from_state not in TERMINAL_STATES
        return to_state in cls.TRANSITIONS.get(from_state, [])


class CheckoutAttempt:
    """
    Tracks the state of a single checkout.

    ORDER_PERSISTED -> DONE without CART_CLEARED is the degraded path taken
    when the order committed but the cart could not be cleared.
    """

    def __init__(self, user_id: int):
        self.user_id = user_id
        self.state = CheckoutState.START
        self.failure_reason: str | None = None
        self.history: List[CheckoutState] = [CheckoutState.START]

    def advance(self, to_state: CheckoutState) -> None:
        if to_state == CheckoutState.FAILED:
            raise ValueError("Use fail() to enter FAILED")
        if not CheckoutStateMachine.can_transition(self.state, to_state):
            raise RuntimeError(
                f"Invalid checkout transition from {self.state.value} to {to_state.value}"
            )
        logger.info(f"Checkout for user {self.user_id}: {self.state.value} -> {to_state.value}")
        self.state = to_state
        self.history.append(to_state)

    def fail(self, reason: str) -> None:
        if not CheckoutStateMachine.can_transition(self.state, CheckoutState.FAILED):
            raise RuntimeError(f"Checkout already finished in state {self.state.value}")
        logger.info(f"Checkout for user {self.user_id}: {self.state.value} -> FAILED ({reason})")
        self.state = CheckoutState.FAILED
        self.failure_reason = reason
        self.history.append(CheckoutState.FAILED)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES
