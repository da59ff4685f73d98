"""Practice helpers: baseline bots and a local table simulation."""

from .bots import baseline_strategy, timeout_fallback
from .simulate import SessionResult, play_hand, run_session

__all__ = ["baseline_strategy", "timeout_fallback", "SessionResult", "play_hand", "run_session"]
