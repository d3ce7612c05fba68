"""Blind birthday attack against a prefix-leaking HMAC oracle."""

from blind_birthday.core.engine import CollisionSearchEngine, SearchState, TrieNode
from blind_birthday.core.errors import (
    BlindBirthdayError,
    DegenerateCandidate,
    OracleFailure,
    SearchExhausted,
)
from blind_birthday.core.oracle import HMACOracle
from blind_birthday.utils.types import AttackConfig, CollisionReport, ProgressEvent

__version__ = "0.1.0"

__all__ = [
    "AttackConfig",
    "BlindBirthdayError",
    "CollisionReport",
    "CollisionSearchEngine",
    "DegenerateCandidate",
    "HMACOracle",
    "OracleFailure",
    "ProgressEvent",
    "SearchExhausted",
    "SearchState",
    "TrieNode",
]
