"""Temporal analysis for dtmcflow."""

from dtmcflow.temporal.passage import (
    expected_rewards,
    expected_rewards_before_hitting,
    first_passage,
    first_passage_multiple,
)

__all__ = [
    "expected_rewards",
    "expected_rewards_before_hitting",
    "first_passage",
    "first_passage_multiple",
]
