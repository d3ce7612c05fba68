"""Independent verification of reported collisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blind_birthday.utils.bits import birthday_collision_probability, first_mismatch_bit

if TYPE_CHECKING:
    from blind_birthday.core.oracle import HMACOracle
    from blind_birthday.utils.types import CollisionReport


class Validator:
    """Check a CollisionReport against the oracle that produced it.

    Recomputes both truncated digests directly rather than trusting the
    engine's comparison.
    """

    def __init__(self, oracle: HMACOracle, report: CollisionReport) -> None:
        self.oracle = oracle
        self.report = report

    def messages_distinct(self) -> bool:
        return self.report.message1 != self.report.message2

    def matching_bits(self) -> int:
        """Leading bits shared by the two recomputed digests."""
        h1 = self.oracle.digest(self.report.message1)
        h2 = self.oracle.digest(self.report.message2)
        return first_mismatch_bit(h1, h2, self.oracle.digest_bits)

    def digests_collide(self) -> bool:
        return self.matching_bits() == self.oracle.digest_bits

    def is_valid(self) -> bool:
        return self.messages_distinct() and self.digests_collide()

    def luck_percentile(self) -> float:
        """Chance that random draws collide within the reported tree size.

        Low values mean the attack got lucky, high values unlucky.
        """
        # root + inserted nodes + the colliding candidate
        n = self.report.tree_size + 2
        return birthday_collision_probability(n, self.oracle.digest_bits)

    def summary(self) -> dict:
        """Full validation summary."""
        return {
            "valid": self.is_valid(),
            "distinct": self.messages_distinct(),
            "matching_bits": self.matching_bits(),
            "digest_bits": self.oracle.digest_bits,
            "digest": self.oracle.digest(self.report.message1).hex(),
            "luck_percentile": self.luck_percentile(),
        }
