"""
Damage bookkeeping module for the arena engine.

Records what happened to each rule during one attack: the value it computed
and whether the validators let it through.
"""

from pydantic import BaseModel, Field


class RuleOutcome(BaseModel):
    """The result of one damage rule within an attack."""

    rule: str = Field(
        description="Display name of the rule.",
    )
    value: int = Field(
        description="The value computed by the rule.",
    )
    applied: bool = Field(
        description="True if the validators approved and the damage was dealt.",
    )


class AttackReport(BaseModel):
    """Summary of a single call to Combatant.attack."""

    attacker: str = Field(
        description="Name of the attacking combatant.",
    )
    defender: str = Field(
        description="Name of the defending combatant.",
    )
    outcomes: list[RuleOutcome] = Field(
        default_factory=list,
        description="One outcome per rule, in rule order.",
    )

    @property
    def total_damage(self) -> int:
        """Sum of the values that were actually applied."""
        return sum(o.value for o in self.outcomes if o.applied)

    @property
    def blocked(self) -> int:
        """Number of rules whose value was blocked."""
        return sum(1 for o in self.outcomes if not o.applied)
