"""Validation schema for Watten rule options."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TRICKS_PER_HAND = 5


class ScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    points_per_hand: int = Field(2, gt=0, description="Game points awarded to the team winning a hand.")
    target_score: int = Field(11, gt=0, description="Game points that end the match.")
    tricks_to_win_hand: int = Field(3, gt=0, description="Tricks a team needs to take the hand.")

    @field_validator("tricks_to_win_hand")
    @classmethod
    def validate_tricks(cls, value: int) -> int:
        if value > MAX_TRICKS_PER_HAND:
            raise ValueError(f"A hand only has {MAX_TRICKS_PER_HAND} tricks.")
        return value


class RuleSet(BaseModel):
    """Options fixed at match start."""

    model_config = ConfigDict(frozen=True)

    use_criticals: bool = Field(True, description="King of Hearts, 7 of Clubs and 7 of Spades outrank everything.")
    use_schleck: bool = Field(True, description="Cut the deck before dealing; needs criticals to have any effect.")
    use_blind: bool = Field(False, description="Only the cutter and dealer must follow a trump-suit lead.")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    @property
    def cutting_enabled(self) -> bool:
        return self.use_criticals and self.use_schleck

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RuleSet":
        """Build a rule set from option-screen style keys (``useCriticals`` or ``use_criticals``)."""
        aliases = {
            "useCriticals": "use_criticals",
            "useSchleck": "use_schleck",
            "useBlind": "use_blind",
        }
        normalized = {aliases.get(key, key): value for key, value in options.items()}
        return cls.model_validate(normalized)
