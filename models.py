from pydantic import BaseModel, ConfigDict, Field, model_validator

from config import TIER_2_OF_8, TIER_4_OF_4, TIER_8_OF_8


class CredentialCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str = ""  # empty unless the query itself failed


class TierReport(BaseModel):
    """Reward tiers an account qualifies for.

    Flags are derived from ``total_count`` alone, so a full holder implies
    every lower tier as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    has2of8: bool
    has4of4: bool
    has8of8: bool
    total_count: int = Field(alias="totalCount", ge=0, le=TIER_8_OF_8)

    @model_validator(mode="after")
    def _flags_match_count(self) -> "TierReport":
        expected = (
            self.total_count >= TIER_2_OF_8,
            self.total_count >= TIER_4_OF_4,
            self.total_count == TIER_8_OF_8,
        )
        if (self.has2of8, self.has4of4, self.has8of8) != expected:
            raise ValueError(f"Tier flags do not match credential count {self.total_count}")
        return self

    @classmethod
    def from_count(cls, count: int) -> "TierReport":
        return cls(
            has2of8=count >= TIER_2_OF_8,
            has4of4=count >= TIER_4_OF_4,
            has8of8=count == TIER_8_OF_8,
            total_count=count,
        )
