"""
Weekly challenge models.
"""

from pydantic import BaseModel, Field


class ChallengeStatus(BaseModel):
    started: bool = False
    achieved: bool = False
    point: int = 0


class ChallengeSummary(BaseModel):
    hobby_show_off: ChallengeStatus = Field(default_factory=ChallengeStatus, alias="hobbyShowOff")
    hobby_routiner: ChallengeStatus = Field(default_factory=ChallengeStatus, alias="hobbyRoutiner")
    hobby_rich: ChallengeStatus = Field(default_factory=ChallengeStatus, alias="hobbyRich")

    model_config = {"populate_by_name": True}
