"""
Weekly challenges REST API.
"""

from hobbyshare.models.challenge import ChallengeSummary
from hobbyshare.transport.http import HttpClient


class ChallengesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(self) -> ChallengeSummary:
        return ChallengeSummary.model_validate(await self._http.get("/challenge"))

    async def start(self, challenge_number: int) -> None:
        await self._http.post(f"/challenge/start/{challenge_number}")
