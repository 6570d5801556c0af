from enum import Enum
from typing import Union

from pytoa.errors import SeasonNotFoundError


class Season(int, Enum):
    """FTC competition seasons known to the API, valued by their season code."""

    SKYSTONE = 1920
    ROVER_RUCKUS = 1819
    RELIC_RECOVERY = 1718
    VELOCITY_VORTEX = 1617

    @classmethod
    def value_of(cls, code: Union[str, int]) -> "Season":
        """Look up a season from the code the API uses (e.g. "1920").

        Raises:
            SeasonNotFoundError: if the code is not one of the known seasons.
        """
        text = str(code)
        for season in cls:
            if season.code == text:
                return season
        raise SeasonNotFoundError(f"Unknown season code: {code!r}")

    @property
    def code(self) -> str:
        """The code as it appears in request paths and response fields."""
        return f"{self.value:04d}"

    @property
    def label(self) -> str:
        return SEASON_LABELS[self]

    def __str__(self) -> str:
        return self.label


SEASON_LABELS = {
    Season.SKYSTONE: "Skystone",
    Season.ROVER_RUCKUS: "Rover Ruckus",
    Season.RELIC_RECOVERY: "Relic Recovery",
    Season.VELOCITY_VORTEX: "Velocity Vortex",
}
