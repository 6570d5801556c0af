# pytoa/models/event.py
from pydantic import BaseModel, ConfigDict, Field

from pytoa.api.client import Client
from pytoa.calculation.aggregator import find_team_field
from pytoa.errors import FieldNotFoundError
from pytoa.models.enums import Season
from pytoa.normalization.normalizer import Normalizer, PropertyMap


class Event(BaseModel):
    """An FTC event, identified by its API key (e.g. "1920-CMP-HOU1").

    Get one from `Client.event` or `Team.events`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_key: str = Field(..., min_length=1)
    client: Client = Field(repr=False)

    def properties(self) -> PropertyMap:
        """All of the event's details as strings."""
        path = f"/event/{self.event_key}"
        return Normalizer().properties(self.client.get_json(path), path)

    def get_property(self, name: str) -> str:
        properties = self.properties()
        if name not in properties:
            raise FieldNotFoundError(f"Event {self.event_key} has no '{name}' property")
        return properties[name]

    def name(self) -> str:
        return self.get_property("event_name")

    def city(self) -> str:
        return self.get_property("city")

    def state_prov(self) -> str:
        return self.get_property("state_prov")

    def country(self) -> str:
        return self.get_property("country")

    def venue(self) -> str:
        return self.get_property("venue")

    def website(self) -> str:
        return self.get_property("website")

    def start_date(self) -> str:
        return self.get_property("start_date")

    def end_date(self) -> str:
        return self.get_property("end_date")

    def event_type_key(self) -> str:
        return self.get_property("event_type_key")

    def region_key(self) -> str:
        return self.get_property("region_key")

    def league_key(self) -> str:
        return self.get_property("league_key")

    def season(self) -> Season:
        return Season.value_of(self.get_property("season_key"))

    # --- rankings ---

    def team_ranking(self, team_number: int, query: str) -> float:
        """One numeric field of a team's ranking at this event.

        Raises:
            TeamNotFoundError: the team is not ranked at this event.
            FieldNotFoundError: the team's ranking has no `query` field.
        """
        path = f"/event/{self.event_key}/rankings"
        return find_team_field(self.client.get_json(path), team_number, query)

    def rank(self, team_number: int) -> int:
        return int(self.team_ranking(team_number, "rank"))

    def team_wins(self, team_number: int) -> int:
        return int(self.team_ranking(team_number, "wins"))

    def team_losses(self, team_number: int) -> int:
        return int(self.team_ranking(team_number, "losses"))

    def team_ties(self, team_number: int) -> int:
        return int(self.team_ranking(team_number, "ties"))

    def team_opr(self, team_number: int) -> float:
        return self.team_ranking(team_number, "opr")

    def team_np_opr(self, team_number: int) -> float:
        return self.team_ranking(team_number, "np_opr")

    def team_ranking_points(self, team_number: int) -> float:
        return self.team_ranking(team_number, "ranking_points")
