# pytoa/models/team.py
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from pytoa.api.client import Client
from pytoa.calculation.aggregator import sum_field
from pytoa.errors import FieldNotFoundError, ShapeError
from pytoa.models.enums import Season
from pytoa.models.event import Event
from pytoa.normalization.normalizer import Normalizer, PropertyMap, unwrap_singleton
from pytoa.utils.misc_utils import insert_event


class Team(BaseModel):
    """An FTC team. Get one from `Client.team` rather than building it yourself.

    Holds no data of its own; every accessor makes a fresh request.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    team_number: PositiveInt
    client: Client = Field(repr=False)

    # --- win/loss/tie record ---

    def _wlt(self, query: str) -> int:
        path = f"/team/{self.team_number}/wlt"
        record = unwrap_singleton(self.client.get_json(path), path)
        if query not in record:
            raise FieldNotFoundError(f"No '{query}' field in response from {path}")
        value = record[query]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ShapeError(f"Field '{query}' from {path} is {value!r}, expected an integer")
        return value

    def wins(self) -> int:
        """The total number of matches the team has won."""
        return self._wlt("wins")

    def losses(self) -> int:
        """The total number of matches the team has lost."""
        return self._wlt("losses")

    def ties(self) -> int:
        """The total number of matches the team has tied."""
        return self._wlt("ties")

    # --- team details ---

    def properties(self) -> PropertyMap:
        """All of the team's details as strings.

        `last_active` holds the season label (e.g. "Skystone"), not the code.
        """
        path = f"/team/{self.team_number}/"
        return Normalizer().properties(self.client.get_json(path), path)

    def get_property(self, name: str) -> str:
        properties = self.properties()
        if name not in properties:
            raise FieldNotFoundError(f"Team {self.team_number} has no '{name}' property")
        return properties[name]

    def name(self) -> str:
        return self.get_property("team_name_long")

    def nickname(self) -> str:
        return self.get_property("team_name_short")

    def city(self) -> str:
        return self.get_property("city")

    def state_prov(self) -> str:
        return self.get_property("state_prov")

    def country(self) -> str:
        return self.get_property("country")

    def website(self) -> str:
        return self.get_property("website")

    def rookie_year(self) -> int:
        value = self.get_property("rookie_year")
        try:
            return int(value)
        except ValueError as e:
            raise ShapeError(f"rookie_year of team {self.team_number} is {value!r}") from e

    def last_active(self) -> Season:
        """The last season the team competed in."""
        path = f"/team/{self.team_number}/"
        record = unwrap_singleton(self.client.get_json(path), path)
        if "last_active" not in record:
            raise FieldNotFoundError(f"No 'last_active' field in response from {path}")
        return Season.value_of(record["last_active"])

    # --- season results ---

    def season_data(self, season: Season, query: str) -> float:
        """Total of one result field over every match the team played in `season`.

        Args:
            season: The season to total.
            query: A numeric result field such as "wins", "opr" or "np_opr".

        Returns:
            The total, rounded to two decimal places.
        """
        path = f"/team/{self.team_number}/results/{season.code}"
        return sum_field(self.client.get_json(path), query)

    def season_wins(self, season: Season) -> float:
        return self.season_data(season, "wins")

    def season_losses(self, season: Season) -> float:
        return self.season_data(season, "losses")

    def season_ties(self, season: Season) -> float:
        return self.season_data(season, "ties")

    def opr(self, season: Season) -> float:
        """Offensive power rating summed over the season's events."""
        return self.season_data(season, "opr")

    def np_opr(self, season: Season) -> float:
        """OPR without penalty points."""
        return self.season_data(season, "np_opr")

    def ranking_points(self, season: Season) -> float:
        return self.season_data(season, "ranking_points")

    def qualifying_points(self, season: Season) -> float:
        return self.season_data(season, "qualifying_points")

    def tie_breaker_points(self, season: Season) -> float:
        return self.season_data(season, "tie_breaker_points")

    # --- events ---

    def events(self, season: Season) -> Dict[str, Event]:
        """The events the team attended in `season`, keyed by event name.

        Names are lower-cased with spaces turned into underscores, e.g.
        "state_championship". When two events share a name, the later one is
        keyed with its event key suffix appended, e.g. "state_championship_cmp2".
        """
        path = f"/team/{self.team_number}/events/{season.code}"
        records = Normalizer().records(self.client.get_json(path), path)

        events: Dict[str, Event] = {}
        for record in records:
            event_key = _event_key(record, path)
            event = self.client.event(event_key)
            insert_event(events, event.name(), event_key, event)
        return events


def _event_key(record: Dict[str, Any], path: str) -> str:
    if "event_key" not in record:
        raise FieldNotFoundError(f"No 'event_key' field in a record from {path}")
    event_key = record["event_key"]
    if not isinstance(event_key, str) or not event_key:
        raise ShapeError(f"Malformed event_key {event_key!r} from {path}")
    return event_key
