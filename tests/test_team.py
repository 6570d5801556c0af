import httpx
import pydantic
import pytest

from pytoa.errors import (
    FieldNotFoundError,
    SeasonNotFoundError,
    ShapeError,
    TransportError,
)
from pytoa.models.enums import Season
from pytoa.models.event import Event

WLT = [{"wins": 42, "losses": 17, "ties": 3}]

RESULTS_1920 = [
    {"wins": 5, "losses": 1, "ties": 0, "opr": 101.333, "np_opr": 88.006},
    {"wins": 4, "losses": 2, "ties": 1, "opr": 95.1, "np_opr": 80.0},
]


class TestTeamRecord:
    def test_wins_losses_ties(self, make_api) -> None:
        api = make_api({"/team/16405/wlt": WLT})
        team = api.client().team(16405)
        assert (team.wins(), team.losses(), team.ties()) == (42, 17, 3)
        assert api.paths() == ["/team/16405/wlt"] * 3

    def test_same_answer_twice(self, make_api) -> None:
        api = make_api({"/team/16405/wlt": WLT})
        client = api.client()
        assert client.team(16405).wins() == client.team(16405).wins()
        assert client.team(16405).team_number == client.team(16405).team_number

    def test_missing_field(self, make_api) -> None:
        api = make_api({"/team/16405/wlt": [{"wins": 1}]})
        with pytest.raises(FieldNotFoundError, match="ties"):
            api.client().team(16405).ties()

    def test_non_integer(self, make_api) -> None:
        api = make_api({"/team/16405/wlt": [{"wins": "many"}]})
        with pytest.raises(ShapeError):
            api.client().team(16405).wins()

    def test_empty_array(self, make_api) -> None:
        api = make_api({"/team/16405/wlt": []})
        with pytest.raises(ShapeError):
            api.client().team(16405).wins()

    def test_unknown_team(self, make_api) -> None:
        api = make_api({})
        with pytest.raises(TransportError) as exc_info:
            api.client().team(99999).wins()
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("number", [0, -5])
    def test_team_number_must_be_positive(self, make_api, number: int) -> None:
        with pytest.raises(pydantic.ValidationError):
            make_api({}).client().team(number)

    def test_team_is_frozen(self, make_api) -> None:
        team = make_api({}).client().team(16405)
        with pytest.raises(pydantic.ValidationError):
            team.team_number = 1


class TestTeamProperties:
    def test_properties(self, make_api, team_detail) -> None:
        api = make_api({"/team/16405/": team_detail})
        props = api.client().team(16405).properties()
        assert props["team_name_short"] == "Foo Bots"
        assert props["rookie_year"] == "2019"
        assert props["robot_name"] == "null"
        assert props["last_active"] == "Skystone"

    def test_convenience_accessors(self, make_api, team_detail) -> None:
        team = make_api({"/team/16405/": team_detail}).client().team(16405)
        assert team.name() == "Foo Robotics Club"
        assert team.nickname() == "Foo Bots"
        assert team.city() == "Houston"
        assert team.state_prov() == "TX"
        assert team.country() == "USA"
        assert team.website() == "https://foo.example"
        assert team.rookie_year() == 2019
        assert team.last_active() is Season.SKYSTONE

    def test_missing_property(self, make_api, team_detail) -> None:
        team = make_api({"/team/16405/": team_detail}).client().team(16405)
        with pytest.raises(FieldNotFoundError, match="motto"):
            team.get_property("motto")

    def test_unknown_last_active(self, make_api, team_detail) -> None:
        team_detail[0]["last_active"] = "2223"
        team = make_api({"/team/16405/": team_detail}).client().team(16405)
        with pytest.raises(SeasonNotFoundError):
            team.properties()

    def test_nested_value(self, make_api, team_detail) -> None:
        team_detail[0]["awards"] = [{"award_key": "INS"}]
        team = make_api({"/team/16405/": team_detail}).client().team(16405)
        with pytest.raises(ShapeError, match="awards"):
            team.properties()


class TestSeasonData:
    def test_totals(self, make_api) -> None:
        api = make_api({"/team/16405/results/1920": RESULTS_1920})
        team = api.client().team(16405)
        assert team.season_wins(Season.SKYSTONE) == 9.0
        assert team.season_losses(Season.SKYSTONE) == 3.0
        assert team.season_ties(Season.SKYSTONE) == 1.0
        assert team.opr(Season.SKYSTONE) == 196.43
        assert team.np_opr(Season.SKYSTONE) == 168.01

    def test_uses_season_code_in_path(self, make_api) -> None:
        api = make_api({"/team/16405/results/1617": []})
        assert api.client().team(16405).season_data(Season.VELOCITY_VORTEX, "wins") == 0.0
        assert api.paths() == ["/team/16405/results/1617"]

    def test_missing_field(self, make_api) -> None:
        api = make_api({"/team/16405/results/1920": RESULTS_1920})
        with pytest.raises(FieldNotFoundError):
            api.client().team(16405).ranking_points(Season.SKYSTONE)

    @pytest.mark.parametrize("token", [b"NaN", b"Infinity", b"-Infinity"])
    def test_non_finite_values_rejected(self, make_api, token: bytes) -> None:
        body = b'[{"opr": 10.5}, {"opr": ' + token + b"}]"
        api = make_api({"/team/16405/results/1920": httpx.Response(200, content=body)})
        with pytest.raises(ShapeError, match="opr"):
            api.client().team(16405).opr(Season.SKYSTONE)


class TestTeamEvents:
    def test_events_keyed_by_name(self, make_api) -> None:
        api = make_api(
            {
                "/team/16405/events/1920": [
                    {"event_key": "1920-TX-LM1", "team_number": 16405},
                    {"event_key": "1920-TX-SC1", "team_number": 16405},
                ],
                "/event/1920-TX-LM1": [{"event_key": "1920-TX-LM1", "event_name": "League Meet 1"}],
                "/event/1920-TX-SC1": [{"event_key": "1920-TX-SC1", "event_name": "State Championship"}],
            }
        )
        events = api.client().team(16405).events(Season.SKYSTONE)
        assert set(events) == {"league_meet_1", "state_championship"}
        assert isinstance(events["state_championship"], Event)
        assert events["state_championship"].event_key == "1920-TX-SC1"

    def test_colliding_names_are_disambiguated(self, make_api) -> None:
        api = make_api(
            {
                "/team/16405/events/1920": [
                    {"event_key": "1920-TX-SC1"},
                    {"event_key": "1920-OK-SC2"},
                ],
                "/event/1920-TX-SC1": [{"event_name": "State Championship"}],
                "/event/1920-OK-SC2": [{"event_name": "State Championship"}],
            }
        )
        events = api.client().team(16405).events(Season.SKYSTONE)
        assert len(events) == 2
        assert events["state_championship"].event_key == "1920-TX-SC1"
        assert events["state_championship_sc2"].event_key == "1920-OK-SC2"

    def test_record_without_event_key(self, make_api) -> None:
        api = make_api({"/team/16405/events/1920": [{"team_number": 16405}]})
        with pytest.raises(FieldNotFoundError, match="event_key"):
            api.client().team(16405).events(Season.SKYSTONE)

    def test_no_events(self, make_api) -> None:
        api = make_api({"/team/16405/events/1819": []})
        assert api.client().team(16405).events(Season.ROVER_RUCKUS) == {}
