import pytest

from speedboard.errors import ValidationFailure
from speedboard.services import validate_result


def _body(**overrides):
    body = {
        "player_name": "ava",
        "score": 50,
        "lps": 5.2,
        "accuracy": 97.5,
        "rank": "Fast",
        "time": 12.3,
        "ms_per_letter": 192.3,
        "game_mode": 30,
    }
    body.update(overrides)
    return body


def test_valid_body_builds_result():
    result = validate_result(_body())

    assert result.player_name == "ava"
    assert result.game_mode == 30
    assert result.score == 50.0
    assert result.rank == "Fast"


def test_player_name_is_trimmed_and_bounded():
    result = validate_result(_body(player_name="  " + "x" * 60 + "  "))

    assert result.player_name == "x" * 40


@pytest.mark.parametrize("missing", ["player_name", "score", "game_mode"])
def test_missing_required_field(missing):
    body = _body()
    del body[missing]

    with pytest.raises(ValidationFailure, match=missing):
        validate_result(body)


def test_blank_player_name():
    with pytest.raises(ValidationFailure):
        validate_result(_body(player_name="   "))


@pytest.mark.parametrize("mode", [45, 0, -15, 30.5, "30", True])
def test_unknown_or_malformed_mode(mode):
    with pytest.raises(ValidationFailure):
        validate_result(_body(game_mode=mode))


def test_integral_float_mode_is_accepted():
    assert validate_result(_body(game_mode=15.0)).game_mode == 15


@pytest.mark.parametrize(
    "field,value",
    [
        ("score", -1),
        ("lps", -0.1),
        ("accuracy", 100.5),
        ("accuracy", -1),
        ("time", 0),
        ("ms_per_letter", 0),
        ("score", float("inf")),
        ("score", "50"),
    ],
)
def test_out_of_range_metrics(field, value):
    with pytest.raises(ValidationFailure):
        validate_result(_body(**{field: value}))


def test_missing_rank_defaults_to_blank():
    body = _body()
    del body["rank"]

    assert validate_result(body).rank == ""


def test_custom_mode_set():
    assert validate_result(_body(game_mode=45), game_modes=(45,)).game_mode == 45
