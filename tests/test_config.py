import pytest

from videopoker.config import CLASSIC, DELUXE, GameConfig, get_variant
from videopoker.messages import DEFAULT_MESSAGES, Messages, Msg, is_exit


def test_variants():
    assert CLASSIC.allowed_bets == (5, 10, 20, 30)
    assert CLASSIC.max_gamble_rounds == 1
    assert not CLASSIC.scoreboard_enabled
    assert DELUXE.allowed_bets == (5, 10, 20, 50, 100)
    assert DELUXE.max_gamble_rounds == 5
    assert DELUXE.scoreboard_enabled and DELUXE.allow_bet_change
    for config in (CLASSIC, DELUXE):
        assert config.default_bet == 5
        assert config.starting_credits == 100


def test_get_variant():
    assert get_variant("classic") is CLASSIC
    assert get_variant(" Deluxe ") is DELUXE
    assert get_variant("") is CLASSIC
    with pytest.raises(ValueError):
        get_variant("progressive")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"allowed_bets": ()},
        {"allowed_bets": (0, 5)},
        {"allowed_bets": (10, 20)},
        {"allowed_bets": (5,), "starting_credits": -1},
        {"allowed_bets": (5,), "max_gamble_rounds": 0},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        GameConfig(name="broken", **kwargs)


def test_every_message_has_a_template():
    assert set(DEFAULT_MESSAGES) == set(Msg)


def test_messages_format_and_override():
    messages = Messages({Msg.GOODBYE: "Bye {name}", "game_over": "Done."})
    assert messages.get(Msg.GOODBYE, name="alice") == "Bye alice"
    assert messages.get(Msg.GAME_OVER) == "Done."
    assert messages.get(Msg.WIN_AMOUNT, win=20) == "Win for this hand: 20 credits."
    assert Messages().get(Msg.GOODBYE) == "Exiting game. Goodbye!"


@pytest.mark.parametrize("text, expected", [("exit", True), (" Exit ", True), ("EXIT", True), ("exits", False), ("", False)])
def test_is_exit(text, expected):
    assert is_exit(text) is expected
