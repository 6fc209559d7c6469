import pytest

from videopoker.config import CLASSIC, DELUXE, GameConfig
from videopoker.gamble import RED
from videopoker.random_source import RandomSource
from videopoker.session import (
    AWAITING_DEAL,
    BET_SELECTION,
    EVALUATING,
    GAMBLE_DECISION,
    GAME_OVER,
    GAMBLING,
    HOLD_SELECTION,
    SETTLEMENT,
    SessionStateMachine,
    parse_bet,
    parse_holds,
)

from conftest import FakeChannel, ScriptedRandom, cards


NO_WIN = ("2H", "5D", "9C", "JS", "KH")
TWO_PAIR = ("2C", "2D", "9H", "9S", "KC")
ROYAL = ("10H", "JH", "QH", "KH", "AH")


def make_session(deck_of, *specs, config=CLASSIC, rng=None, **kwargs):
    return SessionStateMachine(
        FakeChannel(),
        config=config,
        rng=rng or ScriptedRandom(),
        deck_factory=deck_of(*specs),
        **kwargs,
    )


@pytest.mark.parametrize(
    "raw, expected",
    [("10", 10), (" 30 ", 30), ("", 5), ("abc", 5), ("25", 5), ("-10", 5), ("10.5", 5)],
)
def test_parse_bet_classic(raw, expected):
    assert parse_bet(raw, CLASSIC) == expected


def test_parse_bet_deluxe_tiers():
    assert parse_bet("100", DELUXE) == 100
    assert parse_bet("30", DELUXE) == 5


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("134", {0, 2, 3}),
        ("1, 3 3", {0, 2}),
        ("hold 5 and 2", {4, 1}),
        ("069", set()),
        ("", set()),
        ("12345", {0, 1, 2, 3, 4}),
    ],
)
def test_parse_holds(raw, expected):
    assert parse_holds(raw) == frozenset(expected)


def test_royal_flush_scenario(deck_of):
    # five junk cards are dealt, the royal flush comes in on the draw
    session = make_session(deck_of, *NO_WIN, *ROYAL)
    assert session.phase == BET_SELECTION

    assert session.select_bet("10") == 10
    assert session.phase == AWAITING_DEAL

    hand = session.deal()
    assert hand == cards(*NO_WIN)
    assert session.state.credits == 90
    assert session.phase == HOLD_SELECTION

    session.hold(parse_holds(""))
    assert session.phase == EVALUATING

    result = session.draw_and_evaluate()
    assert session.hand == cards(*ROYAL)
    assert result.classification == "Royal Flush"
    assert result.multiplier == 250
    assert session.state.pending_win == 2500
    assert session.phase == GAMBLE_DECISION
    assert session.deck is None

    session.decline_gamble()
    assert session.settle() == 2500
    assert session.state.credits == 2590
    assert session.state.hands_played == 1
    assert session.phase == AWAITING_DEAL


def test_two_pair_scenario(deck_of):
    session = make_session(deck_of, *TWO_PAIR)
    session.select_bet("5")
    session.deal()
    session.hold(range(5))

    result = session.draw_and_evaluate()
    assert result.classification == "Two Pair"
    assert result.multiplier == 2
    assert result.winning_indices == frozenset({0, 1, 2, 3})
    assert session.state.pending_win == 10


def test_held_cards_stay_and_replacements_follow_the_deck(deck_of):
    session = make_session(deck_of, "AS", "3C", "AD", "7H", "8D", "KS", "KD", "2S")
    session.select_bet("5")
    session.deal()
    session.hold({0, 2})
    session.draw_and_evaluate()
    assert session.hand == cards("AS", "KS", "AD", "KD", "2S")
    assert session.result.classification == "Two Pair"


def test_gamble_loss_leaves_credits_unchanged(deck_of):
    # two pair at bet 10 pays 20; two right guesses then a wrong one
    rng = ScriptedRandom(flips=[True, True, False])
    session = make_session(deck_of, *TWO_PAIR, config=DELUXE, rng=rng)
    session.select_bet("10")
    session.deal()
    session.hold(range(5))
    session.draw_and_evaluate()
    assert session.state.pending_win == 20
    credits_before = session.state.credits

    engine = session.start_gamble()
    assert session.phase == GAMBLING
    engine.guess(RED)
    engine.guess(RED)
    engine.guess(RED)
    assert engine.current_win == 0

    assert session.finish_gamble() == 0
    assert session.phase == SETTLEMENT
    assert session.settle() == 0
    assert session.state.credits == credits_before == 90


def test_gamble_win_is_what_gets_settled(deck_of):
    rng = ScriptedRandom(flips=[True])
    session = make_session(deck_of, *TWO_PAIR, rng=rng)
    session.select_bet("10")
    session.deal()
    session.hold(range(5))
    session.draw_and_evaluate()

    engine = session.start_gamble()
    engine.guess(RED)
    # classic tables allow a single double
    assert engine.finished
    session.finish_gamble()
    assert session.settle() == 40
    assert session.state.credits == 130


def test_no_win_skips_the_gamble_decision(deck_of):
    session = make_session(deck_of, *NO_WIN)
    session.select_bet("5")
    session.deal()
    session.hold(range(5))
    result = session.draw_and_evaluate()
    assert not result.is_win
    assert session.phase == SETTLEMENT
    with pytest.raises(RuntimeError):
        session.start_gamble()


def test_steps_out_of_order_are_rejected(deck_of):
    session = make_session(deck_of, *NO_WIN)
    with pytest.raises(RuntimeError):
        session.deal()
    session.select_bet("5")
    with pytest.raises(RuntimeError):
        session.draw_and_evaluate()
    session.deal()
    with pytest.raises(RuntimeError):
        session.settle()
    session.hold(())
    session.draw_and_evaluate()
    with pytest.raises(RuntimeError):
        session.draw_and_evaluate()


def test_finish_gamble_requires_a_finished_engine(deck_of):
    session = make_session(deck_of, *TWO_PAIR, config=DELUXE, rng=ScriptedRandom(flips=[True]))
    session.select_bet("5")
    session.deal()
    session.hold(range(5))
    session.draw_and_evaluate()
    session.start_gamble().guess(RED)
    with pytest.raises(RuntimeError):
        session.finish_gamble()


def test_bet_change_only_on_tables_that_allow_it(deck_of):
    classic = make_session(deck_of, *NO_WIN)
    classic.select_bet("5")
    with pytest.raises(RuntimeError):
        classic.request_bet_change()

    deluxe = make_session(deck_of, *NO_WIN, config=DELUXE)
    deluxe.select_bet("5")
    deluxe.request_bet_change()
    assert deluxe.phase == BET_SELECTION
    assert deluxe.select_bet("50") == 50


def test_deal_without_enough_credits_is_game_over(deck_of):
    config = GameConfig(name='short', allowed_bets=(5, 10), starting_credits=7)
    session = make_session(deck_of, *NO_WIN, config=config)
    session.select_bet("10")
    assert session.deal() is None
    assert session.phase == GAME_OVER
    assert session.state.credits == 7


def test_settlement_below_the_bet_ends_the_game(deck_of):
    config = GameConfig(name='short', allowed_bets=(5,), starting_credits=5)
    session = make_session(deck_of, *NO_WIN, config=config)
    session.select_bet("")
    session.deal()
    session.hold(range(5))
    session.draw_and_evaluate()
    session.settle()
    assert session.state.credits == 0
    assert session.phase == GAME_OVER


def test_credits_never_go_negative_and_move_once_per_deal_and_settlement():
    rng = RandomSource(7)
    session = SessionStateMachine(FakeChannel(), config=CLASSIC, rng=rng)
    session.select_bet("30")

    hands = 0
    while session.phase != GAME_OVER and hands < 500:
        before = session.state.credits
        if session.deal() is None:
            break
        assert session.state.credits == before - 30
        assert session.state.credits >= 0

        session.hold(parse_holds(str(rng.randbelow(100000))))
        session.draw_and_evaluate()
        pending = session.state.pending_win
        if session.phase == GAMBLE_DECISION:
            session.decline_gamble()
        after_debit = session.state.credits
        assert session.settle() == pending
        assert session.state.credits == after_debit + pending
        assert session.state.credits >= 0
        hands += 1

    assert session.state.hands_played == hands
    assert session.state.credits >= 0
