import asyncio
from collections import deque
from typing import Callable, Iterable, List, Optional

import pytest

from videopoker.channel import ChannelClosed, LineChannel
from videopoker.deck import Card, Deck, make_cards
from videopoker.random_source import RandomSource


SUIT_LETTERS = {'H': 'Hearts', 'D': 'Diamonds', 'C': 'Clubs', 'S': 'Spades'}


def card(spec: str) -> Card:
    """'10H' -> Card('Hearts', '10'), 'AS' -> Card('Spades', 'A')."""
    return Card(SUIT_LETTERS[spec[-1]], spec[:-1])


def cards(*specs: str) -> List[Card]:
    return [card(spec) for spec in specs]


class ScriptedRandom(RandomSource):
    """RandomSource that replays fixed values.

    With no scripted shuffle values left, randbelow(n) returns n - 1, which
    makes the Fisher-Yates shuffle leave the deck in its given order.
    """

    def __init__(self, shuffle_values: Iterable[int] = (), flips: Iterable[bool] = ()):
        super().__init__(0)
        self._shuffle_values = deque(shuffle_values)
        self._flips = deque(flips)
        self.randbelow_calls: List[int] = []

    def randbelow(self, n: int) -> int:
        self.randbelow_calls.append(n)
        if self._shuffle_values:
            return self._shuffle_values.popleft()
        return n - 1

    def coin_flip(self) -> bool:
        if not self._flips:
            raise RuntimeError("No more scripted coin flips available")
        return self._flips.popleft()


class FakeChannel(LineChannel):
    """LineChannel fed from a list of player inputs."""

    def __init__(self, inputs: Iterable[str] = (), username: Optional[str] = "tester",
                 idle_timeout: Optional[float] = None, block_when_empty: bool = False):
        super().__init__(idle_timeout=idle_timeout)
        self.username = username
        self._inputs = deque(inputs)
        self._block_when_empty = block_when_empty
        self.output: List[str] = []
        self.prompts: List[str] = []
        self.closed = False

    async def write(self, text: str) -> None:
        if self.closed:
            raise ChannelClosed("channel already closed")
        self.output.append(text)

    async def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        return await super().read_line(prompt)

    async def _read_line(self) -> str:
        if not self._inputs:
            if self._block_when_empty:
                await asyncio.Event().wait()
            raise ChannelClosed("no more scripted input")
        return self._inputs.popleft()

    async def close(self) -> None:
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.output)


def stacked_deck(*specs: str) -> Deck:
    """Deck whose top cards are `specs`, followed by the rest in canonical order."""
    top = cards(*specs)
    rest = [c for c in make_cards() if c not in top]
    return Deck(top + rest)


@pytest.fixture
def make_channel() -> Callable[..., FakeChannel]:
    def _factory(inputs: Iterable[str] = (), **kwargs) -> FakeChannel:
        return FakeChannel(inputs, **kwargs)

    return _factory


@pytest.fixture
def scripted_random() -> Callable[..., ScriptedRandom]:
    def _factory(shuffle_values: Iterable[int] = (), flips: Iterable[bool] = ()) -> ScriptedRandom:
        return ScriptedRandom(shuffle_values, flips)

    return _factory


@pytest.fixture
def deck_of() -> Callable[..., Callable[[], Deck]]:
    """Factory for deck factories that always stack the same cards on top."""

    def _factory(*specs: str) -> Callable[[], Deck]:
        return lambda: stacked_deck(*specs)

    return _factory
