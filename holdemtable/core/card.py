"""
Cards, decks and the card supply used by the table.

Card notation is rank + suit ("As", "Td", "10h", "A♠"); the suit-first
form used by some table front ends ("♠A", "♥10") is accepted too.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum

from holdemtable.core.errors import DeckExhaustedError
from holdemtable.core.rules import HOLE_CARDS


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {rank: char for rank, char in zip(Rank, "23456789TJQKA")}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


def _parse_suit(text: str) -> Optional[Suit]:
    if text.lower() in CHAR_TO_SUIT:
        return CHAR_TO_SUIT[text.lower()]
    return SYMBOL_TO_SUIT.get(text)


class Card:
    """
    An immutable playing card.

    Cards compare equal by rank and suit and hash consistently, so they can
    be used in sets when checking for duplicates.
    """

    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "rank", Rank(rank))
        object.__setattr__(self, "suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __reduce__(self):
        return (Card, (self.rank, self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "As", "Kh", "Td", "10d", "A♠" and the suit-first "♠A", "♥10".
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        if s[0] in SYMBOL_TO_SUIT:
            suit, rank_part = SYMBOL_TO_SUIT[s[0]], s[1:]
        else:
            suit, rank_part = _parse_suit(s[-1]), s[:-1]
            if suit is None:
                raise ValueError(f"Invalid suit in card: {s!r}")

        rank = CHAR_TO_RANK.get(rank_part.upper())
        if rank is None:
            raise ValueError(f"Invalid rank in card: {s!r}")
        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51), encoded as rank * 4 + suit."""
        if not 0 <= card_int <= 51:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(Rank(card_int // 4), Suit(card_int % 4))

    def to_int(self) -> int:
        return int(self.rank) * 4 + int(self.suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self.to_int() == other.to_int()
        return False

    def __hash__(self) -> int:
        return self.to_int()

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": self.short_str,
        }


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


def fresh_shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Return the 52 cards uniformly permuted, no repeats."""
    cards = full_deck()
    (rng or random).shuffle(cards)
    return cards


class Deck:
    """
    A standard 52-card deck.

    Usage:
        deck = Deck()
        hole_cards = deck.deal(2)
        deck.burn()
        flop = deck.deal(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        self._rng = rng
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = full_deck()
        self._dealt: List[Card] = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        (self._rng or random).shuffle(self._cards)

    def remove(self, cards: Iterable[Card]) -> None:
        """Take specific cards out of the deck (preset cards)."""
        excluded = set(cards)
        self._cards = [c for c in self._cards if c not in excluded]

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckExhaustedError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhaustedError(f"Cannot deal {n} cards, only {len(self._cards)} remain")

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        self._dealt.extend(dealt)
        return dealt

    def burn(self) -> Card:
        """Burn (discard) the top card."""
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


class CardSupply:
    """
    Supplies hole and community cards for one hand.

    The supply owns a freshly shuffled deck. Cards listed in ``exclude``
    (preset cards handed out by other means) are removed before shuffling so
    they can never be dealt twice.
    """

    def __init__(self, rng: Optional[random.Random] = None, exclude: Iterable[Card] = ()):
        self.deck = Deck(shuffle=False, rng=rng)
        self.deck.remove(exclude)
        self.deck.shuffle()

    def deal_hole(self, seat) -> List[Card]:
        """Deal two hole cards to ``seat`` and return them."""
        cards = self.deck.deal(HOLE_CARDS)
        seat.hole_cards = list(cards)
        return cards

    def deal_community(self, count: int) -> List[Card]:
        """Draw ``count`` community cards."""
        return self.deck.deal(count)

    def burn(self) -> Card:
        return self.deck.burn()

    @property
    def remaining(self) -> int:
        return self.deck.remaining


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts "As Kh Td" (space-separated) or "AsKhTd" (2 chars each).
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    if len(cards_str) % 2:
        raise ValueError(f"Cannot parse cards: {cards_str!r}")
    return [Card.from_string(cards_str[i:i + 2]) for i in range(0, len(cards_str), 2)]
