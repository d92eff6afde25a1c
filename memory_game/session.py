"""
Game Session - the card matching state machine.

States per pair-resolution cycle:

    Idle (no pending) -> tap -> OneFlipped (pending=i) -> tap another
        -> Matched                        -> Idle
        -> MismatchPendingFlipback        -> (after delay) Idle

AllMatched is terminal and only reachable from a match. Every mutating
operation ends with check_completion().
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .cards import PALETTE, Card, deal, validate_pair_count
from .scheduler import DeferredTasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardView:
    '''What the presentation may see of a card.'''
    card_id: int
    content: Optional[str]  # None while face-down
    is_face_up: bool
    is_matched: bool
    is_pending: bool


class GameSession:
    """
    One memory game: the deck plus selection and match state.

    Args:
        pair_count: Number of distinct symbols in play
        rng: Random source for dealing (seed it in tests)
        clock: Monotonic time source used for flip-backs
        flip_back_delay: Seconds before a mismatched pair turns face-down
        palette: Symbols to draw from
    """

    def __init__(
        self,
        pair_count: int = 3,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        flip_back_delay: float = 1.0,
        palette=PALETTE,
    ):
        self._rng = rng or random.Random()
        self._clock = clock
        self._palette = list(palette)
        self.flip_back_delay = flip_back_delay
        self._tasks = DeferredTasks()
        self._reset_observers: List[Callable[["GameSession"], None]] = []
        self.generation = 0
        self.cards: List[Card] = []
        self.pair_count = 0
        self.pending_index: Optional[int] = None
        self.moves = 0
        self.pairs_found = 0
        self._complete = False
        self.new_game(pair_count)

    # --------------- Lifecycle ---------------

    def new_game(self, pair_count: int) -> None:
        '''Replace the whole deck. Flip-backs from earlier games become inert.'''
        validate_pair_count(pair_count, self._palette)
        self.generation += 1
        self.pair_count = pair_count
        self.cards = deal(pair_count, self._rng, self._palette)
        self.pending_index = None
        self.moves = 0
        self.pairs_found = 0
        self._complete = False
        self._tasks.discard_before(self.generation)
        logger.info("New game: %d pairs (generation %d)", pair_count, self.generation)
        self.check_completion()

    def reset(self) -> None:
        self.new_game(self.pair_count)
        for callback in list(self._reset_observers):
            callback(self)

    def subscribe_reset(self, callback: Callable[["GameSession"], None]) -> None:
        self._reset_observers.append(callback)

    # --------------- Play ---------------

    def select_card(self, index: int) -> bool:
        """
        Flip the card at `index` and resolve the pair if one is pending.

        Invalid taps (game over, out of range, matched card, the pending
        card again) change nothing and return False.
        """
        if self._complete:
            logger.debug("Ignoring tap on %s: game is complete", index)
            return False
        if not 0 <= index < len(self.cards):
            logger.debug("Ignoring tap on %s: out of range", index)
            return False
        card = self.cards[index]
        if card.is_matched or index == self.pending_index:
            logger.debug("Ignoring tap on %d: matched or already pending", index)
            return False

        card.turn_up()

        if self.pending_index is None:
            self.pending_index = index
        else:
            first = self.cards[self.pending_index]
            self.pending_index = None
            self.moves += 1
            if first.content == card.content:
                first.is_matched = True
                card.is_matched = True
                self.pairs_found += 1
                logger.debug("Match: %s (cards %d, %d)", card.content, first.card_id, card.card_id)
            else:
                self._schedule_flip_back(first, card)

        self.check_completion()
        return True

    def _schedule_flip_back(self, *cards: Card) -> None:
        captured = [(c.card_id, c.flip_count) for c in cards]
        generation = self.generation
        due_at = self._clock() + self.flip_back_delay
        self._tasks.schedule(due_at, generation, lambda: self._flip_back(captured, generation))
        logger.debug("Mismatch: cards %s turn back at %.3f", [cid for cid, _ in captured], due_at)

    def _flip_back(self, captured: List[Tuple[int, int]], generation: int) -> None:
        if generation != self.generation:
            return
        by_id = {c.card_id: c for c in self.cards}
        for card_id, flip_count in captured:
            card = by_id.get(card_id)
            if card is None or card.is_matched or not card.is_face_up:
                continue
            if card.flip_count != flip_count:
                # selected again since the mismatch
                continue
            card.is_face_up = False
        self.check_completion()

    def tick(self, now: Optional[float] = None) -> int:
        '''Run flip-backs that are due. Returns how many ran.'''
        if now is None:
            now = self._clock()
        return self._tasks.run_due(now, self.generation)

    # --------------- Derived state ---------------

    def check_completion(self) -> bool:
        complete = bool(self.cards) and all(c.is_matched for c in self.cards)
        if complete and not self._complete:
            logger.info("All %d pairs matched in %d moves", self.pair_count, self.moves)
            self._complete = True
        return self._complete

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def cards_total(self) -> int:
        return len(self.cards)

    @property
    def has_pending_flip_backs(self) -> bool:
        return len(self._tasks) > 0

    def next_flip_back_at(self) -> Optional[float]:
        return self._tasks.next_due()

    def snapshot(self) -> List[CardView]:
        return [
            CardView(
                card_id=c.card_id,
                content=c.content if (c.is_face_up or c.is_matched) else None,
                is_face_up=c.is_face_up,
                is_matched=c.is_matched,
                is_pending=(i == self.pending_index),
            )
            for i, c in enumerate(self.cards)
        ]
