"""Core gameplay logic — runs one session from preview to completion."""

from __future__ import annotations

import logging
from typing import Callable

from backend.engine.gamechoices import ChoiceBuilder, RandomSource
from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gamestate import GameSession, Phase, SessionSnapshot
from backend.engine.scheduler import CancelToken, Scheduler
from backend.models.difficulty import get_difficulty
from backend.models.piece import PlacedBy, PuzzleImage

logger = logging.getLogger(__name__)

PREVIEW_TIME = 10  # seconds the full photo is shown before play
TICK_MS = 1000
WRONG_MARKER_MS = 1500
COMPLETE_DELAY_MS = 0
DEFAULT_BOARD_SIZE = (300.0, 400.0)


class GamePlay:
    """Orchestrates a single play session.

    Every mutator returns True when it changed the session and False when
    the call was ignored (wrong phase, nothing selected, no hints left…).
    Only starting a session can raise, and it does so before touching the
    current session.

    Time moves through :meth:`tick`. With a *scheduler* the session ticks
    itself once per second; without one the caller ticks it.
    """

    def __init__(
        self,
        difficulty: str = "easy",
        width: float = DEFAULT_BOARD_SIZE[0],
        height: float = DEFAULT_BOARD_SIZE[1],
        *,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
        preview_time: int = PREVIEW_TIME,
        wrong_marker_ms: int = WRONG_MARKER_MS,
        complete_delay_ms: int = COMPLETE_DELAY_MS,
        image: PuzzleImage | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.image = image
        self.scheduler = scheduler
        self.rng = rng
        self.preview_time = preview_time
        self.wrong_marker_ms = wrong_marker_ms
        self.complete_delay_ms = complete_delay_ms
        self._generation = 0
        self._ticker: CancelToken | None = None
        self.state: GameSession = self._new_session(difficulty)
        self._start_ticker()

    @classmethod
    def for_image(
        cls,
        image: PuzzleImage,
        difficulty: str,
        max_width: float,
        max_height: float,
        **options,
    ) -> GamePlay:
        """Create a session whose board keeps the photo's aspect ratio."""
        width, height = PuzzleGenerator.fit_area(
            image.width, image.height, max_width, max_height
        )
        return cls(difficulty, width, height, image=image, **options)

    # -- lifecycle ------------------------------------------------------------

    def start_session(self, difficulty: str) -> None:
        """Replace the current session with a fresh one at *difficulty*."""
        session = self._new_session(difficulty)
        self._cancel_ticker()
        self.state = session
        self._start_ticker()

    def restart(self) -> None:
        """Start over with the same difficulty and board size."""
        logger.info("Restarting session")
        self.start_session(self.state.difficulty_key)

    def skip_preview(self) -> bool:
        if self.state.phase != Phase.PREVIEW:
            return False
        logger.debug("Preview skipped with %d s left", self.state.preview_countdown)
        self._begin_play()
        self._start_ticker()
        return True

    def tick(self) -> bool:
        """Advance the session clock by one second."""
        state = self.state
        if state.phase == Phase.PREVIEW:
            state.preview_countdown -= 1
            if state.preview_countdown <= 0:
                self._begin_play()
            return True
        if state.phase == Phase.PLAYING:
            state.elapsed_seconds += 1
            return True
        return False

    # -- player actions -------------------------------------------------------

    def select_slot(self, piece_id: int) -> bool:
        """Select an empty slot and deal the choices for it."""
        state = self.state
        if state.phase != Phase.PLAYING:
            return False
        piece = state.piece(piece_id)
        if piece is None or piece.is_placed:
            return False

        state.selected_slot_id = piece.id
        state.current_choices = ChoiceBuilder.build_choices(
            piece,
            state.unplaced(),
            state.difficulty.wrong_choice_count,
            self.rng,
        )
        logger.debug(
            "Slot %d (%d, %d) selected, %d choices",
            piece.id,
            piece.row,
            piece.col,
            len(state.current_choices),
        )
        return True

    def choose_choice(self, chosen_id: int) -> bool:
        """Answer the selected slot with the piece *chosen_id*."""
        state = self.state
        slot_id = state.selected_slot_id
        if slot_id is None:
            return False

        state.increment_moves()
        if chosen_id == slot_id:
            logger.debug("Slot %d: correct", slot_id)
            state.piece(slot_id).place(PlacedBy.CORRECT)
            state.wrong_slot_ids.discard(slot_id)
        else:
            logger.debug("Slot %d: wrong piece %d", slot_id, chosen_id)
            state.wrong_slot_ids.add(slot_id)
            self._schedule_wrong_clear(slot_id)

        state.clear_selection()
        self._check_complete()
        return True

    def use_hint(self) -> bool:
        """Place the selected slot's own piece, spending one hint."""
        state = self.state
        if (
            state.selected_slot_id is None
            or state.remaining_hints <= 0
            or state.phase != Phase.PLAYING
        ):
            return False

        slot_id = state.selected_slot_id
        state.piece(slot_id).place(PlacedBy.HINT)
        state.remaining_hints -= 1
        state.wrong_slot_ids.discard(slot_id)
        state.clear_selection()
        logger.debug("Hint used on slot %d, %d left", slot_id, state.remaining_hints)
        self._check_complete()
        return True

    def clear_wrong_marker(self, slot_id: int) -> bool:
        if slot_id not in self.state.wrong_slot_ids:
            return False
        self.state.wrong_slot_ids.discard(slot_id)
        return True

    # -- queries --------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return self.state.snapshot()

    @property
    def is_won(self) -> bool:
        return self.state.phase == Phase.COMPLETE

    # -- helpers --------------------------------------------------------------

    def _new_session(self, difficulty: str) -> GameSession:
        config = get_difficulty(difficulty)
        pieces = PuzzleGenerator.generate_pieces(config.grid_size, self.width, self.height)
        self._generation += 1
        session = GameSession(
            difficulty_key=difficulty,
            difficulty=config,
            width=self.width,
            height=self.height,
            pieces=pieces,
            preview_countdown=self.preview_time,
            remaining_hints=max(config.hint_budget, 0),
            image=self.image,
        )
        if self.preview_time <= 0:
            session.phase = Phase.PLAYING
            session.preview_countdown = 0
        logger.info(
            "New %s session: %d pieces on a %.0fx%.0f board",
            difficulty,
            len(pieces),
            self.width,
            self.height,
        )
        return session

    def _begin_play(self) -> None:
        self.state.phase = Phase.PLAYING
        self.state.preview_countdown = 0
        logger.info("Preview over, play started")

    def _check_complete(self) -> None:
        if self.state.phase != Phase.PLAYING or not self.state.all_placed:
            return
        if self.complete_delay_ms > 0 and self.scheduler is not None:
            self._schedule(self.complete_delay_ms, self._complete)
        else:
            self._complete()

    def _complete(self) -> None:
        state = self.state
        if state.phase != Phase.PLAYING or not state.all_placed:
            return
        state.phase = Phase.COMPLETE
        self._cancel_ticker()
        logger.info(
            "Puzzle complete in %d s with %d moves", state.elapsed_seconds, state.move_count
        )

    def _schedule_wrong_clear(self, slot_id: int) -> None:
        if self.scheduler is None or self.wrong_marker_ms <= 0:
            return
        self._schedule(self.wrong_marker_ms, lambda: self.clear_wrong_marker(slot_id))

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> CancelToken:
        """Schedule *callback*, dropping it if the session is replaced first."""
        generation = self._generation

        def guarded() -> None:
            if generation == self._generation:
                callback()

        return self.scheduler.schedule(delay_ms, guarded)

    def _start_ticker(self) -> None:
        self._cancel_ticker()
        if self.scheduler is None or self.state.phase == Phase.COMPLETE:
            return

        def on_tick() -> None:
            self._ticker = None
            self.tick()
            if self.state.phase != Phase.COMPLETE:
                self._ticker = self._schedule(TICK_MS, on_tick)

        self._ticker = self._schedule(TICK_MS, on_tick)

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
