"""Game state machine tests.

Timers run on a ``ManualScheduler`` so no test waits on the wall clock.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import Phase
from backend.engine.scheduler import ManualScheduler
from backend.models.errors import InvalidConfiguration
from backend.models.piece import PlacedBy, PuzzleImage


# -- helpers ------------------------------------------------------------------


def _playing(difficulty: str = "easy", **options) -> GamePlay:
    game = GamePlay(difficulty, rng=random.Random(0), **options)
    game.skip_preview()
    return game


def _place_correctly(game: GamePlay, piece_id: int) -> None:
    assert game.select_slot(piece_id)
    assert game.choose_choice(piece_id)


def _wrong_id(game: GamePlay) -> int:
    slot = game.state.selected_slot_id
    return next(p.id for p in game.state.current_choices if p.id != slot)


# -- phases -------------------------------------------------------------------


def test_fresh_session_previews() -> None:
    snap = GamePlay("easy").snapshot()
    assert snap.phase == Phase.PREVIEW
    assert snap.preview_countdown == 10
    assert snap.total_pieces == 9
    assert snap.elapsed_seconds == 0
    assert snap.move_count == 0
    assert snap.remaining_hints == 0
    assert snap.selected_slot_id is None
    assert snap.current_choices == ()
    assert snap.wrong_slot_ids == frozenset()


def test_preview_ends_after_countdown_ticks() -> None:
    game = GamePlay("easy")
    for _ in range(9):
        game.tick()
    assert game.state.phase == Phase.PREVIEW
    assert game.state.preview_countdown == 1
    game.tick()
    assert game.state.phase == Phase.PLAYING
    assert game.state.preview_countdown == 0
    assert game.state.elapsed_seconds == 0


def test_skip_preview() -> None:
    game = GamePlay("medium")
    assert game.skip_preview()
    assert game.state.phase == Phase.PLAYING
    assert game.state.preview_countdown == 0
    assert not game.skip_preview()


def test_zero_preview_starts_playing() -> None:
    game = GamePlay("easy", preview_time=0)
    assert game.state.phase == Phase.PLAYING


def test_no_interaction_during_preview() -> None:
    game = GamePlay("medium")
    assert not game.select_slot(0)
    assert not game.choose_choice(0)
    assert not game.use_hint()
    assert game.state.move_count == 0


def test_tick_counts_play_time() -> None:
    game = _playing()
    game.tick()
    game.tick()
    assert game.state.elapsed_seconds == 2


def test_complete_after_placing_everything() -> None:
    game = _playing("easy")
    for piece_id in range(9):
        _place_correctly(game, piece_id)
    snap = game.snapshot()
    assert snap.phase == Phase.COMPLETE
    assert game.is_won
    assert snap.move_count == 9
    assert snap.progress == 100
    assert all(p.placed_by == PlacedBy.CORRECT for p in snap.pieces)

    elapsed = snap.elapsed_seconds
    assert not game.tick()
    assert game.state.elapsed_seconds == elapsed
    assert not game.select_slot(0)


# -- selecting and choosing ---------------------------------------------------


def test_select_slot_deals_choices() -> None:
    game = _playing("hard")
    assert game.select_slot(7)
    snap = game.snapshot()
    assert snap.selected_slot_id == 7
    assert len(snap.current_choices) == 4
    assert [p.id for p in snap.current_choices].count(7) == 1


def test_select_ignores_placed_and_unknown() -> None:
    game = _playing()
    _place_correctly(game, 3)
    assert not game.select_slot(3)
    assert not game.select_slot(99)
    assert game.state.selected_slot_id is None


def test_choose_without_selection_is_ignored() -> None:
    game = _playing()
    assert not game.choose_choice(0)
    assert game.state.move_count == 0


def test_correct_choice_places_piece() -> None:
    game = _playing()
    _place_correctly(game, 4)
    piece = game.state.pieces[4]
    assert piece.is_placed
    assert piece.placed_by == PlacedBy.CORRECT
    assert game.state.move_count == 1
    assert game.state.selected_slot_id is None
    assert game.state.current_choices == []


def test_wrong_choice_marks_slot() -> None:
    game = _playing("medium")
    game.select_slot(5)
    assert game.choose_choice(_wrong_id(game))

    snap = game.snapshot()
    assert not snap.pieces[5].is_placed
    assert snap.move_count == 1
    assert snap.wrong_slot_ids == {5}
    assert snap.selected_slot_id is None
    assert snap.current_choices == ()


def test_correct_choice_clears_wrong_marker() -> None:
    game = _playing("medium")
    game.select_slot(5)
    game.choose_choice(_wrong_id(game))
    _place_correctly(game, 5)
    assert game.state.wrong_slot_ids == set()
    assert game.state.move_count == 2


def test_clear_wrong_marker() -> None:
    game = _playing("medium")
    game.select_slot(2)
    game.choose_choice(_wrong_id(game))
    assert game.clear_wrong_marker(2)
    assert not game.clear_wrong_marker(2)
    assert game.state.wrong_slot_ids == set()


def test_last_slot_offers_single_choice() -> None:
    game = _playing("easy")
    for piece_id in range(8):
        _place_correctly(game, piece_id)
    game.select_slot(8)
    assert [p.id for p in game.state.current_choices] == [8]


# -- hints --------------------------------------------------------------------


def test_hint_places_piece_without_move() -> None:
    game = _playing("medium")
    game.select_slot(6)
    assert game.use_hint()
    piece = game.state.pieces[6]
    assert piece.placed_by == PlacedBy.HINT
    assert game.state.remaining_hints == 1
    assert game.state.move_count == 0
    assert game.state.selected_slot_id is None


def test_hint_budget_never_negative() -> None:
    game = _playing("hard")
    budget = game.state.remaining_hints
    assert budget == 3
    results = []
    for slot in range(budget + 1):
        game.select_slot(slot)
        results.append(game.use_hint())
    assert results == [True] * budget + [False]
    assert game.state.remaining_hints == 0
    assert not game.state.pieces[budget].is_placed


def test_hint_needs_selection() -> None:
    game = _playing("medium")
    assert not game.use_hint()
    assert game.state.remaining_hints == 2


def test_easy_has_no_hints() -> None:
    game = _playing("easy")
    game.select_slot(0)
    assert not game.use_hint()
    assert game.state.selected_slot_id == 0


def test_hints_can_finish_puzzle() -> None:
    game = _playing("medium")
    for piece_id in range(14):
        _place_correctly(game, piece_id)
    for piece_id in (14, 15):
        game.select_slot(piece_id)
        assert game.use_hint()
    assert game.state.phase == Phase.COMPLETE


# -- restart and configuration ------------------------------------------------


def test_restart_resets_everything() -> None:
    game = _playing("medium")
    game.tick()
    _place_correctly(game, 0)
    game.select_slot(1)
    game.choose_choice(_wrong_id(game))
    game.select_slot(2)
    game.use_hint()

    game.restart()
    snap = game.snapshot()
    assert snap.phase == Phase.PREVIEW
    assert snap.preview_countdown == 10
    assert snap.elapsed_seconds == 0
    assert snap.move_count == 0
    assert snap.remaining_hints == 2
    assert snap.placed_count == 0
    assert snap.wrong_slot_ids == frozenset()
    assert snap.difficulty_key == "medium"


def test_start_session_changes_difficulty() -> None:
    game = _playing("easy")
    game.start_session("hard")
    assert game.snapshot().grid_size == 5
    assert game.snapshot().total_pieces == 25


def test_unknown_difficulty_keeps_current_session() -> None:
    game = _playing("easy")
    _place_correctly(game, 0)
    with pytest.raises(InvalidConfiguration):
        game.start_session("impossible")
    assert game.state.difficulty_key == "easy"
    assert game.state.pieces[0].is_placed


def test_bad_board_size_raises() -> None:
    with pytest.raises(InvalidConfiguration):
        GamePlay("easy", 0, 100)


def test_snapshot_is_detached() -> None:
    game = _playing()
    snap = game.snapshot()
    _place_correctly(game, 0)
    assert not snap.pieces[0].is_placed
    assert snap.move_count == 0


def test_for_image_fits_board() -> None:
    image = PuzzleImage(ref="photo://1", width=1600, height=900)
    game = GamePlay.for_image(image, "easy", 320, 400)
    snap = game.snapshot()
    assert (snap.width, snap.height) == pytest.approx((320, 180))
    assert snap.image is image
    assert snap.pieces[4].x == pytest.approx(320 / 3)


# -- scheduled timers ---------------------------------------------------------


def test_scheduler_drives_preview_and_clock() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("easy", scheduler=scheduler, preview_time=3)
    scheduler.advance(2000)
    assert game.state.preview_countdown == 1
    scheduler.advance(1000)
    assert game.state.phase == Phase.PLAYING
    scheduler.advance(5000)
    assert game.state.elapsed_seconds == 5
    assert scheduler.pending == 1


def test_skip_preview_replaces_ticker() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("easy", scheduler=scheduler)
    scheduler.advance(1500)
    game.skip_preview()
    assert scheduler.pending == 1
    scheduler.advance(900)
    assert game.state.elapsed_seconds == 0
    scheduler.advance(100)
    assert game.state.elapsed_seconds == 1


def test_restart_invalidates_old_timers() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("easy", scheduler=scheduler, preview_time=2)
    game.skip_preview()
    scheduler.advance(3000)
    game.restart()
    assert scheduler.pending == 1
    scheduler.advance(1000)
    assert game.state.phase == Phase.PREVIEW
    assert game.state.preview_countdown == 1
    assert game.state.elapsed_seconds == 0


def test_wrong_marker_clears_itself() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("medium", scheduler=scheduler, rng=random.Random(3), preview_time=0)
    game.select_slot(9)
    game.choose_choice(_wrong_id(game))
    scheduler.advance(1400)
    assert game.state.wrong_slot_ids == {9}
    scheduler.advance(100)
    assert game.state.wrong_slot_ids == set()


def test_wrong_marker_timer_dropped_on_restart() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("medium", scheduler=scheduler, rng=random.Random(3), preview_time=0)
    game.select_slot(9)
    game.choose_choice(_wrong_id(game))
    game.restart()
    scheduler.advance(1000)
    game.select_slot(9)
    game.choose_choice(_wrong_id(game))
    # the old session's clear falls due at 1500 and is dropped; the new
    # marker stays until 2500
    scheduler.advance(1000)
    assert game.state.wrong_slot_ids == {9}


def test_completion_delay() -> None:
    scheduler = ManualScheduler()
    game = GamePlay("easy", scheduler=scheduler, preview_time=0, complete_delay_ms=500)
    for piece_id in range(9):
        _place_correctly(game, piece_id)
    assert game.state.phase == Phase.PLAYING
    scheduler.advance(500)
    assert game.state.phase == Phase.COMPLETE
    assert scheduler.pending == 0
