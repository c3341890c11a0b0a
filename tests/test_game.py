import pytest

from phrasey.classes import Phrase
from phrasey.exceptions import NoActivePhrase, RoundComplete
from phrasey.game import Game

from .conftest import FakeStore


@pytest.fixture
def game(config, store) -> Game:
    return Game(config, store)


def test_start_round_samples_configured_number_of_phrases(game, store):
    game.start_round()

    assert store.requests == [3]
    assert [entry.phrase.original for entry in game.unrecognized] == ["cat", "dog", "sun"]
    assert all(entry.attempts == 0 for entry in game.unrecognized)
    assert game.recognized == ()
    assert game.current_index == 0
    assert game.current_original() == "cat"
    assert game.current_translation() == "chat"


def test_start_round_with_empty_store_leaves_no_active_phrase(config):
    game = Game(config, FakeStore([]))
    game.start_round()

    assert game.current_index is None
    assert not game.in_progress
    with pytest.raises(NoActivePhrase):
        game.current_original()
    with pytest.raises(NoActivePhrase):
        game.current_translation()
    with pytest.raises(NoActivePhrase):
        game.check("anything")
    with pytest.raises(NoActivePhrase):
        game.advance(True)


def test_start_round_again_discards_previous_progress(game):
    game.start_round()
    game.advance(False)
    game.advance(True)

    game.start_round()

    assert len(game.unrecognized) == 3
    assert game.recognized == ()
    assert game.current_index == 0
    assert all(entry.attempts == 0 for entry in game.unrecognized)


def test_check_is_case_and_whitespace_insensitive(game):
    game.start_round()

    assert game.check("chat")
    assert game.check("  CHAT ")
    assert not game.check("chien")
    assert not game.check("")


def test_check_does_not_change_state(game):
    game.start_round()
    before = (game.unrecognized, game.recognized, game.current_index)

    results = {game.check("wrong") for _ in range(5)}

    assert results == {False}
    assert (game.unrecognized, game.recognized, game.current_index) == before


def test_round_robin_order(config):
    game = Game(config, FakeStore([Phrase(original="P1", translation="t1"), Phrase(original="P2", translation="t2")]))
    game.start_round()

    assert game.current_original() == "P1"
    game.advance(True)
    assert game.current_original() == "P2"
    game.advance(False)
    assert game.current_original() == "P2"
    with pytest.raises(RoundComplete):
        game.advance(True)


def test_wrong_answer_moves_to_next_phrase_and_counts_attempt(game):
    game.start_round()

    game.advance(False)

    assert game.current_original() == "dog"
    assert game.unrecognized[0].attempts == 1
    assert game.unrecognized[1].attempts == 0


def test_wrong_answer_on_last_phrase_wraps_to_first(game):
    game.start_round()
    game.advance(False)
    game.advance(False)

    game.advance(False)

    assert game.current_index == 0
    assert game.current_original() == "cat"


def test_correct_answer_keeps_pointer_in_range(game):
    game.start_round()
    game.advance(False)
    game.advance(False)
    assert game.current_original() == "sun"

    game.advance(True)

    assert game.current_index == 0
    assert game.current_original() == "cat"


def test_attempts_are_kept_when_phrase_is_recognized(config):
    game = Game(config, FakeStore([Phrase(original="cat", translation="chat")]))
    game.start_round()

    game.advance(False)
    game.advance(False)
    with pytest.raises(RoundComplete):
        game.advance(True)

    assert game.recognized[0].phrase.original == "cat"
    assert game.recognized[0].attempts == 2


def test_round_complete_unsets_current_phrase(config):
    game = Game(config, FakeStore([Phrase(original="cat", translation="chat")]))
    game.start_round()

    with pytest.raises(RoundComplete):
        game.advance(True)

    assert game.current_index is None
    with pytest.raises(NoActivePhrase):
        game.current_original()


def test_pool_size_is_invariant_during_round(game):
    game.start_round()
    answers = [False, True, False, False, True, False, True]

    for is_correct in answers:
        assert len(game.unrecognized) + len(game.recognized) == 3
        try:
            game.advance(is_correct)
        except RoundComplete:
            break

    assert len(game.unrecognized) + len(game.recognized) == 3
    assert game.progress() == (3, 3)


def test_all_correct_answers_complete_round(game):
    game.start_round()

    for answer in ["chat", "chien"]:
        assert game.check(answer)
        game.advance(True)
    assert game.check("SOLEIL ")
    with pytest.raises(RoundComplete):
        game.advance(True)

    assert [entry.phrase.translation for entry in game.recognized] == ["chat", "chien", "soleil"]


def test_end_round_clears_everything(game):
    game.start_round()
    game.advance(True)

    game.end_round()

    assert game.unrecognized == ()
    assert game.recognized == ()
    assert game.current_index is None
    assert game.progress() == (0, 0)
