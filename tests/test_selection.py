from app.models import Episode
from app.selection import SelectionState


EPISODES = [
    Episode(id=9, show_id=5, season=1, number=3, name="Pilot"),
    Episode(id=10, show_id=5, season=1, number=4, name="Second"),
]


def test_select_show_resets_episode_filter() -> None:
    selection = SelectionState()
    selection.select_show(5)
    selection.select_episode("9")

    selection.select_show(6)

    assert selection.current_show_id == 6
    assert selection.episode_filter == "all"


def test_selecting_episode_then_all() -> None:
    selection = SelectionState(current_show_id=5)

    selection.select_episode("9")
    assert selection.visible_episodes(EPISODES) == [EPISODES[0]]

    selection.select_episode("all")
    assert selection.visible_episodes(EPISODES) == EPISODES


def test_numeric_episode_ids_are_accepted() -> None:
    selection = SelectionState(current_show_id=5)
    selection.select_episode(10)

    assert selection.visible_episodes(EPISODES) == [EPISODES[1]]


def test_unknown_episode_selects_nothing() -> None:
    selection = SelectionState(current_show_id=5)
    selection.select_episode("404")

    assert selection.visible_episodes(EPISODES) == []


def test_clear_forgets_current_show() -> None:
    selection = SelectionState()
    selection.select_show(5)
    selection.select_episode("9")

    selection.clear()

    assert selection.current_show_id is None
    assert selection.shows_all_episodes
