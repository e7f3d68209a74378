from shared.navigator import locate_step


def test_middle_step_of_sparse_group():
    position = locate_step([1, 3, 5], 3)
    assert position.previous == 1
    assert position.next == 5
    assert not position.is_first
    assert not position.is_last
    assert position.total_count == 3
    assert position.ordinal == 2


def test_first_and_last_have_one_neighbour():
    first = locate_step([5, 1, 3], 1)
    assert first.is_first and first.previous is None and first.next == 3

    last = locate_step([5, 1, 3], 5)
    assert last.is_last and last.next is None and last.previous == 3


def test_single_step_is_both_first_and_last():
    position = locate_step([7], 7)
    assert position.is_first and position.is_last
    assert position.previous is None and position.next is None
    assert position.total_count == 1


def test_missing_step_is_not_found():
    assert locate_step([1, 5], 3) is None
    assert locate_step([], 1) is None


def test_duplicates_do_not_change_adjacency():
    position = locate_step([1, 3, 3, 5, 1], 3)
    assert (position.previous, position.next, position.total_count) == (1, 5, 3)


def test_neighbours_are_members_of_the_group():
    steps = [2, 4, 10, 11, 40]
    for step in steps:
        position = locate_step(steps, step)
        for neighbour in (position.previous, position.next):
            assert neighbour is None or neighbour in steps
