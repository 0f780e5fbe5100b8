import pytest

from wgkit.replay import WINDOW_SIZE, ReplayFilter

REJECT_AFTER_MESSAGES = (1 << 64) - (1 << 13) - 1
T_LIM = WINDOW_SIZE + 1


@pytest.fixture
def replay_filter():
    f = ReplayFilter()
    f.reset()
    return f


def check(f, cases):
    for number, (counter, expected) in enumerate(cases, start=1):
        got = f.validate_counter(counter, REJECT_AFTER_MESSAGES)
        assert got == expected, f"case {number}: counter={counter}"


def test_sequence_from_kernel(replay_filter):
    cases = [
        (0, True),
        (1, True),
        (1, False),
        (9, True),
        (8, True),
        (7, True),
        (7, False),
        (T_LIM, True),
        (T_LIM - 1, True),
        (T_LIM - 1, False),
        (T_LIM - 2, True),
        (2, True),
        (2, False),
        (T_LIM + 16, True),
        (3, False),
        (T_LIM + 16, False),
        (T_LIM * 4, True),
        (T_LIM * 4 - (T_LIM - 1), True),
        (10, False),
        (T_LIM * 4 - T_LIM, False),
        (T_LIM * 4 - (T_LIM + 1), False),
        (T_LIM * 4 - (T_LIM - 2), True),
        (T_LIM * 4 + 1 - T_LIM, False),
        (0, False),
        (REJECT_AFTER_MESSAGES, False),
        (REJECT_AFTER_MESSAGES - 1, True),
        (REJECT_AFTER_MESSAGES, False),
        (REJECT_AFTER_MESSAGES - 1, False),
        (REJECT_AFTER_MESSAGES - 2, True),
        (REJECT_AFTER_MESSAGES + 1, False),
        (REJECT_AFTER_MESSAGES + 2, False),
        (REJECT_AFTER_MESSAGES - 2, False),
        (REJECT_AFTER_MESSAGES - 3, True),
        (0, False),
    ]
    check(replay_filter, cases)


def test_bulk_1(replay_filter):
    cases = [(i, True) for i in range(1, WINDOW_SIZE + 1)]
    cases += [(0, True), (0, False)]
    check(replay_filter, cases)


def test_bulk_2(replay_filter):
    cases = [(i, True) for i in range(2, WINDOW_SIZE + 2)]
    cases += [(1, True), (0, False)]
    check(replay_filter, cases)


def test_bulk_3(replay_filter):
    cases = [(i, True) for i in range(WINDOW_SIZE + 1, 0, -1)]
    check(replay_filter, cases)


def test_bulk_4(replay_filter):
    cases = [(i, True) for i in range(WINDOW_SIZE + 2, 1, -1)]
    cases += [(0, False)]
    check(replay_filter, cases)


def test_bulk_5(replay_filter):
    cases = [(i, True) for i in range(WINDOW_SIZE, 0, -1)]
    cases += [(WINDOW_SIZE + 1, True), (0, False)]
    check(replay_filter, cases)


def test_bulk_6(replay_filter):
    cases = [(i, True) for i in range(WINDOW_SIZE, 0, -1)]
    cases += [(0, True), (WINDOW_SIZE + 1, True)]
    check(replay_filter, cases)


def test_limit_is_exclusive():
    f = ReplayFilter()
    assert f.validate_counter(10, 10) is False
    assert f.validate_counter(9, 10) is True


def test_reset_forgets_last_counter():
    f = ReplayFilter()
    assert f.validate_counter(0, 100) is True
    assert f.validate_counter(0, 100) is False
    f.reset()
    assert f.validate_counter(0, 100) is True