"""
Tape: byte wraparound and hard edges.
"""

import pytest

from bfengine import BFTapeBoundsError, Tape


def test_starts_zeroed_at_cell_zero():
    tape = Tape(8)
    assert len(tape) == 8
    assert tape.pointer == 0
    assert tape.snapshot() == bytes(8)


@pytest.mark.parametrize("length", [0, -3])
def test_length_must_be_positive(length):
    with pytest.raises(ValueError):
        Tape(length)


def test_increment_wraps_255_to_0():
    tape = Tape(1)
    tape.store(255)
    tape.increment()
    assert tape.value == 0


def test_decrement_wraps_0_to_255():
    tape = Tape(1)
    tape.decrement()
    assert tape.value == 255


def test_store_masks_to_a_byte():
    tape = Tape(1)
    tape.store(300)
    assert tape.value == 44


def test_moves_within_bounds():
    tape = Tape(3)
    tape.move_right()
    tape.move_right()
    tape.increment()
    tape.move_left()
    assert tape.pointer == 1
    assert tape.snapshot() == b"\x00\x00\x01"
    assert tape.snapshot(1, 2) == b"\x00\x01"


def test_length_one_rejects_both_moves():
    tape = Tape(1)
    with pytest.raises(BFTapeBoundsError) as right:
        tape.move_right(ip=5)
    with pytest.raises(BFTapeBoundsError) as left:
        tape.move_left(ip=6)
    assert right.value.direction == 'right'
    assert right.value.ip == 5
    assert left.value.direction == 'left'
    assert left.value.ip == 6
    assert tape.pointer == 0


def test_right_edge_does_not_wrap():
    tape = Tape(2)
    tape.move_right()
    with pytest.raises(BFTapeBoundsError) as info:
        tape.move_right()
    assert info.value.pointer == 1
    assert info.value.tape_length == 2
    assert tape.pointer == 1
