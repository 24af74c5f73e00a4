from chiptag.common.sanitize import (
    chain,
    clamp,
    default_below,
    default_when_zero,
    high_byte,
    low_byte,
    low_nibble,
    reset_if,
)


def test_clamp():
    loops = clamp(1, 9)

    assert loops(0) == 1
    assert loops(5) == 5
    assert loops(15) == 9

    assert clamp(high=9)(12) == 9
    assert clamp(high=9)(-3) == -3
    assert clamp(low=32768)(10) == 32768


def test_defaults():
    speed = default_when_zero(6)
    tempo = default_below(33, 125)

    assert speed(0) == 6
    assert speed(3) == 3
    assert tempo(20) == 125
    assert tempo(33) == 33
    assert tempo(40) == 40

    assert reset_if(lambda value: value > 98, 0)(99) == 0


def test_bytes():
    assert low_byte(0x1234) == 0x34
    assert high_byte(0x1234) == 0x12
    assert low_nibble(0xf7) == 0x07


def test_chain():
    track = chain(high_byte, reset_if(lambda value: value - 1 > 98, 0))

    assert track(0x0c61) == 12
    assert track(100 << 8) == 0
    assert chain()(42) == 42
