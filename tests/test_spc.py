import struct

import pytest

from chiptag.consoles.spc import SPCFile, XID6_OFFSET
from chiptag.consoles.spc.enum import XID6_MAX_TICKS, XID6_TICKS_PER_MINUTE, XID6Tag, XID6Type
from chiptag.fields import NOT_AVAILABLE


def xid6_tag(tag, tag_type, length, data=b''):
    '''Sub-chunk of the XID6 block, with the data padded to four bytes.'''
    size = 0 if tag_type == XID6Type.DATA else (length + 3) & ~3

    return struct.pack('<BBH', tag, tag_type, length) + data.ljust(size, b'\x00')


@pytest.fixture
def build_spc(text):
    def _build(id666=True, xid6=None, xid6_magic=b'xid6'):
        data = b'SNES-SPC700 Sound File Data' + b' v0.30' + b'\x1a\x1a'
        data += bytes([26 if id666 else 27, 30])
        data += struct.pack('<HBBBBB', 0x0400, 1, 2, 3, 4, 0xef)
        data += b'\x00\x00'
        data += (
            text('Song', 32) +
            text('Game', 32) +
            text('Dumper', 16) +
            text('Comments', 32) +
            text('01/02/2003', 11) +
            text('180', 3) +
            text('10000', 5) +
            text('Artist', 32)
        )
        data = data.ljust(XID6_OFFSET, b'\x00')

        if xid6 is not None:
            data += xid6_magic + struct.pack('<I', len(xid6)) + xid6

        return data

    return _build


def test_spc_id666(build_spc):
    spc = SPCFile(build_spc())

    assert spc.id666_present
    assert not spc.xid6.present
    assert spc.format_version.value == ' v0.30'
    assert spc.registers.offset == 0x25
    assert spc.registers.pc.value == 0x400
    assert spc.registers.sp.value == 0xef

    assert spc.id666.offset == 0x2e
    assert spc.id666.fade_seconds.value == '180'
    assert spc.id666.fade_length.value == '10000'
    assert spc.id666.dump_date.value == '01/02/2003'

    assert spc.song == 'Song'
    assert spc.game == 'Game'
    assert spc.dumper == 'Dumper'
    assert spc.comments == 'Comments'
    assert spc.artist == 'Artist'


def test_spc_without_id666(build_spc):
    spc = SPCFile(build_spc(id666=False))

    assert not spc.id666_present
    assert spc.song == NOT_AVAILABLE
    assert spc.id666.dump_date.value == NOT_AVAILABLE


def test_spc_xid6(build_spc):
    tags = (
        xid6_tag(XID6Tag.SONG, XID6Type.STRING, 12, b'Better Song\x00') +
        xid6_tag(XID6Tag.GAME, XID6Type.STRING, 0) +
        xid6_tag(XID6Tag.DUMPER, XID6Type.STRING, 0x12, b'x' * 0x12) +
        xid6_tag(XID6Tag.COMMENT, XID6Type.STRING, 257, b'x' * 257) +
        xid6_tag(XID6Tag.ARTIST, XID6Type.STRING, 9, b'Composer\x00') +
        xid6_tag(XID6Tag.DISC, XID6Type.DATA, 12) +
        xid6_tag(XID6Tag.TRACK, XID6Type.DATA, 100 << 8) +
        xid6_tag(XID6Tag.LOOP_TIMES, XID6Type.DATA, 0) +
        xid6_tag(XID6Tag.INTRO, XID6Type.INTEGER, 4, struct.pack('<I', XID6_MAX_TICKS + 1000)) +
        xid6_tag(XID6Tag.MIXING, XID6Type.INTEGER, 4, struct.pack('<I', 10)) +
        xid6_tag(0x20, XID6Type.INTEGER, 4, b'\x01\x02\x03\x04')
    )
    spc = SPCFile(build_spc(xid6=tags))

    assert spc.xid6.present
    assert spc.xid6.offset == XID6_OFFSET
    assert len(spc.xid6.tags) == 11

    xid6 = spc.xid6
    assert xid6.get(XID6Tag.SONG) == 'Better Song'
    assert xid6.get(XID6Tag.GAME) is None
    assert xid6.get(XID6Tag.DUMPER) is None
    assert xid6.get(XID6Tag.COMMENT) is None
    assert xid6.get(XID6Tag.DISC) == 9
    assert xid6.get(XID6Tag.TRACK) == 0
    assert xid6.get(XID6Tag.LOOP_TIMES) == 1
    assert xid6.get(XID6Tag.INTRO) == XID6_MAX_TICKS
    assert xid6.get(XID6Tag.MIXING) == 32768
    # unknown tags are kept but not decoded
    assert 0x20 in xid6
    assert xid6.get(0x20) is None
    assert XID6Tag.OST not in xid6

    # the extended tags win only when valid
    assert spc.song == 'Better Song'
    assert spc.artist == 'Composer'
    assert spc.game == 'Game'
    assert spc.dumper == 'Dumper'
    assert spc.comments == 'Comments'


def test_spc_xid6_integers(build_spc):
    tags = (
        xid6_tag(XID6Tag.LOOP_TIMES, XID6Type.DATA, 0x0f) +
        xid6_tag(XID6Tag.TRACK, XID6Type.DATA, (5 << 8) | ord('a')) +
        xid6_tag(XID6Tag.DISC, XID6Type.DATA, 2) +
        xid6_tag(XID6Tag.DISC, XID6Type.DATA, 3) +
        xid6_tag(XID6Tag.EMULATOR, XID6Type.DATA, 0x0102) +
        xid6_tag(XID6Tag.MIXING, XID6Type.INTEGER, 4, struct.pack('<I', 0x100000))
    )
    xid6 = SPCFile(build_spc(xid6=tags)).xid6

    assert xid6.get(XID6Tag.LOOP_TIMES) == 9
    assert xid6.get(XID6Tag.TRACK) == 5
    # repeated tags: the last one wins
    assert xid6.get(XID6Tag.DISC) == 3
    assert xid6.get(XID6Tag.EMULATOR) == 2
    assert xid6.get(XID6Tag.MIXING) == 0x80000


def test_spc_xid6_wrong_magic(build_spc):
    tags = xid6_tag(XID6Tag.SONG, XID6Type.STRING, 4, b'Bad\x00')
    spc = SPCFile(build_spc(xid6=tags, xid6_magic=b'abcd'))

    assert not spc.xid6.present
    assert spc.song == 'Song'


def test_spc_xid6_truncated(build_spc):
    """What is decoded before the source ends is kept."""
    tags = (
        xid6_tag(XID6Tag.DISC, XID6Type.DATA, 2) +
        xid6_tag(XID6Tag.SONG, XID6Type.STRING, 32, b'Cut')
    )
    # the last sub-chunk declares more than what is there
    data = build_spc(xid6=tags)[:-28]
    spc = SPCFile(data)

    assert spc.xid6.present
    assert len(spc.xid6.tags) == 1
    assert spc.xid6.get(XID6Tag.DISC) == 2
    assert spc.song == 'Song'


def test_spc_xid6_ticks(build_spc):
    tags = (
        xid6_tag(XID6Tag.LOOP, XID6Type.INTEGER, 4, struct.pack('<I', XID6_MAX_TICKS + 1)) +
        xid6_tag(XID6Tag.END, XID6Type.INTEGER, 4, struct.pack('<I', 0xffffffff)) +
        xid6_tag(XID6Tag.FADE, XID6Type.INTEGER, 4, struct.pack('<I', XID6_TICKS_PER_MINUTE))
    )
    xid6 = SPCFile(build_spc(xid6=tags)).xid6

    assert xid6.get(XID6Tag.LOOP) == XID6_MAX_TICKS
    assert xid6.get(XID6Tag.END) == XID6_MAX_TICKS
    assert xid6.get(XID6Tag.FADE) == 3839999


def test_spc_xid6_ticks_in_range(build_spc):
    tags = (
        xid6_tag(XID6Tag.FADE, XID6Type.INTEGER, 4, struct.pack('<I', 64000)) +
        xid6_tag(XID6Tag.LOOP, XID6Type.INTEGER, 4, struct.pack('<I', XID6_MAX_TICKS))
    )
    xid6 = SPCFile(build_spc(xid6=tags)).xid6

    assert xid6.get(XID6Tag.FADE) == 64000
    assert xid6.get(XID6Tag.LOOP) == XID6_MAX_TICKS


def test_spc_xid6_data_shorter_than_declared(build_spc):
    """The next sub-chunk starts where the header says, whatever was read."""
    # an integer is four bytes but the sub-chunk declares eight
    tags = (
        xid6_tag(XID6Tag.COPYRIGHT, XID6Type.INTEGER, 8, struct.pack('<II', 1995, 0xdeadbeef)) +
        xid6_tag(XID6Tag.SONG, XID6Type.STRING, 5, b'Next\x00')
    )
    xid6 = SPCFile(build_spc(xid6=tags)).xid6

    assert [_.tag_id.value for _ in xid6] == [XID6Tag.COPYRIGHT, XID6Tag.SONG]
    assert xid6.get(XID6Tag.COPYRIGHT) == 1995
    assert xid6.get(XID6Tag.SONG) == 'Next'


def test_spc_xid6_rejected_repetition(build_spc):
    """A rejected copy of a tag doesn't hide a valid one."""
    tags = (
        xid6_tag(XID6Tag.SONG, XID6Type.STRING, 6, b'Valid\x00') +
        xid6_tag(XID6Tag.SONG, XID6Type.STRING, 0)
    )
    spc = SPCFile(build_spc(xid6=tags))

    assert len(spc.xid6.tags) == 2
    assert spc.xid6.get(XID6Tag.SONG) == 'Valid'
    assert spc.song == 'Valid'


def test_spc_without_xid6_membership(build_spc):
    spc = SPCFile(build_spc())

    assert XID6Tag.SONG not in spc.xid6
    assert list(spc.xid6) == []
