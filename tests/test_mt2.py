import struct

import pytest

from chiptag.trackers.mt2 import DRUM_DATA_OFFSET, MT2File, MT2Flags


def mt2_chunk(chunk_id, data):
    return chunk_id + struct.pack('<I', len(data)) + data


@pytest.fixture
def build_mt2(text):
    def _build(drums=b'', chunks=b''):
        data = b'MT20' + struct.pack('<IH', 0x12345678, 0x0250)
        data += text('MadTracker 2.5', 32) + text('Song', 64)
        data += struct.pack('<HHHHH', 3, 0, 2, 8, 1000) + bytes([6, 4])
        data += struct.pack('<I', MT2Flags.PACKED_PATTERNS | MT2Flags.AUTOMATION)
        data += struct.pack('<HH', 1, 1)
        data += bytes([0, 1, 0]).ljust(256, b'\x00')

        assert len(data) == DRUM_DATA_OFFSET - 2

        data += struct.pack('<H', len(drums)) + drums
        data += struct.pack('<I', len(chunks)) + chunks

        return data

    return _build


def test_mt2(build_mt2):
    tracks = struct.pack('<HH??H', 0x3000, 0x2000, True, False, 7) + struct.pack('<8H', *range(8))
    chunks = (
        mt2_chunk(b'TRKS', tracks) +
        mt2_chunk(b'MSG\x00', b'\x01Hello world') +
        mt2_chunk(b'XXXX', b'skip') +
        mt2_chunk(b'SUM\x00', b'\x00' * 6 + b'Summary')
    )
    mt2 = MT2File(build_mt2(chunks=chunks) + b'trailing garbage')

    assert mt2.tracker_name.value == 'MadTracker 2.5'
    assert mt2.title.value == 'Song'
    assert mt2.total_positions.value == 3
    assert mt2.ticks_per_line.value == 6
    assert mt2.has_flag(MT2Flags.AUTOMATION)
    assert not mt2.has_flag(MT2Flags.DRUM_AUTOMATION)

    assert mt2.drums.value is None
    assert mt2.extra_data_length.offset == DRUM_DATA_OFFSET
    assert mt2.extra_data_length.value == len(chunks)

    assert [_.chunk_id.value for _ in mt2.chunks] == [b'TRKS', b'MSG\x00', b'XXXX', b'SUM\x00']
    assert mt2.chunks[2].data.value is None

    track = mt2.tracks[0]
    assert track.master_volume.value == 0x3000
    assert track.effect_buffer.value is True
    assert track.output_track.value is False
    assert [_.value for _ in track.effect_parameters] == list(range(8))

    assert mt2.get_chunks(b'MSG\x00')[0].show_comment.value
    assert mt2.comments == ['Hello world']
    assert mt2.summary == 'Summary'


def test_mt2_drums(build_mt2):
    drums = struct.pack('<H', 4) + struct.pack('<8H', *range(1, 9)) + bytes(range(256))
    mt2 = MT2File(build_mt2(drums=drums))

    assert mt2.drum_data_length.value == len(drums)
    assert mt2.drums.total_patterns.value == 4
    assert [_.value for _ in mt2.drums.drum_samples] == list(range(1, 9))
    assert mt2.drums.orders[255].value == 255

    assert mt2.extra_data_length.offset == DRUM_DATA_OFFSET + len(drums)
    assert len(mt2.chunks) == 0
    assert mt2.comments == []
    assert mt2.summary is None


def test_mt2_bogus_chunk(build_mt2):
    """A chunk claiming more than the file holds ends the list."""
    chunks = mt2_chunk(b'MSG\x00', b'\x00Ok') + b'SUM\x00' + struct.pack('<I', 0x1000) + b'\x00' * 8
    mt2 = MT2File(build_mt2(chunks=chunks))

    assert len(mt2.chunks) == 1
    assert mt2.comments == ['Ok']


def test_mt2_chunk_with_short_data(build_mt2):
    """A chunk inside the file is kept even if its data can't be decoded."""
    # TRKS wants 24 bytes of data but declares (and has) only 4
    chunks = mt2_chunk(b'XYZW', b'') + mt2_chunk(b'TRKS', b'\x01\x02\x03\x04')
    mt2 = MT2File(build_mt2(chunks=chunks))

    assert [_.chunk_id.value for _ in mt2.chunks] == [b'XYZW', b'TRKS']
    assert mt2.chunks[1].length.value == 4
    assert mt2.chunks[1].data.value is None
    assert mt2.chunks[1].end == mt2.chunks[1].offset + 12
    assert mt2.tracks == [None]
