'''
Decoding of the pattern cells: each one is four bytes with the fields packed
in nibbles

    ssss pppp  pppppppp  ssss eeee  aaaaaaaa

where the two "ssss" are the high and low nibbles of the sample number,
"pppp pppppppp" the period (12 bits), "eeee" the effect and "aaaaaaaa" its
parameter.
'''
from collections import namedtuple

from bitstring import Bits

from .enum import EffectCommandType


MODNote = namedtuple('MODNote', ['sample', 'period', 'effect', 'parameter'])

ROWS_PER_PATTERN = 64
CELL_SIZE = 4

CELL_FORMAT = 'uint:4, uint:12, uint:4, uint:4, uint:8'


def decode_effect(command, parameter):
    '''The E command packs its sub-command in the high nibble of the parameter.'''
    if command == EffectCommandType.EXTENDED_COMMAND:
        command = 0xe0 | (parameter >> 4)
        parameter &= 0x0f

    return EffectCommandType(command), parameter


def decode_note(raw: bytes) -> MODNote:
    sample_high, period, sample_low, command, parameter = Bits(raw).unpack(CELL_FORMAT)
    effect, parameter = decode_effect(command, parameter)

    return MODNote(
        sample=(sample_high << 4) | sample_low,
        period=period,
        effect=effect,
        parameter=parameter,
    )


def decode_pattern(raw: bytes, channels: int):
    '''Returns the rows of the pattern, each one a list with a note for each channel.'''
    row_size = channels * CELL_SIZE

    return [
        [decode_note(raw[offset:offset + CELL_SIZE]) for offset in range(start, start + row_size, CELL_SIZE)]
        for start in range(0, len(raw), row_size)
    ]


def channels_from_module_id(module_id: bytes) -> int:
    '''The signature at 1080 tells the number of channels: "M.K." and friends
    are four channels, the PC trackers use "6CHN", "8CHN" or "16CH", "32CH".'''
    if module_id in (b'FLT8', b'OCTA', b'CD81'):
        return 8

    if module_id[1:] == b'CHN' and module_id[:1].isdigit():
        return int(module_id[:1])

    if module_id[2:] == b'CH' and module_id[:2].isdigit():
        return int(module_id[:2])

    return 4


PROTRACKER_IDS = (b'M.K.', b'M!K!', b'FLT4', b'FLT8', b'OCTA', b'CD81')


def is_module_id(module_id: bytes) -> bool:
    '''True for the signatures we know, so that the format can be detected.'''
    if module_id in PROTRACKER_IDS:
        return True

    return (module_id[1:] == b'CHN' and module_id[:1].isdigit()) or \
        (module_id[2:] == b'CH' and module_id[:2].isdigit())
