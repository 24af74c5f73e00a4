'''
Constant values of the Impulse Tracker format.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum, IntFlag, auto


INSTRUMENT_SIZE = 0x22a
SAMPLE_SIZE     = 0x50

# value of the channel panning for the channels not used
CHANNEL_DISABLED = 0xff


class ITFlags(IntFlag):
    STEREO          = 1 << 0
    VOL0_MIX        = 1 << 1  # no mixing of the channels with volume zero
    USE_INSTRUMENTS = 1 << 2
    LINEAR_SLIDES   = 1 << 3
    OLD_EFFECTS     = 1 << 4
    LINK_EFFECTS    = 1 << 5  # G shares the memory with E/F
    MIDI_PITCH      = 1 << 6
    EMBEDDED_MIDI   = 1 << 7


class ITSpecial(IntFlag):
    MESSAGE         = 1 << 0
    EDIT_HISTORY    = 1 << 1
    ROW_HIGHLIGHTS  = 1 << 2
    MIDI_CONFIG     = 1 << 3


class ITSampleFlags(IntFlag):
    HEADER              = 1 << 0  # the sample has data
    SIXTEEN_BIT         = 1 << 1
    STEREO              = 1 << 2
    COMPRESSED          = 1 << 3
    LOOP                = 1 << 4
    SUSTAIN_LOOP        = 1 << 5
    PINGPONG_LOOP       = 1 << 6
    PINGPONG_SUSTAIN    = 1 << 7


class ITSampleConvert(IntFlag):
    SIGNED = 1 << 0


class ITEnvelopeFlags(IntFlag):
    ENABLED      = 1 << 0
    LOOP         = 1 << 1
    SUSTAIN_LOOP = 1 << 2
    FILTER       = 1 << 7  # only for the pitch envelope


class SlideType(Enum):
    AMIGA  = auto()
    LINEAR = auto()
