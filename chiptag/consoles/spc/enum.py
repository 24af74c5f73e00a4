'''
Constant values of the SPC format and of its extended tags.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import IntEnum


# value of the byte at 0x23 when the ID666 tag is there
ID666_PRESENT = 26

# 99:59.99 at 64000 ticks per second
XID6_MAX_TICKS = 383999999
XID6_TICKS_PER_SECOND = 64000
XID6_TICKS_PER_MINUTE = 3840000


class XID6Type(IntEnum):
    '''How the data of an extended tag is stored'''
    DATA    = 0  # the value is in the length field of the header
    STRING  = 1
    INTEGER = 4


class XID6Tag(IntEnum):
    SONG       = 0x01
    GAME       = 0x02
    ARTIST     = 0x03
    DUMPER     = 0x04
    DATE       = 0x05
    EMULATOR   = 0x06
    COMMENT    = 0x07
    OST        = 0x10
    DISC       = 0x11
    TRACK      = 0x12
    PUBLISHER  = 0x13
    COPYRIGHT  = 0x14
    INTRO      = 0x30
    LOOP       = 0x31
    END        = 0x32
    FADE       = 0x33
    MUTED      = 0x34  # a bit set for every muted voice
    LOOP_TIMES = 0x35
    MIXING     = 0x36

