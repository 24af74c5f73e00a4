'''
# NSF format

NES Sound Format: the header (0x80 bytes, little endian) is followed by the
6502 code and data of the sound driver.

Reference to <https://www.nesdev.org/wiki/NSF>.
'''
from enum import IntFlag

from .. import fields
from ..core import Chunk


class NSFRegion(IntFlag):
    PAL  = 1 << 0  # unset means NTSC
    DUAL = 1 << 1


class NSFChip(IntFlag):
    VRC6    = 1 << 0
    VRC7    = 1 << 1
    FDS     = 1 << 2
    MMC5    = 1 << 3
    NAMCO   = 1 << 4  # Namco 163
    SUNSOFT = 1 << 5  # Sunsoft 5B


class NSFFile(Chunk):
    magic         = fields.StringField(5, default=b'NESM\x1a', is_magic=True)
    version       = fields.StructField('B')
    total_songs   = fields.StructField('B')
    starting_song = fields.StructField('B')
    load_address  = fields.StructField('H')
    init_address  = fields.StructField('H')
    play_address  = fields.StructField('H')
    song_name     = fields.TextField(32)
    artist        = fields.TextField(32)
    copyright     = fields.TextField(32)
    ntsc_speed    = fields.StructField('H', offset=0x6e)  # microseconds per tick
    bankswitch    = fields.ArrayField(fields.StructField('B'), n=8, offset=0x70)
    pal_speed     = fields.StructField('H', offset=0x78)
    region        = fields.StructField('B', enum=NSFRegion, offset=0x7a)
    chips         = fields.StructField('B', enum=NSFChip, offset=0x7b)

    @property
    def is_ntsc(self):
        return not self.region.value & NSFRegion.PAL

    @property
    def is_dual(self):
        return bool(self.region.value & NSFRegion.DUAL)

    @property
    def speed_ticks(self):
        '''The play speed for the region the tune is meant for.'''
        return self.ntsc_speed.value if self.is_ntsc else self.pal_speed.value

    def uses_chip(self, chip):
        return bool(self.chips.value & chip)
