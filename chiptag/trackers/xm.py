'''
# XM format

FastTracker 2 extended modules, little endian: a fixed part of 60 bytes followed
by the header proper, whose size is declared at 0x3c.
'''
from enum import Enum, IntFlag

from .. import fields
from ..core import Chunk


class XMFlags(IntFlag):
    LINEAR_FREQUENCIES = 1 << 0


class FrequencyTableType(Enum):
    AMIGA  = 0
    LINEAR = 1


class XMFile(Chunk):
    magic             = fields.StringField(17, default=b'Extended Module: ', is_magic=True)
    module_name       = fields.TextField(20)
    marker            = fields.StructField('B')  # 0x1a
    tracker_name      = fields.TextField(20)
    version           = fields.StructField('H')
    header_size       = fields.StructField('I')
    song_length       = fields.StructField('H')
    restart_position  = fields.StructField('H')
    total_channels    = fields.StructField('H')
    total_patterns    = fields.StructField('H')
    total_instruments = fields.StructField('H')
    flags             = fields.StructField('H', enum=XMFlags)
    default_tempo     = fields.StructField('H')
    default_bpm       = fields.StructField('H')
    orders            = fields.ArrayField(fields.StructField('B'), n=256)

    @property
    def frequency_table(self):
        if self.flags.value & XMFlags.LINEAR_FREQUENCIES:
            return FrequencyTableType.LINEAR

        return FrequencyTableType.AMIGA

    @property
    def song_orders(self):
        return [_.value for _ in self.orders[:self.song_length.value]]
