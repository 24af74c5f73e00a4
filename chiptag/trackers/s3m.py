'''
# S3M format

Scream Tracker 3 modules, little endian, recognizable by the "SCRM" at 0x2c.
'''
from enum import IntEnum, IntFlag

from .. import fields
from ..core import Chunk
from ..common.sanitize import default_below, default_when_zero
from ..properties import Dependency


DEFAULT_SPEED = 6
DEFAULT_TEMPO = 125
MINIMUM_TEMPO = 33


class S3MType(IntEnum):
    SCREAM_TRACKER_3 = 16


class S3MFlags(IntFlag):
    ST2_VIBRATO       = 1 << 0
    ST2_TEMPO         = 1 << 1
    AMIGA_SLIDES      = 1 << 2
    VOL0_OPTIMIZATION = 1 << 3
    AMIGA_LIMITS      = 1 << 4
    SOUNDBLASTER      = 1 << 5
    ST300_SLIDES      = 1 << 6
    CUSTOM_DATA       = 1 << 7


# the high bit of the master volume
STEREO = 0x80


class S3MFile(Chunk):
    title             = fields.TextField(28)
    eof_marker        = fields.StructField('B')  # 0x1a
    file_type         = fields.StructField('B', enum=S3MType)
    total_orders      = fields.StructField('H', offset=0x20)
    total_instruments = fields.StructField('H')
    total_patterns    = fields.StructField('H')
    flags             = fields.StructField('H', enum=S3MFlags)
    created_with      = fields.StructField('H')
    file_format       = fields.StructField('H')  # 1 signed samples, 2 unsigned
    magic             = fields.StringField(4, default=b'SCRM', is_magic=True)
    global_volume     = fields.StructField('B', offset=0x30)
    initial_speed     = fields.StructField('B', sanitize=default_when_zero(DEFAULT_SPEED))
    initial_tempo     = fields.StructField('B', sanitize=default_below(MINIMUM_TEMPO, DEFAULT_TEMPO))
    master_volume     = fields.StructField('B')
    channel_settings  = fields.ArrayField(fields.StructField('B'), n=32, offset=0x40)
    orders            = fields.ArrayField(fields.StructField('B'), n=Dependency('.total_orders'), offset=0x60)

    @property
    def is_stereo(self):
        return bool(self.master_volume.value & STEREO)
