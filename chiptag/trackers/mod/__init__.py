'''
# MOD format

The format of the Amiga ProTracker and of its descendants, all big endian:

 1. song title (20 bytes)
 2. 31 sample headers of 30 bytes each
 3. song length, restart position and the table of 128 orders
 4. the signature at 1080, telling the number of channels
 5. the patterns, as many as the highest order plus one, each one 64 rows
    of four bytes for every channel

Reference to <https://www.ocf.berkeley.edu/~eek/index.html/tiny_examples/ptmod/ap12.html>.
'''
from ... import fields
from ...core import Chunk
from ...meta import Endianess
from ...properties import Dependency, PropertyDescriptor
from ...common.sanitize import low_nibble
from .utils import (
    CELL_SIZE,
    ROWS_PER_PATTERN,
    channels_from_module_id,
    decode_pattern,
)


class MODSample(Chunk):
    '''Lengths are stored in words'''
    sample_name   = fields.TextField(22)
    length_words  = fields.StructField('H')
    finetune      = fields.StructField('B', sanitize=low_nibble)
    volume        = fields.StructField('B')
    repeat_point  = fields.StructField('H')
    repeat_length = fields.StructField('H')

    @property
    def length_in_bytes(self):
        return self.length_words.value * 2

    @property
    def repeat_point_in_bytes(self):
        return self.repeat_point.value * 2

    @property
    def repeat_length_in_bytes(self):
        return self.repeat_length.value * 2


class MODPatternField(fields.Field):
    '''A whole pattern decoded in one go: the value is the list of its rows.'''

    channels = PropertyDescriptor('channels', int)

    def __init__(self, **kw):
        self.channels = Dependency('@MODFile.get_channels')
        super().__init__(**kw)

    def _unpack(self, stream):
        channels = self.channels
        raw = stream.read_fixed(ROWS_PER_PATTERN * channels * CELL_SIZE)

        return decode_pattern(raw, channels)

    def to_python(self):
        return [[_._asdict() for _ in row] for row in self.value]


class MODFile(Chunk):
    default_endianess = Endianess.BIG_ENDIAN

    title        = fields.TextField(20)
    samples      = fields.ArrayField(MODSample(), n=31, stride=30)
    song_length  = fields.StructField('B', offset=950)
    restart      = fields.StructField('B', offset=951)
    orders       = fields.ArrayField(fields.StructField('B'), n=128, offset=952)
    module_id    = fields.StringField(4, offset=1080)
    patterns     = fields.ArrayField(MODPatternField(), n=Dependency('.get_pattern_count'), offset=1084)

    def get_channels(self):
        return channels_from_module_id(self.module_id.value)

    def get_pattern_count(self):
        return max(_.value for _ in self.orders) + 1

    @property
    def song_orders(self):
        '''The orders actually played.'''
        return [_.value for _ in self.orders[:self.song_length.value]]
