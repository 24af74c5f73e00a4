'''
# IT format

Impulse Tracker modules, little endian. The 0xc0 bytes header is followed by

 1. the orders (one byte each)
 2. the tables of pointers (four bytes each) to the instruments, the samples
    and the patterns

Instruments and samples are records of fixed size (554 and 80 bytes) that
we read starting from the first pointer of their table.

Reference to <https://github.com/schismtracker/schismtracker/wiki/ITTECH.TXT>.
'''
from .fields import (
    ITInstrument,
    ITMessageField,
    ITSample,
)
from ... import fields
from ...core import Chunk
from ...properties import Dependency
from .enum import (
    CHANNEL_DISABLED,
    INSTRUMENT_SIZE,
    SAMPLE_SIZE,
    ITFlags,
    ITSpecial,
    SlideType,
)


class ITFile(Chunk):
    magic                   = fields.StringField(4, default=b'IMPM', is_magic=True)
    song_name               = fields.TextField(26)
    pattern_highlight       = fields.StructField('H')
    total_orders            = fields.StructField('H')
    total_instruments       = fields.StructField('H')
    total_samples           = fields.StructField('H')
    total_patterns          = fields.StructField('H')
    created_with            = fields.StructField('H')
    compatible_with         = fields.StructField('H')
    flags                   = fields.StructField('H', enum=ITFlags)
    special                 = fields.StructField('H', enum=ITSpecial)
    global_volume           = fields.StructField('B')
    mix_volume              = fields.StructField('B')
    initial_speed           = fields.StructField('B')
    initial_tempo           = fields.StructField('B')
    panning_separation      = fields.StructField('B')
    pitch_wheel_depth       = fields.StructField('B')
    message_length          = fields.StructField('H')
    message_offset          = fields.StructField('I')
    reserved                = fields.StructField('I')
    channel_panning         = fields.ArrayField(fields.StructField('B'), n=64, offset=0x40)
    channel_volumes         = fields.ArrayField(fields.StructField('B'), n=64, offset=0x80)
    orders                  = fields.ArrayField(fields.StructField('B'), n=Dependency('.total_orders'), offset=0xc0)
    instrument_offsets      = fields.ArrayField(fields.StructField('I'), n=Dependency('.total_instruments'))
    sample_offsets          = fields.ArrayField(fields.StructField('I'), n=Dependency('.total_samples'))
    pattern_offsets         = fields.ArrayField(fields.StructField('I'), n=Dependency('.total_patterns'))
    message                 = ITMessageField()
    instruments             = fields.ArrayField(
        ITInstrument(),
        n=Dependency('.total_instruments'),
        offset=Dependency('.instrument_offsets.0'),
        stride=INSTRUMENT_SIZE,
    )
    samples                 = fields.ArrayField(
        ITSample(),
        n=Dependency('.total_samples'),
        offset=Dependency('.sample_offsets.0'),
        stride=SAMPLE_SIZE,
    )

    def has_flag(self, flag):
        return bool(self.flags.value & flag)

    @property
    def has_message(self):
        return bool(self.special.value & ITSpecial.MESSAGE)

    @property
    def slide_type(self):
        return SlideType.LINEAR if self.has_flag(ITFlags.LINEAR_SLIDES) else SlideType.AMIGA

    @property
    def total_used_channels(self):
        '''Channels until the first one disabled.'''
        count = 0
        for panning in self.channel_panning:
            if panning.value == CHANNEL_DISABLED:
                break
            count += 1

        return count

    @property
    def used_channel_panning(self):
        return [_.value for _ in self.channel_panning[:self.total_used_channels]]

    @property
    def used_channel_volumes(self):
        return [_.value for _ in self.channel_volumes[:self.total_used_channels]]
