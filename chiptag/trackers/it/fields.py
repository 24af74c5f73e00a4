'''
The records of the Impulse Tracker format pointed to by the header.
'''
from ... import fields
from ...core import Chunk
from ...fields import NOT_AVAILABLE
from .enum import (
    ITEnvelopeFlags,
    ITSampleConvert,
    ITSampleFlags,
    ITSpecial,
)


class ITMessageField(fields.Field):
    '''The song message lives somewhere else in the file, we jump there and come
    back; lines are terminated by CR that we change to LF.

    When the special flags don't advertise it or it lies outside the file
    we have no message.'''

    def _unpack(self, stream):
        header = self.father
        length = header.message_length.value
        offset = header.message_offset.value

        if not header.special.value & ITSpecial.MESSAGE:
            return NOT_AVAILABLE

        if offset + length > stream.size:
            self.logger.warning('song message at 0x%x (%d bytes) is outside the file' % (offset, length))
            return NOT_AVAILABLE

        stream.save()
        stream.seek(offset)
        raw = stream.read_fixed(length)
        stream.restore()

        return raw.split(b'\x00', 1)[0].decode('latin-1').replace('\r', '\n')


class ITKeyboardEntry(Chunk):
    note   = fields.StructField('B')
    sample = fields.StructField('B')


class ITEnvelopeNode(Chunk):
    y    = fields.StructField('b')
    tick = fields.StructField('H')


class ITEnvelope(Chunk):
    flags         = fields.StructField('B', enum=ITEnvelopeFlags)
    node_count    = fields.StructField('B')
    loop_begin    = fields.StructField('B')
    loop_end      = fields.StructField('B')
    sustain_begin = fields.StructField('B')
    sustain_end   = fields.StructField('B')
    nodes         = fields.ArrayField(ITEnvelopeNode(), n=25)
    reserved      = fields.StructField('B')

    @property
    def enabled(self):
        return bool(self.flags.value & ITEnvelopeFlags.ENABLED)

    @property
    def used_nodes(self):
        return self.nodes[:self.node_count.value]


class ITInstrument(Chunk):
    magic                  = fields.StringField(4, default=b'IMPI', is_magic=True)
    dos_filename           = fields.TextField(13)
    new_note_action        = fields.StructField('B')
    duplicate_check_type   = fields.StructField('B')
    duplicate_check_action = fields.StructField('B')
    fade_out               = fields.StructField('H')
    pitch_pan_separation   = fields.StructField('b')
    pitch_pan_center       = fields.StructField('B')
    global_volume          = fields.StructField('B')
    default_pan            = fields.StructField('B')
    random_volume          = fields.StructField('B')
    random_panning         = fields.StructField('B')
    tracker_version        = fields.StructField('H')
    associated_samples     = fields.StructField('B')
    unused                 = fields.StructField('B')
    instrument_name        = fields.TextField(26)
    filter_cutoff          = fields.StructField('B')
    filter_resonance       = fields.StructField('B')
    midi_channel           = fields.StructField('B')
    midi_program           = fields.StructField('B')
    midi_bank              = fields.StructField('H')
    keyboard               = fields.ArrayField(ITKeyboardEntry(), n=120)
    envelopes              = fields.ArrayField(ITEnvelope(), n=3)
    reserved               = fields.StringField(4)


class ITSample(Chunk):
    magic          = fields.StringField(4, default=b'IMPS', is_magic=True)
    dos_filename   = fields.TextField(13)
    global_volume  = fields.StructField('B')
    flags          = fields.StructField('B', enum=ITSampleFlags)
    default_volume = fields.StructField('B')
    sample_name    = fields.TextField(26)
    convert        = fields.StructField('B', enum=ITSampleConvert)
    default_pan    = fields.StructField('B')
    length         = fields.StructField('I')
    loop_begin     = fields.StructField('I')
    loop_end       = fields.StructField('I')
    c5_speed       = fields.StructField('I')
    sustain_begin  = fields.StructField('I')
    sustain_end    = fields.StructField('I')
    pointer        = fields.StructField('I')
    vibrato_speed  = fields.StructField('B')
    vibrato_depth  = fields.StructField('B')
    vibrato_rate   = fields.StructField('B')
    vibrato_type   = fields.StructField('B')

    def has_flag(self, flag):
        return bool(self.flags.value & flag)
