'''
# MT2 format

MadTracker 2 modules, little endian. After the header and the order table
there is the (optional) drum data, whose length is declared just before it,
and then the "extra data": a list of chunks with an identifier of four
characters and the length of the data that follows. We decode

 - TRKS: volumes and effects of the tracks
 - MSG\\0: the comment of the song
 - SUM\\0: the summary

and skip the others.
'''
from enum import IntFlag

from .. import fields
from ..core import Chunk, TaggedChunk
from ..properties import Dependency, LinearDependency


DRUM_DATA_OFFSET = 384


class MT2Flags(IntFlag):
    PACKED_PATTERNS   = 1 << 0
    AUTOMATION        = 1 << 1
    DRUM_AUTOMATION   = 1 << 3
    MASTER_AUTOMATION = 1 << 4


class MT2DrumData(Chunk):
    total_patterns = fields.StructField('H')
    drum_samples   = fields.ArrayField(fields.StructField('H'), n=8)
    orders         = fields.ArrayField(fields.StructField('B'), n=256)


class MT2TrackData(Chunk):
    master_volume     = fields.StructField('H')
    track_volume      = fields.StructField('H')
    effect_buffer     = fields.StructField('?')
    output_track      = fields.StructField('?')
    effect_id         = fields.StructField('H')
    effect_parameters = fields.ArrayField(fields.StructField('H'), n=8)


class MT2Message(Chunk):
    show_comment = fields.StructField('?')
    comment      = fields.TextField(LinearDependency(-1, '@MT2Chunk.length', minimum=0))


class MT2Summary(Chunk):
    mask    = fields.StringField(6)
    content = fields.TextField(LinearDependency(-6, '@MT2Chunk.length', minimum=0))


class MT2Chunk(TaggedChunk):
    header_size = 8

    chunk_id = fields.StringField(4)
    length   = fields.StructField('I')
    data     = fields.SelectField('chunk_id', {
        b'TRKS': MT2TrackData(),
        b'MSG\x00': MT2Message(),
        b'SUM\x00': MT2Summary(),
        fields.SelectField.Type.DEFAULT: fields.NullField(None),
    })

    @property
    def declared_length(self):
        return self.length.value


class MT2File(Chunk):
    magic             = fields.StringField(4, default=b'MT20', is_magic=True)
    user_id           = fields.StructField('I')
    version           = fields.StructField('H')
    tracker_name      = fields.TextField(32)
    title             = fields.TextField(64)
    total_positions   = fields.StructField('H')
    restart_position  = fields.StructField('H')
    total_patterns    = fields.StructField('H')
    total_tracks      = fields.StructField('H')
    samples_per_tick  = fields.StructField('H')
    ticks_per_line    = fields.StructField('B')
    lines_per_beat    = fields.StructField('B')
    flags             = fields.StructField('I', enum=MT2Flags)
    total_instruments = fields.StructField('H')
    total_samples     = fields.StructField('H')
    orders            = fields.ArrayField(fields.StructField('B'), n=256)
    drum_data_length  = fields.StructField('H')
    drums             = fields.SelectField('drum_data_length', {
        0: fields.NullField(None),
        fields.SelectField.Type.DEFAULT: MT2DrumData(),
    })
    extra_data_length = fields.StructField('I', offset=LinearDependency(DRUM_DATA_OFFSET, '.drum_data_length'))
    chunks            = fields.ChunkStreamField(MT2Chunk(), budget=Dependency('.extra_data_length'))

    def has_flag(self, flag):
        return bool(self.flags.value & flag)

    def get_chunks(self, chunk_id):
        return [_.data for _ in self.chunks if _.chunk_id.value == chunk_id]

    @property
    def tracks(self):
        return [_.value for _ in self.get_chunks(b'TRKS')]

    @property
    def comments(self):
        return [_.comment.value for _ in self.get_chunks(b'MSG\x00')]

    @property
    def summary(self):
        summaries = self.get_chunks(b'SUM\x00')

        return summaries[0].content.value if summaries else None
