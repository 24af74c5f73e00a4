'''
# DBM format

DigiBooster Pro modules: after the eight bytes header the file is a list of
IFF-like chunks (big endian) with an identifier of four characters and the
length of the data. We decode

 - NAME: the name of the module
 - INFO: the counters of instruments, samples, songs, patterns and channels

and skip the others.
'''
from .. import fields
from ..core import Chunk, TaggedChunk
from ..meta import Endianess
from ..properties import Dependency


class DBMInfo(Chunk):
    total_instruments = fields.StructField('H')
    total_samples     = fields.StructField('H')
    total_songs       = fields.StructField('H')
    total_patterns    = fields.StructField('H')
    total_channels    = fields.StructField('H')


class DBMChunk(TaggedChunk):
    header_size = 8

    chunk_id = fields.StringField(4)
    length   = fields.StructField('I')
    data     = fields.SelectField('chunk_id', {
        b'NAME': fields.TextField(Dependency('.length')),
        b'INFO': DBMInfo(),
        fields.SelectField.Type.DEFAULT: fields.NullField(None),
    })

    @property
    def declared_length(self):
        return self.length.value


class DBMFile(Chunk):
    default_endianess = Endianess.BIG_ENDIAN

    magic         = fields.StringField(4, default=b'DBM0', is_magic=True)
    version_major = fields.StructField('B')
    version_minor = fields.StructField('B')
    reserved      = fields.StringField(2)
    chunks        = fields.ChunkStreamField(DBMChunk())

    def get_chunk(self, chunk_id):
        for chunk in self.chunks:
            if chunk.chunk_id.value == chunk_id:
                return chunk.data

        return None

    @property
    def module_name(self):
        name = self.get_chunk(b'NAME')

        return name.value if name is not None else fields.NOT_AVAILABLE

    @property
    def info(self):
        return self.get_chunk(b'INFO')
