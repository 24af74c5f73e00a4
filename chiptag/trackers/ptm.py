'''
# PTM format

PolyTracker modules, little endian, with the "PTMF" signature at 0x2c.
'''
from .. import fields
from ..core import Chunk


class PTMFile(Chunk):
    song_name         = fields.TextField(28)
    eof_marker        = fields.StructField('B')
    version           = fields.StructField('H')
    reserved          = fields.StructField('B')
    total_orders      = fields.StructField('H', offset=0x20)
    total_instruments = fields.StructField('H')
    total_patterns    = fields.StructField('H')
    total_channels    = fields.StructField('H')
    flags             = fields.StructField('H')
    magic             = fields.StringField(4, default=b'PTMF', is_magic=True, offset=0x2c)
    channel_panning   = fields.ArrayField(fields.StructField('B'), n=32, offset=0x40)

    @property
    def panning(self):
        '''Panning of the channels in use'''
        return [_.value for _ in self.channel_panning[:self.total_channels.value]]
