'''
# AMD format

Amusic Adlib Tracker modules: two texts at the beginning and a few
bytes scattered after the instruments.
'''
from .. import fields
from ..core import Chunk


class AMDFile(Chunk):
    song_name      = fields.TextField(24)
    artist         = fields.TextField(24)
    song_length    = fields.StructField('B', offset=0x3a4)
    total_patterns = fields.StructField('B')
    version        = fields.StructField('B', offset=0x42f)
