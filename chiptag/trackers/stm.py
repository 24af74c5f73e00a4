'''
# STM format

Scream Tracker 2 songs.
'''
from .. import fields
from ..core import Chunk


class STMFile(Chunk):
    song_name      = fields.TextField(20)
    tracker_name   = fields.TextField(8)
    eof_marker     = fields.StructField('B')  # 0x1a
    file_type      = fields.StructField('B')  # 1 song, 2 module
    version_major  = fields.StructField('B')
    version_minor  = fields.StructField('B')
    tempo          = fields.StructField('B')
    total_patterns = fields.StructField('B')
    global_volume  = fields.StructField('B')
