'''
# PLM format

Disorder Tracker 2 modules, little endian.
'''
from .. import fields
from ..core import Chunk


class PLMFile(Chunk):
    magic               = fields.StringField(4, default=b'PLM\x1a', is_magic=True)
    header_size         = fields.StructField('B')
    song_name           = fields.TextField(48)
    total_channels      = fields.StructField('B')
    max_slide_volume    = fields.StructField('B', offset=0x38)
    amplification       = fields.StructField('B')  # of the SoundBlaster
    initial_bpm         = fields.StructField('B')
    initial_speed       = fields.StructField('B')
    total_samples       = fields.StructField('B')
    total_patterns      = fields.StructField('B')
    total_orders        = fields.StructField('B')
