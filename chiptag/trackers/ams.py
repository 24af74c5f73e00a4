'''
# AMS format

Extreme's Tracker modules; only the first bytes of the header are decoded.
'''
from .. import fields
from ..core import Chunk


class AMSFile(Chunk):
    magic                 = fields.StringField(7, default=b'Extreme', is_magic=True)
    version               = fields.StructField('H')
    total_samples         = fields.StructField('B', offset=0x0a)
    total_patterns        = fields.StructField('H')
    total_positions       = fields.StructField('H')
    virtual_midi_channels = fields.StructField('H')
