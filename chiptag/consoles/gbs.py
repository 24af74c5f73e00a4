'''
# GBS format

Game Boy Sound System: a 0x70 bytes header followed by the code of the
sound driver, all little endian.
'''
from .. import fields
from ..core import Chunk


class GBSFile(Chunk):
    magic         = fields.StringField(3, default=b'GBS', is_magic=True)
    version       = fields.StructField('B')
    total_songs   = fields.StructField('B')
    first_song    = fields.StructField('B')
    load_address  = fields.StructField('H')
    init_address  = fields.StructField('H')
    play_address  = fields.StructField('H')
    stack_pointer = fields.StructField('H')
    timer_modulo  = fields.StructField('B')
    timer_control = fields.StructField('B')
    title         = fields.TextField(32)
    author        = fields.TextField(32)
    copyright     = fields.TextField(32)
