'''
# SID format

PSID/RSID files contain music for the Commodore 64: a big endian header
followed by the C64 program. From version 2 the header is extended with
a word of flags at 0x76 describing the intended hardware.

Reference to <https://www.hvsc.c64.org/download/C64Music/DOCUMENTS/SID_file_format.txt>.
'''
from enum import IntFlag

from .. import fields
from ..core import Chunk
from ..meta import Endianess
from ..properties import Dependency


class SIDFlags(IntFlag):
    MUS_PLAYER = 1 << 0
    BASIC      = 1 << 1  # RSID only: the tune must be started from BASIC
    PAL        = 1 << 2
    NTSC       = 1 << 3
    MOS6581    = 1 << 4
    MOS8580    = 1 << 5


class SIDFile(Chunk):
    default_endianess = Endianess.BIG_ENDIAN

    magic        = fields.StringField(4, default=b'PSID')
    version      = fields.StructField('H')
    data_offset  = fields.StructField('H')
    load_address = fields.StructField('H')
    init_address = fields.StructField('H')
    play_address = fields.StructField('H')
    songs        = fields.StructField('H')
    start_song   = fields.StructField('H')
    speed        = fields.StructField('I')
    title        = fields.TextField(32)
    author       = fields.TextField(32)
    released     = fields.TextField(32)
    flags        = fields.SelectField('version', {
        1: fields.NullField(SIDFlags(0)),
        fields.SelectField.Type.DEFAULT: fields.StructField('H', enum=SIDFlags, offset=0x76),
    })
    # with a zero load address the first two bytes of the data (little endian) are the address
    c64_load_address = fields.SelectField('load_address', {
        0: fields.StructField('H', endianess=Endianess.LITTLE_ENDIAN, offset=Dependency('.data_offset')),
        fields.SelectField.Type.DEFAULT: fields.NullField(None),
    })

    def validate(self):
        return self.magic.value in (b'PSID', b'RSID')

    @property
    def is_rsid(self):
        return self.magic.value == b'RSID'

    @property
    def actual_load_address(self):
        if self.load_address.value == 0:
            return self.c64_load_address.value

        return self.load_address.value

    @property
    def actual_init_address(self):
        if self.is_rsid and self.flags.value & SIDFlags.BASIC:
            return 0

        if self.init_address.value == 0:
            return self.actual_load_address

        return self.init_address.value

    @property
    def video_standard(self):
        flags = self.flags.value
        pal, ntsc = bool(flags & SIDFlags.PAL), bool(flags & SIDFlags.NTSC)

        if pal and ntsc:
            return 'PAL and NTSC'
        if pal:
            return 'PAL'
        if ntsc:
            return 'NTSC'

        return 'Unknown'

    @property
    def chip_model(self):
        flags = self.flags.value
        old, new = bool(flags & SIDFlags.MOS6581), bool(flags & SIDFlags.MOS8580)

        if old and new:
            return 'MOS6581 and MOS8580'
        if old:
            return 'MOS6581'
        if new:
            return 'MOS8580'

        return 'Unknown'
