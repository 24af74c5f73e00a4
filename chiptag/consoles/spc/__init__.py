'''
# SPC format

Dump of the memory of the SPC700, the sound processor of the SNES: the
first 0x100 bytes are the header, followed by 64KB of RAM, the DSP registers
and the "extra RAM"; since the file is of fixed size the metadata live

 1. in the header, the ID666 tag (plain text fields of fixed size)
 2. after the dump, at 0x10200, the optional XID6 block: a list of sub-chunks
    with a four bytes header (id, type, length) followed by the data
    aligned to four bytes

Reference to <http://snesmusic.org/files/spc_file_format.txt>.
'''
from .fields import XID6TextField, XID6IntegerField
from ... import fields
from ...core import Chunk, TaggedChunk
from ...fields import NOT_AVAILABLE
from ...properties import AlignedDependency
from ...common.sanitize import chain, clamp, high_byte, low_byte, reset_if
from .enum import (
    ID666_PRESENT,
    XID6_MAX_TICKS,
    XID6_TICKS_PER_MINUTE,
    XID6Tag,
    XID6Type,
)


XID6_OFFSET = 0x10200


class SPCRegisters(Chunk):
    '''State of the SPC700 at the moment of the dump'''
    pc  = fields.StructField('H')
    a   = fields.StructField('B')
    x   = fields.StructField('B')
    y   = fields.StructField('B')
    psw = fields.StructField('B')
    sp  = fields.StructField('B')


class ID666Tag(Chunk):
    song          = fields.TextField(32)
    game          = fields.TextField(32)
    dumper        = fields.TextField(16)
    comments      = fields.TextField(32)
    dump_date     = fields.TextField(11)
    fade_seconds  = fields.TextField(3)   # seconds of play before the fade
    fade_length   = fields.TextField(5)   # milliseconds
    artist        = fields.TextField(32)


class MissingID666Tag(Chunk):
    '''Same interface of ID666Tag but without reading anything'''
    song          = fields.NullField(NOT_AVAILABLE)
    game          = fields.NullField(NOT_AVAILABLE)
    dumper        = fields.NullField(NOT_AVAILABLE)
    comments      = fields.NullField(NOT_AVAILABLE)
    dump_date     = fields.NullField(NOT_AVAILABLE)
    fade_seconds  = fields.NullField(NOT_AVAILABLE)
    fade_length   = fields.NullField(NOT_AVAILABLE)
    artist        = fields.NullField(NOT_AVAILABLE)


XID6_DECODERS = {
    XID6Tag.SONG:       XID6TextField(),
    XID6Tag.GAME:       XID6TextField(),
    XID6Tag.ARTIST:     XID6TextField(),
    XID6Tag.DUMPER:     XID6TextField(maximum=0x11),
    XID6Tag.DATE:       XID6IntegerField(),
    XID6Tag.EMULATOR:   XID6IntegerField(sanitize=low_byte),
    XID6Tag.COMMENT:    XID6TextField(),
    XID6Tag.OST:        XID6TextField(),
    XID6Tag.DISC:       XID6IntegerField(sanitize=clamp(high=9)),
    # the low byte is an optional character (e.g. the "a" of "12a")
    XID6Tag.TRACK:      XID6IntegerField(sanitize=chain(high_byte, reset_if(lambda track: track - 1 > 98, 0))),
    XID6Tag.PUBLISHER:  XID6TextField(),
    XID6Tag.COPYRIGHT:  XID6IntegerField(),
    XID6Tag.INTRO:      XID6IntegerField(sanitize=clamp(high=XID6_MAX_TICKS)),
    XID6Tag.LOOP:       XID6IntegerField(sanitize=clamp(high=XID6_MAX_TICKS)),
    XID6Tag.END:        XID6IntegerField(sanitize=clamp(high=XID6_MAX_TICKS)),
    XID6Tag.FADE:       XID6IntegerField(sanitize=clamp(high=XID6_TICKS_PER_MINUTE - 1)),
    XID6Tag.MUTED:      XID6IntegerField(sanitize=low_byte),
    XID6Tag.LOOP_TIMES: XID6IntegerField(sanitize=chain(low_byte, clamp(1, 9))),
    XID6Tag.MIXING:     XID6IntegerField(sanitize=clamp(32768, 524288)),
    fields.SelectField.Type.DEFAULT: fields.NullField(None),
}


class XID6SubChunk(TaggedChunk):
    header_size = 4

    tag_id   = fields.StructField('B', enum=XID6Tag)
    tag_type = fields.StructField('B', enum=XID6Type)
    length   = fields.StructField('H')
    data     = fields.SelectField('tag_id', XID6_DECODERS)

    @property
    def declared_length(self):
        if self.tag_type.value == XID6Type.DATA:
            return 0

        return (self.length.value + 3) & ~3


class XID6Block(Chunk):
    magic      = fields.StringField(4, default=b'xid6', is_magic=True)
    block_size = fields.StructField('I')
    tags       = fields.ChunkStreamField(XID6SubChunk(), budget=AlignedDependency('.block_size', 4))

    def get(self, tag, default=None):
        '''Value of the given tag, when repeated the last valid one wins.'''
        value = default
        for chunk in self.tags:
            if chunk.tag_id.value == tag and chunk.data.value is not None:
                value = chunk.data.value

        return value

    def __contains__(self, tag):
        return any(_.tag_id.value == tag for _ in self.tags)

    def __iter__(self):
        return iter(self.tags)


class SPCFile(Chunk):
    magic          = fields.StringField(27, default=b'SNES-SPC700 Sound File Data', is_magic=True)
    format_version = fields.TextField(6)  # like " v0.30"
    marker         = fields.StringField(2, default=b'\x1a\x1a')
    has_id666      = fields.StructField('B')
    version        = fields.StructField('B')
    registers      = SPCRegisters(offset=0x25)
    id666          = fields.SelectField('has_id666', {
        ID666_PRESENT: ID666Tag(offset=0x2e),
        fields.SelectField.Type.DEFAULT: MissingID666Tag(),
    })
    xid6           = fields.OptionalField(XID6Block(), offset=XID6_OFFSET, minimum_size=8)

    @property
    def id666_present(self):
        return self.has_id666.value == ID666_PRESENT

    def _get_tag(self, name, tag):
        if self.xid6.present:
            value = self.xid6.get(tag)
            if value:
                return value

        return getattr(self.id666, name).value

    @property
    def song(self):
        return self._get_tag('song', XID6Tag.SONG)

    @property
    def game(self):
        return self._get_tag('game', XID6Tag.GAME)

    @property
    def artist(self):
        return self._get_tag('artist', XID6Tag.ARTIST)

    @property
    def dumper(self):
        return self._get_tag('dumper', XID6Tag.DUMPER)

    @property
    def comments(self):
        return self._get_tag('comments', XID6Tag.COMMENT)
