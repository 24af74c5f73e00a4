'''
# PSF format

Portable Sound Format and its derivatives (the "xSF" family): a 16 bytes
header, a reserved area, the zlib compressed program and finally an optional
tag block, that is text starting with "[TAG]" made of lines "name=value".

The version byte tells the platform, it's used also to find the name of the
tag with the author of the rip (like "psfby" or "2sfby").

Reference to <https://gist.github.com/SaxxonPike/a0b47f8579aad703b842001b24d40c00>.
'''
from enum import IntEnum

from .. import fields
from ..core import Chunk
from ..fields import NOT_AVAILABLE
from ..properties import LinearDependency


class PSFPlatform(IntEnum):
    PLAYSTATION   = 0x01
    PLAYSTATION_2 = 0x02
    SATURN        = 0x11
    DREAMCAST     = 0x12
    NINTENDO_64   = 0x21
    GBA           = 0x22
    SNES          = 0x23
    DS            = 0x24
    QSOUND        = 0x41


PLATFORM_PREFIX = {
    PSFPlatform.PLAYSTATION:   'psf',
    PSFPlatform.PLAYSTATION_2: 'psf2',
    PSFPlatform.SATURN:        'ssf',
    PSFPlatform.DREAMCAST:     'dsf',
    PSFPlatform.NINTENDO_64:   'usf',
    PSFPlatform.GBA:           'gsf',
    PSFPlatform.SNES:          'snsf',
    PSFPlatform.DS:            '2sf',
    PSFPlatform.QSOUND:        'qsf',
}

# characters trimmed around names and values
BLANKS = bytes(range(0x21))


class PSFTagsField(fields.RemainderField):
    '''The tag lines as a dictionary: names are case insensitive (we use lower case)
    and a name repeated on more lines means a multi-line value.

    The text is UTF-8 only when the tag "utf8" is present.'''

    def _unpack(self, stream):
        raw = super()._unpack(stream)

        entries = {}
        for line in raw.split(b'\n'):
            name, separator, value = line.partition(b'=')
            name = name.strip(BLANKS).lower()

            if not separator or not name:
                continue

            value = value.strip(BLANKS)

            if name in entries:
                entries[name] += b'\n' + value
            else:
                entries[name] = value

        encoding = 'utf-8' if b'utf8' in entries else 'latin-1'

        return {
            name.decode(encoding, errors='replace'): value.decode(encoding, errors='replace')
            for name, value in entries.items()
        }


class PSFTags(Chunk):
    magic   = fields.StringField(5, default=b'[TAG]', is_magic=True)
    entries = PSFTagsField()


class PSFFile(Chunk):
    magic           = fields.StringField(3, default=b'PSF', is_magic=True)
    version         = fields.StructField('B', enum=PSFPlatform)
    reserved_length = fields.StructField('I')
    program_length  = fields.StructField('I')  # compressed
    crc32           = fields.StructField('I')  # of the compressed program, not verified
    tags            = fields.OptionalField(
        PSFTags(),
        offset=LinearDependency(0x10, '.reserved_length', '.program_length'),
        minimum_size=5,
    )

    def get_tag(self, name, default=NOT_AVAILABLE):
        if not self.tags.present:
            return default

        return self.tags.entries.value.get(name.lower(), default)

    @property
    def platform_prefix(self):
        return PLATFORM_PREFIX.get(self.version.value)

    @property
    def title(self):
        return self.get_tag('title')

    @property
    def artist(self):
        return self.get_tag('artist')

    @property
    def game(self):
        return self.get_tag('game')

    @property
    def genre(self):
        return self.get_tag('genre')

    @property
    def copyright(self):
        return self.get_tag('copyright')

    @property
    def year(self):
        return self.get_tag('year')

    @property
    def comment(self):
        return self.get_tag('comment')

    @property
    def volume(self):
        return self.get_tag('volume')

    @property
    def length(self):
        return self.get_tag('length')

    @property
    def fade(self):
        return self.get_tag('fade')

    @property
    def ripper(self):
        prefix = self.platform_prefix
        if prefix is None:
            return NOT_AVAILABLE

        return self.get_tag(f'{prefix}by')

    @property
    def libraries(self):
        '''The files referenced via "_lib", "_lib2", "_lib3" and so on.'''
        libraries = []
        name, index = '_lib', 1

        while (library := self.get_tag(name, None)) is not None:
            libraries.append(library)
            index += 1
            name = f'_lib{index}'

        return libraries
