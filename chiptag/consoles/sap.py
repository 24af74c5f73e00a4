'''
# SAP format

Slight Atari Player: a text header made of lines "TAG value" (CR LF terminated)
followed, after the two bytes FF FF, by the binary blocks of the Atari executable.

Text values (NAME, AUTHOR, DATE) are between quotes, addresses are in hexadecimal
and some tags (NTSC, STEREO) are flags without a value; TIME is repeated for
each sub-song.

Reference to <https://asap.sourceforge.net/sap-format.html>.
'''
from .. import fields
from ..core import Chunk
from ..fields import NOT_AVAILABLE


BINARY_MARKER = b'\xff\xff'


class SAPHeaderField(fields.Field):
    '''The lines of the text header as a list of couples (TAG, value), in order.'''

    def _unpack(self, stream):
        start = stream.tell()
        text, _, _ = stream.read_all().partition(BINARY_MARKER)

        # stop where the binary part starts
        stream.seek(start + len(text))

        entries = []
        for line in text.decode('latin-1').splitlines():
            name, _, value = line.strip().partition(' ')
            if not name:
                continue

            entries.append((name.upper(), value.strip()))

        return entries


class SAPFile(Chunk):
    magic  = fields.StringField(3, default=b'SAP', is_magic=True)
    header = SAPHeaderField()

    def get_all(self, name):
        return [value for tag, value in self.header.value if tag == name]

    def get(self, name, default=None):
        values = self.get_all(name)

        return values[0] if values else default

    def get_text(self, name):
        return self.get(name, NOT_AVAILABLE).replace('"', '')

    def get_int(self, name, base=10, default=None):
        '''The value as an integer, "default" when missing or malformed.'''
        value = self.get(name)
        if not value:
            return default

        try:
            return int(value, base)
        except ValueError:
            self.logger.warning('tag %s has a malformed value: %r' % (name, value))

        return default

    def get_address(self, name):
        return self.get_int(name, base=16)

    @property
    def title(self):
        return self.get_text('NAME')

    @property
    def author(self):
        return self.get_text('AUTHOR')

    @property
    def date(self):
        return self.get_text('DATE')

    @property
    def times(self):
        '''The duration of each sub-song, like "03:25.120".'''
        return [_.replace('"', '') for _ in self.get_all('TIME')]

    @property
    def songs(self):
        return self.get_int('SONGS', default=1)

    @property
    def default_song(self):
        return self.get_int('DEFSONG', default=0)

    @property
    def player_type(self):
        return self.get('TYPE', NOT_AVAILABLE)

    @property
    def init_address(self):
        return self.get_address('INIT')

    @property
    def player_address(self):
        return self.get_address('PLAYER')

    @property
    def music_address(self):
        return self.get_address('MUSIC')

    @property
    def fastplay(self):
        return self.get_int('FASTPLAY')

    @property
    def is_ntsc(self):
        return self.get('NTSC') is not None

    @property
    def is_stereo(self):
        return self.get('STEREO') is not None
