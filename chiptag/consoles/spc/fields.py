'''
Value decoders for the sub-chunks of the XID6 block: they look at the header
of the sub-chunk they belong to (their father) to know how the value is stored.
'''
from ... import fields
from ...properties import Dependency
from .enum import XID6Type


class XID6TextField(fields.TextField):
    '''A string tag, only lengths in [1, maximum] are accepted: any other value
    means the tag is corrupted and the value is None.'''

    def __init__(self, maximum=0x100, **kw):
        self.maximum = maximum
        super().__init__(Dependency('.length'), **kw)

    def _unpack(self, stream):
        header = self.father
        length = header.length.value

        if header.tag_type.value == XID6Type.DATA or not 1 <= length <= self.maximum:
            self.logger.warning('rejecting string tag 0x%02x with length %d' % (header.tag_id.value, length))
            return None

        return super()._unpack(stream)


class XID6IntegerField(fields.Field):
    '''An integer tag: small values live in the header itself (type DATA),
    the others in the four bytes following it.'''

    def __init__(self, sanitize=None, **kw):
        self.sanitize = sanitize
        super().__init__(**kw)

    def _unpack(self, stream):
        header = self.father

        if header.tag_type.value == XID6Type.DATA:
            value = header.length.value
        else:
            value = stream.read_uint32(self.get_endianess())

        return self.sanitize(value) if self.sanitize else value
