import io
import logging
import struct

from .meta import Endianess
from .exceptions import OutOfRangeException, TruncatedReadException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file objects to uniform their
    properties: positioned, bounded and endian-aware reads.

    It's the only place where the source is touched, the fields ask the
    stream for exactly the bytes they need and the stream complains
    (TruncatedReadException) if it can't honor the request.

    Use it as a context manager: what the stream opened by itself (a path,
    a bytes buffer) is closed on exit, a file object passed by the caller is
    left alone.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.history = []
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError(f'don\'t know how to read from an instance of \'{self._type.__name__}\'')

        init_method()

        self.size = self._measure()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}, size={self.size})>'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        if self._owned:
            self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self._owned = True

    init_PosixPath = init_str
    init_WindowsPath = init_str

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self._owned = True

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_BufferedReader(self):
        '''Already a binary file object, we don't own it'''
        pass

    init_BytesIO = init_BufferedReader
    init_FileIO = init_BufferedReader

    def _measure(self):
        current = self.obj.tell()
        size = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(current)

        return size

    def tell(self):
        return self.obj.tell()

    @property
    def position(self):
        return self.obj.tell()

    @property
    def remaining(self):
        '''Number of bytes between the current position and the end of the source.'''
        return self.size - self.obj.tell()

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        if offset < 0 or offset > self.size:
            raise OutOfRangeException(message=f'offset 0x{offset:x} outside the source (size 0x{self.size:x})')

        self.obj.seek(offset)

        return self

    def read_fixed(self, n):
        '''Read exactly n bytes or raise TruncatedReadException.'''
        position = self.obj.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise TruncatedReadException(
                message=f'wanted {n} bytes at 0x{position:x} but only {len(data)} are available')

        return data

    def read_string(self, n, encoding='latin-1'):
        '''Read n bytes and decode them, the padding is left untouched.'''
        return self.read_fixed(n).decode(encoding)

    def read_struct(self, format, endianess=Endianess.LITTLE_ENDIAN):
        fmt = '%s%s' % (endianess.prefix, format)

        return struct.unpack(fmt, self.read_fixed(struct.calcsize(fmt)))[0]

    def read_uint8(self):
        return self.read_struct('B')

    def read_int8(self):
        return self.read_struct('b')

    def read_uint16(self, endianess=Endianess.LITTLE_ENDIAN):
        return self.read_struct('H', endianess)

    def read_int16(self, endianess=Endianess.LITTLE_ENDIAN):
        return self.read_struct('h', endianess)

    def read_uint32(self, endianess=Endianess.LITTLE_ENDIAN):
        return self.read_struct('I', endianess)

    def read_int32(self, endianess=Endianess.LITTLE_ENDIAN):
        return self.read_struct('i', endianess)

    def read_all(self):
        '''Everything from the current position up to the end of the source.'''
        return self.obj.read()

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)
