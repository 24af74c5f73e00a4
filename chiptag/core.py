"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict, Optional

from .fields import Field
from .meta import Compliant, Endianess, MetaChunk
from .streams import Stream
from .exceptions import (
    ChiptagException,
    MagicException,
)
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: the class body
    is the table describing the layout, each attribute a field with its width, kind
    and optionally its offset.

    A Chunk can contain sub-chunks.

    Passing a source to the constructor (a path, some bytes or a file object) the
    chunk is immediately unpacked from it; without a source the instance is a prototype
    usable as a field of another chunk.

    NOTE: you need to import fields and then call fields.XField() otherwise
    the fields won't be found.
    """
    default_endianess: Optional[Endianess] = None

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        if source is None:
            return

        if isinstance(source, Stream):
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, source))
            self.unpack(source)
            return

        with Stream(source) as stream:
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def _get_value(self):
        return self

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''For each field the couple (absolute offset, size in bytes).'''
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def as_dict(self) -> Dict:
        return {name: field.to_python() for name, field in self.get_fields()}

    def to_python(self):
        return self.as_dict()

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        Passing a stream is mandatory since is possible that the different
        sub-chunks can have offsets not contiguous so we need to jump back and
        forth.

        As already told size and offset are the two fundamental parameters that
        define a chunk inside a binary stream:

            1. a field without offset is read right after the previous one
            2. an integer offset is relative to the start of this chunk
            3. a Dependency is resolved with the fields already unpacked
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()
        end = self.offset

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            try:
                position = field.get_position(stream)
                if position is not None:
                    stream.seek(position)

                self.logger.debug('offset at 0x%x' % stream.tell())

                field.unpack(stream)
            except ChiptagException as e:
                e.chain.insert(0, field_name)
                raise

            if field.end is not None:
                end = max(end, field.end)

        self.end = end

        if hasattr(self, 'validate'):
            ret = self.validate()
            if not ret:
                self.logger.warning(f'validation for chunk \'{self.__class__.__name__}\' failed')
                if self.is_compliant(Compliant.MAGIC):
                    raise MagicException(message=f'{self.__class__.__name__} failed validation')

        self._phase = ChunkPhase.DONE

        return self


class TaggedChunk(Chunk):
    '''A chunk starting with a fixed size header that declares how many bytes
    of data follow it; it's the element of a ChunkStreamField.

    Subclasses set "header_size" and implement "declared_length".'''
    header_size = 0

    @property
    def declared_length(self) -> int:
        raise NotImplementedError(f'{self.__class__.__name__} must declare the length of its data')

    def discard_payload(self, end):
        '''Reset the fields whose unpacking didn't complete; the chunk spans
        till "end" anyway.'''
        for field_name, field in self.get_fields():
            if field._phase != ChunkPhase.DONE:
                self.logger.debug('resetting %s.%s' % (self.__class__.__name__, field_name))
                field.reset()

        self.end = end
        self._phase = ChunkPhase.DONE
