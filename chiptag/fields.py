"""
A Field is "fundamental" datatype from the format point of view, something that
knows how many bytes it spans and how to turn them into a python value.

Fields are declared as class attributes of a Chunk and act as prototypes: each
chunk instance gets its own copy, attached to it via the "father" attribute, so
that dependencies between fields can be resolved while unpacking.
"""
import logging
import struct
from enum import Enum, Flag, auto

from .meta import Compliant, FieldBase, Endianess
from .properties import Dependency, ChunkPhase, PropertyDescriptor
from .exceptions import (
    ChiptagException,
    UnpackException,
    MagicException,
    OutOfRangeException,
    TruncatedReadException,
)


# sentinel for text that is not present in the file
NOT_AVAILABLE = 'N/A'


class Field(FieldBase):
    """Base class to subclass from.

    The "offset" argument can be

     - None: the field starts where the previous one ended
     - an integer: position relative to the start of the enclosing chunk
     - a Dependency: absolute position in the source (i.e. a pointer read before)

    After unpacking "offset" holds the absolute position the field has been
    read from and "end" the position just after it.
    """

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=None, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.end = None
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self._value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __str__(self):
        return str(self.value)

    value = property(fget=lambda self: self._get_value())

    def _get_value(self):
        return self._value

    @property
    def size(self):
        if self.end is None or not isinstance(self.offset, int):
            return None

        return self.end - self.offset

    def to_python(self):
        '''The plain python representation of this field.'''
        return self.value

    def get_endianess(self) -> Endianess:
        '''Explicit endianess wins, otherwise we ask the ancestors, the first chunk
        declaring a "default_endianess" decides.'''
        if self.endianess is not None:
            return self.endianess

        instance = self.father
        while instance is not None:
            if instance.endianess is not None:
                return instance.endianess

            default = getattr(instance, 'default_endianess', None)
            if default is not None:
                return default

            instance = instance.father

        return Endianess.LITTLE_ENDIAN

    def is_compliant(self, level):
        '''Returns the compliant'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def get_position(self, stream):
        '''Where this field has to be read from, None means "don't move".'''
        offset = self.offset

        if offset is None:
            return None

        if isinstance(offset, Dependency):
            return offset.resolve(self)

        base = self.father.offset if self.father is not None else 0

        return base + offset

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        value = self._unpack(stream)

        if self.is_magic and value != self.default:
            self.logger.warning(f'the magic doesn\'t correspond: {value!r} instead of {self.default!r}')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(message=f'expected magic {self.default!r}, found {value!r}')

        self._value = value
        self.end = stream.tell()
        self._phase = ChunkPhase.DONE

        return value

    def _unpack(self, stream):
        raise NotImplementedError(f'method {self.__class__.__name__}._unpack() not implemented')

    def reset(self):
        '''Back to the default value, as if never unpacked.'''
        self._value = self.value_from_default()
        self.end = None
        self._phase = ChunkPhase.INIT


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself;
    with "sanitize" a callable can fix the raw integer before that (clamping, defaults).
    """

    def __init__(self, format, default=0, enum=None, sanitize=None, **kw):
        self.format = format
        self.enum = enum
        self.sanitize = sanitize
        super().__init__(default=default, **kw)

    def __repr__(self):
        if self.enum or not isinstance(self.value, int):
            return f'<{self.__class__.__name__}({self.value!r})>'

        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % (self.get_endianess().prefix, self.format)

    def _unpack_enum(self, value: int) -> Enum:
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnpackException(message=f'enum {self.enum.__name__} has no element with value 0x{value:x}')

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def _unpack(self, stream):
        fmt = self.get_format()
        value = struct.unpack(fmt, stream.read_fixed(struct.calcsize(fmt)))[0]

        if self.sanitize:
            value = self.sanitize(value)

        if self.enum:
            value = self._unpack_enum(value)

        return value


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError('StringField must have \'n\' or \'default\' indicated!')

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return len(self.value) if self.value is not None else 0

    def _unpack(self, stream):
        return stream.read_fixed(self.length)


class TextField(StringField):
    """A string field decoded as text; everything after the first terminator
    is padding and it's thrown away."""

    def __init__(self, n=None, encoding='latin-1', terminator=b'\x00', **kw):
        self.encoding = encoding
        self.terminator = terminator
        super().__init__(n, **kw)

    def decode(self, raw):
        if self.terminator is not None:
            raw = raw.split(self.terminator, 1)[0]

        return raw.decode(self.encoding, errors='replace')

    def _unpack(self, stream):
        return self.decode(super()._unpack(stream))


class NullField(Field):
    '''Occupies no space: its value is the default, used for the parts of
    a format that are not present.'''

    def __init__(self, default=None, **kw):
        super().__init__(default=default, **kw)

    def _unpack(self, stream):
        return self.default


class RemainderField(Field):
    '''Takes as much stream as possible'''

    def _unpack(self, stream):
        return stream.read_all()


class ArrayField(Field):
    '''Unpack an array of fields.

    The number of elements is indicated with "n" (an integer or a Dependency);
    with "stride" the element i is read at "base + i * stride" (where base is
    the position of the field), otherwise the elements are contiguous.

    When there are no elements nothing is read and the offset is not even resolved,
    so an empty table can point anywhere.

    This class must behave like a list in python, at least for reading.
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field, n=0, stride=None, **kw):
        if not isinstance(n, (int, Dependency)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field = field
        self.n = n
        self.stride = stride

        kw.setdefault('default', [])
        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def to_python(self):
        return [_.to_python() for _ in self.value]

    def get_position(self, stream):
        if self.n == 0:
            return None

        return super().get_position(stream)

    def instance_element(self):
        return self.field.create(father=self)  # pass the father so that we don't lose the hierarchy

    def _unpack(self, stream):
        count = self.n
        base = stream.tell()

        self.logger.debug('unpacking %d elements at 0x%x' % (count, base))

        elements = []
        for index in range(count):
            if self.stride is not None:
                stream.seek(base + index * self.stride)

            element = self.instance_element()
            try:
                element.unpack(stream)
            except ChiptagException as e:
                e.chain.insert(0, str(index))
                raise

            elements.append(element)

        return elements


class SelectField(Field):
    """Allow to select the kind of final field based on condition in the parent chunk.
    You need to pass the name of the field to use as key and a dictionary with the mapping
    between value and field. You can use Type.DEFAULT as a default.

    Like in the following example we have a format the use the first 4 bytes to indicate what
    follows: for value zero you have another 4 bytes, otherwise you have a sixteen bytes string

        class DummyChunk(Chunk):
            type = fields.StructField('I')
            data = fields.SelectField('type', {
                0: fields.StructField('I'),
                SelectField.Type.DEFAULT: fields.StringField(0x10),
            })

    The selected field is attached to the same father so that it can
    refer to its siblings; its attributes are reachable from the select itself.
    A key without a mapping and without a default selects nothing and the value is None.
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, **kwargs):
        self._key = key
        self._mapping = mapping
        self._field = None

        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)

        field = self.__dict__.get('_field')
        if field is None:
            raise AttributeError(f'\'{self.__class__.__name__}\' has no selected field to get \'{name}\' from')

        return getattr(field, name)

    @property
    def field(self):
        return self._field

    def _get_value(self):
        return self._field.value if self._field is not None else None

    def to_python(self):
        return self._field.to_python() if self._field is not None else None

    def select(self):
        self.logger.debug('resolving key \'%s\'' % self._key)
        key_value = getattr(self.father, self._key).value

        key = key_value if key_value in self._mapping else SelectField.Type.DEFAULT

        self.logger.debug('using key \'%s\' (original was \'%s\')' % (key, key_value))

        prototype = self._mapping.get(key)

        return prototype.create(father=self.father) if prototype is not None else None

    def reset(self):
        super().reset()
        self._field = None

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()
        self._field = self.select()

        if self._field is not None:
            position = self._field.get_position(stream)
            if position is not None:
                stream.seek(position)

            self.logger.debug(f'unpacking {self._field!r}')
            self._field.unpack(stream)

            self.offset = self._field.offset

        self.end = stream.tell()
        self._phase = ChunkPhase.DONE


class OptionalField(Field):
    '''A region that may or may not be there: it's absent (value None) when
    the source is too short to contain at least "minimum_size" bytes from its
    position or when its magic doesn't correspond.

    The inner field is attached to the same father, like with SelectField.'''

    def __init__(self, field, minimum_size=0, **kw):
        self.field = field
        self.minimum_size = minimum_size
        self._present = None
        self._room = True
        super().__init__(**kw)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)

        present = self.__dict__.get('_present')
        if present is None:
            raise AttributeError(name)

        return getattr(present, name)

    @property
    def present(self):
        return self._present is not None

    def __contains__(self, item):
        return self._present is not None and item in self._present

    def __iter__(self):
        return iter(self._present) if self._present is not None else iter(())

    def reset(self):
        super().reset()
        self._present = None

    def to_python(self):
        return self._present.to_python() if self._present is not None else None

    def get_position(self, stream):
        position = super().get_position(stream)
        start = stream.tell() if position is None else position

        if start + self.minimum_size > stream.size:
            self.logger.debug('no room for optional \'%s\' at 0x%x' % (self.name, start))
            self._room = False
            return None

        self._room = True

        return position

    def _unpack(self, stream):
        if not self._room:
            return None

        position = stream.tell()

        field = self.field.create(father=self.father)
        field.compliant = Compliant.MAGIC | Compliant.INHERIT

        try:
            field.unpack(stream)
        except MagicException:
            self.logger.info('optional \'%s\' not present at 0x%x' % (self.name, position))
            stream.seek(position)
            return None

        self._present = field

        return field.value


class ChunkStreamField(Field):
    '''A sequence of TaggedChunk with a header declaring the length of the data
    that follows; it goes on until the "budget" of bytes is exhausted (when given)
    or until the source ends.

    After each chunk the position is moved to where the header says the next
    one begins, whatever the data actually consumed, so a bogus chunk cannot
    desynchronize the rest. A chunk ending past the source stops the
    iteration: what was decoded till there is kept. A chunk inside the source
    whose data cannot be decoded is kept with the data at its default.'''

    def __init__(self, element, budget=None, **kw):
        self.element = element
        self.budget = budget
        kw.setdefault('default', [])
        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def to_python(self):
        return [_.to_python() for _ in self.value]

    def get_budget(self):
        if isinstance(self.budget, Dependency):
            return self.budget.resolve(self)

        return self.budget

    def _unpack(self, stream):
        budget = self.get_budget()
        header_size = self.element.header_size

        chunks = []
        while (budget is None or budget > 0) and stream.remaining >= header_size:
            start = stream.tell()
            chunk = self.element.create(father=self)

            truncated = None
            try:
                chunk.unpack(stream)
            except (TruncatedReadException, OutOfRangeException) as e:
                truncated = e

            # the header is always complete, there are at least header_size bytes
            consumed = header_size + chunk.declared_length
            end = start + consumed

            if end > stream.size:
                self.logger.warning('chunk at 0x%x declares its end at 0x%x, past the end of the source' % (start, end))
                break

            if truncated is not None:
                self.logger.warning('cannot decode the data of the chunk at 0x%x: %s' % (start, truncated))
                chunk.discard_payload(end)

            chunks.append(chunk)
            stream.seek(end)

            if budget is not None:
                budget -= consumed

        return chunks
