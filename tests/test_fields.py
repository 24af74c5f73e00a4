import struct
from enum import Enum, IntFlag

import pytest

from chiptag.core import Chunk
from chiptag.meta import Compliant, Endianess
from chiptag.exceptions import MagicException, TruncatedReadException, UnpackException
from chiptag.fields import (
    ArrayField,
    NullField,
    NOT_AVAILABLE,
    OptionalField,
    RemainderField,
    SelectField,
    StringField,
    StructField,
    TextField,
)
from chiptag.properties import Dependency


class DummyKind(Enum):
    FIRST  = 1
    SECOND = 2


class DummyFlags(IntFlag):
    A = 1
    B = 2
    C = 4


class Header(Chunk):
    magic = StringField(4, default=b'TEST', is_magic=True)
    count = StructField('H')
    kind  = StructField('B', enum=DummyKind)
    flags = StructField('B', enum=DummyFlags)
    label = TextField(8)


def build_header(magic=b'TEST', count=0x1234, kind=1, flags=5, label=b'abc\x00xyz\x00'):
    return magic + struct.pack('<HBB', count, kind, flags) + label


def test_structfield():
    header = Header(build_header())

    assert header.count.value == 0x1234
    assert header.kind.value == DummyKind.FIRST
    assert header.flags.value & DummyFlags.A
    assert not header.flags.value & DummyFlags.B
    assert header.flags.value & DummyFlags.C


def test_structfield_endianess():
    class BigHeader(Chunk):
        default_endianess = Endianess.BIG_ENDIAN

        big    = StructField('H')
        little = StructField('H', endianess=Endianess.LITTLE_ENDIAN)

    header = BigHeader(b'\x12\x34\x12\x34')

    assert header.big.value == 0x1234
    assert header.little.value == 0x3412


def test_structfield_enum_unknown():
    """Without compliance an unknown value is kept as integer"""
    header = Header(build_header(kind=7))

    assert header.kind.value == 7

    with pytest.raises(UnpackException) as e:
        Header(build_header(kind=7), compliant=Compliant.ENUM)

    assert e.value.chain == ['kind']


def test_structfield_sanitize():
    class Dummy(Chunk):
        speed = StructField('B', sanitize=lambda value: value or 6)

    assert Dummy(b'\x00').speed.value == 6
    assert Dummy(b'\x03').speed.value == 3


def test_magic():
    header = Header(build_header(magic=b'FAIL'))

    assert header.magic.value == b'FAIL'

    with pytest.raises(MagicException) as e:
        Header(build_header(magic=b'FAIL'), compliant=Compliant.MAGIC)

    assert e.value.chain == ['magic']


def test_textfield():
    header = Header(build_header())

    assert header.label.value == 'abc'
    assert len(header.magic) == 4


def test_textfield_encoding():
    class Dummy(Chunk):
        text = TextField(4, encoding='utf-8')

    assert Dummy('è!'.encode('utf-8') + b'\x00').text.value == 'è!'


def test_nullfield():
    class Dummy(Chunk):
        missing = NullField(NOT_AVAILABLE)
        value_  = StructField('B')

    dummy = Dummy(b'\x2a')

    assert dummy.missing.value == 'N/A'
    assert dummy.value_.value == 0x2a
    assert dummy.layout['missing'] == (0, 0)


def test_remainderfield():
    class Dummy(Chunk):
        first = StructField('B')
        rest  = RemainderField()

    assert Dummy(b'\x01abc').rest.value == b'abc'


def test_fields_are_read_only():
    header = Header(build_header())

    with pytest.raises(AttributeError):
        header.count = 3

    with pytest.raises(AttributeError):
        header.count.value = 3


def test_layout():
    header = Header(build_header())

    assert header.layout == {
        'magic': (0, 4),
        'count': (4, 2),
        'kind':  (6, 1),
        'flags': (7, 1),
        'label': (8, 8),
    }
    assert header.size == 16


def test_truncated():
    with pytest.raises(TruncatedReadException) as e:
        Header(build_header()[:10])

    assert e.value.chain == ['label']


def test_arrayfield():
    class Dummy(Chunk):
        count  = StructField('B')
        values = ArrayField(StructField('H'), n=Dependency('.count'))

    dummy = Dummy(b'\x03\x01\x00\x02\x00\x03\x00')

    assert len(dummy.values) == 3
    assert [_.value for _ in dummy.values] == [1, 2, 3]
    assert dummy.values[2].offset == 5
    assert dummy.as_dict() == {'count': 3, 'values': [1, 2, 3]}


def test_arrayfield_stride():
    class Dummy(Chunk):
        values = ArrayField(StructField('B'), n=3, offset=1, stride=2)

    dummy = Dummy(b'\x00\x0a\x00\x0b\x00\x0c')

    assert [_.value for _ in dummy.values] == [0x0a, 0x0b, 0x0c]


def test_arrayfield_truncated_chain():
    class Entry(Chunk):
        first  = StructField('B')
        second = StructField('B')

    class Dummy(Chunk):
        entries = ArrayField(Entry(), n=3)

    with pytest.raises(TruncatedReadException) as e:
        Dummy(b'\x01\x02\x03\x04\x05')

    assert e.value.chain == ['entries', '2', 'second']
    assert str(e.value).startswith('entries.2.second')


def test_selectfield():
    class Dummy(Chunk):
        kind = StructField('B')
        data = SelectField('kind', {
            0: StructField('I'),
            1: TextField(4),
            SelectField.Type.DEFAULT: NullField(None),
        })

    assert Dummy(b'\x00\x01\x00\x00\x00').data.value == 1
    assert Dummy(b'\x01abcd').data.value == 'abcd'
    assert Dummy(b'\x07abcd').data.value is None


def test_selectfield_delegation():
    class Inner(Chunk):
        x = StructField('B')
        y = StructField('B')

    class Dummy(Chunk):
        kind = StructField('B')
        data = SelectField('kind', {
            1: Inner(),
        })

    dummy = Dummy(b'\x01\x0a\x0b')

    assert dummy.data.x.value == 0x0a
    assert dummy.data.field.y.value == 0x0b
    assert dummy.as_dict() == {'kind': 1, 'data': {'x': 0x0a, 'y': 0x0b}}

    # no mapping and no default: nothing selected
    assert Dummy(b'\x02').data.value is None


def test_optionalfield():
    class Trailer(Chunk):
        magic = StringField(4, default=b'TAIL', is_magic=True)
        value_ = StructField('B')

    class Dummy(Chunk):
        first   = StructField('B')
        trailer = OptionalField(Trailer(), offset=4, minimum_size=5)

    dummy = Dummy(b'\x01\x00\x00\x00TAIL\x2a')
    assert dummy.trailer.present
    assert dummy.trailer.value_.value == 0x2a

    # the file is too short
    dummy = Dummy(b'\x01\x00\x00\x00TAI')
    assert not dummy.trailer.present
    assert dummy.trailer.value is None

    # there is something else
    dummy = Dummy(b'\x01\x00\x00\x00HEAD\x2a')
    assert not dummy.trailer.present
    assert dummy.as_dict() == {'first': 1, 'trailer': None}
