"""
# Chiptag: metadata readers for game music and tracker modules.

Each supported format is described declaratively: a class (a Chunk) whose
attributes are the fields composing the file, in the order they appear,
each one knowing its width, its byte order and optionally its offset

    class S3MHeader(Chunk):
        title = fields.TextField(28)
        ...
        magic = fields.StringField(4, default=b'SCRM', is_magic=True, offset=0x2c)

Offsets and lengths can depend on fields already read (see properties.Dependency),
this is what allows to describe pointers, tables of records and lists of tagged
chunks without writing code for every format.

The only operation defined for a format is

 1. unpack(): reading the binary data and building a high-level, read-only,
    representation of that.
    Usually when unpacking you use as offset the actual offset of the
    stream and the chunk itself knows how many bytes needs to read
    to finalize the representation

An instance representing a file format can be in one of the following states

 1. INIT
 2. UNPACKING
 3. DONE

The simplest way to use it is via formats.parse()

    >>> from chiptag.formats import parse
    >>> module = parse('song.it')
    >>> module.song_name.value

"""
