#!/usr/bin/env python3
'''
Dump the metadata of a game music file or of a module.

Set the environment variable DEBUG to see how every field is unpacked.
'''
import sys
import os
import logging

from chiptag.formats import detect, parse
from chiptag.exceptions import ChiptagException

if 'DEBUG' in os.environ:
    logging.basicConfig()
    logger = logging.getLogger('chiptag')
    logger.setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <file> [<format>]' % progname)
    sys.exit(1)


def dump_layout(chunk):
    print(' Field                          Offset     Size')
    for name, (offset, size) in chunk.layout.items():
        offset = f'0x{offset:08x}' if offset is not None else '-'
        size = f'{size}' if size is not None else '-'
        print(f' {name:<30} {offset:<10} {size}')


def dump_fields(value, indent=1):
    padding = ' ' * indent
    for name, field in value.items():
        if isinstance(field, dict):
            print(f'{padding}{name}:')
            dump_fields(field, indent + 2)
        elif isinstance(field, list) and len(field) > 8:
            print(f'{padding}{name}: [{len(field)} entries]')
        else:
            print(f'{padding}{name}: {field!r}')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        format = sys.argv[2] if len(sys.argv) > 2 else detect(path).name
        chunk = parse(path, format=format)
    except ChiptagException as e:
        print(f'{path}: {e.__class__.__name__} {e}', file=sys.stderr)
        sys.exit(2)

    print(f'{path} ({format}):')
    dump_fields(chunk.as_dict())
    print()
    dump_layout(chunk)
