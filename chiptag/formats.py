'''
Registry of the supported formats and entry point of the library.

A format is recognized by its magic number; the formats without one (or with
a signature too short to be trusted) are recognized by the file extension.
'''
import logging
import os
from collections import namedtuple

from .meta import Compliant
from .streams import Stream
from .exceptions import UnknownFormatException
from .consoles.gbs import GBSFile
from .consoles.nsf import NSFFile
from .consoles.psf import PSFFile
from .consoles.sap import SAPFile
from .consoles.sid import SIDFile
from .consoles.spc import SPCFile
from .trackers.amd import AMDFile
from .trackers.ams import AMSFile
from .trackers.composer669 import MAGICS as COMPOSER669_MAGICS, Composer669File
from .trackers.dbm import DBMFile
from .trackers.it import ITFile
from .trackers.mod import MODFile
from .trackers.mod.utils import is_module_id
from .trackers.mt2 import MT2File
from .trackers.plm import PLMFile
from .trackers.ptm import PTMFile
from .trackers.s3m import S3MFile
from .trackers.stm import STMFile
from .trackers.xm import XMFile


logger = logging.getLogger(__name__)

# enough to contain the signature of the MOD
SNIFF_SIZE = 0x440


Format = namedtuple('Format', ['name', 'cls', 'extensions', 'sniff'])


FORMATS = [
    Format('spc', SPCFile, ('.spc',), lambda header: header.startswith(b'SNES-SPC700 Sound File Data')),
    Format('nsf', NSFFile, ('.nsf',), lambda header: header.startswith(b'NESM\x1a')),
    Format('sid', SIDFile, ('.sid', '.psid', '.rsid'), lambda header: header[:4] in (b'PSID', b'RSID')),
    Format('gbs', GBSFile, ('.gbs',), lambda header: header.startswith(b'GBS')),
    Format('psf', PSFFile, (
        '.psf', '.minipsf', '.psf2', '.minipsf2', '.ssf', '.minissf', '.dsf', '.minidsf',
        '.usf', '.miniusf', '.gsf', '.minigsf', '.snsf', '.minisnsf', '.2sf', '.mini2sf',
        '.qsf', '.miniqsf',
    ), lambda header: header.startswith(b'PSF')),
    Format('sap', SAPFile, ('.sap',), lambda header: header.startswith(b'SAP\r\n') or header.startswith(b'SAP\n')),
    Format('it', ITFile, ('.it',), lambda header: header.startswith(b'IMPM')),
    Format('mt2', MT2File, ('.mt2',), lambda header: header.startswith(b'MT20')),
    Format('xm', XMFile, ('.xm',), lambda header: header.startswith(b'Extended Module: ')),
    Format('s3m', S3MFile, ('.s3m',), lambda header: header[0x2c:0x30] == b'SCRM'),
    Format('ptm', PTMFile, ('.ptm',), lambda header: header[0x2c:0x30] == b'PTMF'),
    Format('ams', AMSFile, ('.ams',), lambda header: header.startswith(b'Extreme')),
    Format('dbm', DBMFile, ('.dbm',), lambda header: header.startswith(b'DBM0')),
    Format('plm', PLMFile, ('.plm',), lambda header: header.startswith(b'PLM\x1a')),
    Format('mod', MODFile, ('.mod',), lambda header: is_module_id(header[1080:1084])),
    # no magic (or a too generic one): only the extension
    Format('amd', AMDFile, ('.amd',), None),
    Format('stm', STMFile, ('.stm',), None),
    Format('669', Composer669File, ('.669',), None),
]

FORMATS_BY_NAME = {_.name: _ for _ in FORMATS}


def get_extension(source):
    if isinstance(source, (str, os.PathLike)):
        return os.path.splitext(os.fspath(source))[1].lower()

    name = getattr(source, 'name', None)
    if isinstance(name, str):
        return os.path.splitext(name)[1].lower()

    return None


def read_header(stream):
    '''The first bytes of the source, without moving the cursor.'''
    stream.save()
    stream.seek(0)
    header = stream.obj.read(SNIFF_SIZE)
    stream.restore()

    return header


def detect(source) -> Format:
    '''Tell the format of the source from its magic or its extension, in this order.'''
    if isinstance(source, Stream):
        header = read_header(source)
    else:
        with Stream(source) as stream:
            header = read_header(stream)

    for format in FORMATS:
        if format.sniff is not None and format.sniff(header):
            logger.debug('detected format \'%s\' from the magic' % format.name)
            return format

    extension = get_extension(source)

    for format in FORMATS:
        if extension in format.extensions:
            logger.debug('detected format \'%s\' from the extension \'%s\'' % (format.name, extension))
            return format

    # the 669 signature is only two letters, we trust it as last resort
    if header[:2] in COMPOSER669_MAGICS:
        return FORMATS_BY_NAME['669']

    raise UnknownFormatException(message=f'unable to detect the format of {source!r}')


def parse(source, format=None, compliant=Compliant.NONE):
    '''Unpack the source with the reader of its format.

    The format can be forced by name (see FORMATS), otherwise it's detected;
    with compliant the magic numbers and the enums are checked.'''
    if format is None:
        format = detect(source)
    elif isinstance(format, str):
        try:
            format = FORMATS_BY_NAME[format.lower()]
        except KeyError:
            raise UnknownFormatException(message=f'format \'{format}\' is not supported') from None

    logger.debug('parsing %r as \'%s\'' % (source, format.name))

    return format.cls(source, compliant=compliant)
