class ChiptagException(Exception):
    '''Base class to extend in order to throw exception in chiptag.

    It takes as first argument the chain of the layers that caused the
    exception: each chunk the exception passes through while propagating
    prepends its own field name, so that the final chain reads like
    "xid6.tags.data".
    '''

    def __init__(self, chain=None, message=''):
        self.chain = chain if chain is not None else []
        self.message = message
        super().__init__()

    def __str__(self):
        where = '.'.join(self.chain)
        if where and self.message:
            return f'{where}: {self.message}'

        return where or self.message


class UnpackException(ChiptagException):
    pass


class TruncatedReadException(UnpackException):
    '''The source ended before a fixed-width read could be satisfied.'''
    pass


class OutOfRangeException(UnpackException):
    '''Seeking outside the boundaries of the source.'''
    pass


class MagicException(ChiptagException):
    pass


class UnknownFormatException(ChiptagException):
    pass
