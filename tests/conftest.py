import pytest


def pad(value, size, filler=b'\x00'):
    '''Fixed size field as found in the headers: encoded and padded.'''
    if isinstance(value, str):
        value = value.encode('latin-1')

    return value[:size].ljust(size, filler)


@pytest.fixture
def text():
    return pad


@pytest.fixture
def write_file(tmp_path):
    '''Write the data in a file named as indicated and return its path.'''
    def _write(name, data):
        path = tmp_path / name
        path.write_bytes(data)

        return path

    return _write
