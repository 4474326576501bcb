"""
Shared test fixtures.
"""

# Standard Library
import struct

# Community Packages
import pandas as pd
import pytest

# Dta Modules
import dta


@pytest.fixture
def dataset():
    """
    Create a 3-column, 3-row dataset with text, integers, and floats.
    """
    ds = dta.Dataset(
        data={
            'VIT.STAT': pd.array(['ALIVE', 'DEAD', 'ALIVE'], dtype='string'),
            'COUNT': pd.array([1216, 254, None], dtype='Int32'),
            'TEMP': pd.array([98.6, None, 56.7], dtype='Float64'),
        },
        label='Economic status',
        timestamp='13 Nov 2015 10:35',
    )
    ds.formats['TEMP'] = '%8.1f'
    ds.variable_labels['VIT.STAT'] = 'Vital status'
    return ds


@pytest.fixture
def header_bytestring():
    """
    Little-endian version 6 header for the dataset.
    """
    return (
        b'\x6c\x02\x01\x00'
        b'\x03\x00'
        b'\x03\x00\x00\x00'
        + b'Economic status'.ljust(81, b'\x00')
        + b'13 Nov 2015 10:35'.ljust(18, b'\x00')
    )


@pytest.fixture
def descriptors_bytestring():
    """
    Variable descriptors for the dataset, version 6 widths.
    """
    return (
        b'\x84ld'
        b'VIT_STAT\x00'
        b'COUNT\x00\x00\x00\x00'
        b'TEMP\x00\x00\x00\x00\x00'
        + b'\x00' * 8
        + b'%5s'.ljust(12, b'\x00')
        + b'%9.0g'.ljust(12, b'\x00')
        + b'%8.1f'.ljust(12, b'\x00')
        + b'\x00' * 27
        + b'Vital status'.ljust(81, b'\x00')
        + b'COUNT'.ljust(81, b'\x00')
        + b'TEMP'.ljust(81, b'\x00')
    )


@pytest.fixture
def observations_bytestring():
    """
    Little-endian data block for the dataset, with missing-value sentinels.
    """
    return (
        b'ALIVE' + struct.pack('<i', 1216) + struct.pack('<d', 98.6)
        + b'DEAD\x00' + struct.pack('<i', 254) + struct.pack('<d', 2.0 ** 1023)
        + b'ALIVE' + struct.pack('<i', 2147483647) + struct.pack('<d', 56.7)
    )


@pytest.fixture
def dataset_bytestring(header_bytestring, descriptors_bytestring, observations_bytestring):
    """
    Create the same dataset in Stata version 6 format.
    """
    return header_bytestring + descriptors_bytestring + b'\x00\x00\x00' + observations_bytestring
