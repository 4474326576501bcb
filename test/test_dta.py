"""
Tests for the core interface.
"""

# Community Packages
import pandas as pd
import pytest

# Dta Modules
import dta


class TestErrors:
    """
    Verify callers can catch errors by kind or all at once.
    """

    def test_hierarchy(self):
        for error in [
            dta.UnsupportedVersion,
            dta.UnknownTypeCode,
            dta.CorruptFile,
            dta.DtaIOError,
            dta.PlatformUnsupported,
            dta.InvalidInput,
        ]:
            assert issubclass(error, dta.DtaError)
        assert issubclass(dta.TruncatedFile, dta.CorruptFile)
        assert issubclass(dta.TruncatedFile, OSError)
        assert issubclass(dta.InvalidInput, ValueError)


class TestVariableType:
    """
    Verify type bytes and dtype mapping.
    """

    def test_numeric_codes(self):
        for code, vtype in [
            (b'f', dta.VariableType.FLOAT32),
            (b'd', dta.VariableType.FLOAT64),
            (b'l', dta.VariableType.INT32),
            (b'i', dta.VariableType.INT16),
            (b'b', dta.VariableType.BYTE),
        ]:
            assert dta.VariableType.from_code(ord(code)) == (vtype, None)
            assert vtype.code() == ord(code)

    def test_string_codes(self):
        assert dta.VariableType.from_code(0x7F) == (dta.VariableType.STRING, 0)
        assert dta.VariableType.from_code(0x84) == (dta.VariableType.STRING, 5)
        assert dta.VariableType.from_code(0xFF) == (dta.VariableType.STRING, 128)
        assert dta.VariableType.STRING.code(5) == 0x84

    def test_unknown_codes(self):
        for code in [0, ord('a'), ord('x'), 0x7E]:
            with pytest.raises(dta.UnknownTypeCode):
                dta.VariableType.from_code(code)

    def test_from_dtype(self):
        expected = {
            'int8': dta.VariableType.BYTE,
            'Int8': dta.VariableType.BYTE,
            'int16': dta.VariableType.INT16,
            'uint8': dta.VariableType.INT16,
            'int32': dta.VariableType.INT32,
            'int64': dta.VariableType.INT32,
            'bool': dta.VariableType.INT32,
            'boolean': dta.VariableType.INT32,
            'float16': dta.VariableType.FLOAT32,
            'float32': dta.VariableType.FLOAT32,
            'float64': dta.VariableType.FLOAT64,
            'Float64': dta.VariableType.FLOAT64,
            'object': dta.VariableType.STRING,
            'string': dta.VariableType.STRING,
        }
        for dtype, vtype in expected.items():
            assert dta.VariableType.from_dtype(pd.api.types.pandas_dtype(dtype)) is vtype, dtype

    def test_unsupported_dtype(self):
        with pytest.raises(dta.InvalidInput):
            dta.VariableType.from_dtype(pd.api.types.pandas_dtype('datetime64[ns]'))
        with pytest.raises(dta.InvalidInput):
            dta.VariableType.from_dtype(pd.api.types.pandas_dtype('complex128'))

    def test_dtype(self):
        for vtype in dta.VariableType:
            assert pd.Series([], dtype=vtype.dtype).dtype is not None


class TestDatasetMetadata:
    """
    Verify set/get of dataset metadata.
    """

    @staticmethod
    def compare_metadata(got, expected):
        for name in ['label', 'timestamp', 'version', 'byteorder', 'vtypes', 'formats', 'variable_labels']:
            assert getattr(got, name) == getattr(expected, name)

    @pytest.fixture
    def ds(self):
        ds = dta.Dataset(
            data={
                'a': [1, 2],
                'b': ['x', 'y'],
            },
            label='Example',
            timestamp='01 Jan 2000 00:00',
            vtypes={'a': dta.VariableType.INT16},
            variable_labels={'b': 'Beta'},
        )
        ds.formats['a'] = '%8.0g'
        return ds

    def test_init(self):
        ds = dta.Dataset()
        assert ds.label is None
        assert ds.timestamp is None
        assert ds.version is None
        assert ds.byteorder is None
        assert ds.vtypes == {}
        assert ds.formats == {}
        assert ds.variable_labels == {}

    def test_setters(self, ds):
        ds.label = 'Changed'
        ds.timestamp = 'later'
        assert ds.label == 'Changed'
        assert ds.timestamp == 'later'

    def test_copy_metadata(self, ds):
        """
        Verify ``DataFrame`` methods that copy will keep metadata.
        """
        self.compare_metadata(ds.copy(), ds)
        self.compare_metadata(ds.head(1), ds)
        self.compare_metadata(dta.Dataset(ds), ds)

    def test_copy_is_independent(self, ds):
        cpy = dta.Dataset(ds)
        cpy.formats['b'] = '%1s'
        assert 'b' not in ds.formats

    def test_constructor(self, ds):
        assert isinstance(ds.head(1), dta.Dataset)
        assert isinstance(ds[['a']], dta.Dataset)

    def test_vtype(self, ds):
        assert ds.vtype('a') is dta.VariableType.INT16
        assert ds.vtype('b') is dta.VariableType.STRING

    def test_contents(self, ds):
        """
        Verify variables metadata summary.
        """
        ds['c'] = pd.to_datetime(['2000-01-01', '2000-01-02'])
        got = ds.contents
        assert list(got.index) == [1, 2, 3]
        assert list(got['Variable']) == ['a', 'b', 'c']
        assert list(got['Type']) == ['INT16', 'STRING', '']
        assert list(got['Format']) == ['%8.0g', '', '']
        assert list(got['Label']) == ['', 'Beta', '']

    def test_empty_contents(self):
        assert dta.Dataset().contents.empty

    def test_repr(self, ds):
        text = repr(ds)
        assert text.startswith('Dataset\n')
        assert 'label: Example' in text
