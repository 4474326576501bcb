"""
Read and write Stata version 5 and 6 data files (``.dta``).
"""

# Standard Library
import enum
import logging
from collections.abc import Mapping
from copy import deepcopy

# Community Packages
import pandas as pd

from .__about__ import __version__  # noqa: F401 module imported but unused

LOG = logging.getLogger(__name__)

__all__ = [
    'Dataset',
    'VariableType',
    'DtaError',
    'UnsupportedVersion',
    'UnknownTypeCode',
    'CorruptFile',
    'DtaIOError',
    'TruncatedFile',
    'PlatformUnsupported',
    'InvalidInput',
]


class DtaError(Exception):
    """Base class for errors reading or writing a data file."""


class UnsupportedVersion(DtaError):
    """File release byte is neither Stata version 5 nor 6."""


class UnknownTypeCode(DtaError):
    """Variable type byte is neither a numeric type nor a string width."""


class CorruptFile(DtaError):
    """File structure violates the format."""


class DtaIOError(DtaError, OSError):
    """Short read or write against the stream."""


class TruncatedFile(CorruptFile, DtaIOError):
    """File ended before a field was complete."""


class PlatformUnsupported(DtaError):
    """Native int, float, and double are not 4, 4, and 8 byte IEEE values."""


class InvalidInput(DtaError, ValueError):
    """Data cannot be expressed in the file format."""


class VariableType(enum.IntEnum):
    """
    Stata variable storage types.

    Values are the type bytes stored in the file.  A string variable's
    type byte is ``STRING`` plus the string width.
    """
    FLOAT32 = ord('f')
    FLOAT64 = ord('d')
    INT32 = ord('l')
    INT16 = ord('i')
    BYTE = ord('b')
    STRING = 0x7F

    @classmethod
    def from_code(cls, code):
        """
        Get the storage type and string width for a type byte.

        Numeric types have no width, so it is ``None``.
        """
        if code >= cls.STRING:
            return cls.STRING, code - cls.STRING
        try:
            return cls(code), None
        except ValueError:
            raise UnknownTypeCode(f'Unknown data type {code:#04x}') from None

    @classmethod
    def from_dtype(cls, dtype):
        """
        Choose a storage type for a Pandas or NumPy dtype.
        """
        if isinstance(dtype, pd.StringDtype):
            return cls.STRING
        kind = getattr(dtype, 'kind', None)
        if kind == 'b':
            return cls.INT32
        if kind == 'i':
            return {1: cls.BYTE, 2: cls.INT16}.get(dtype.itemsize, cls.INT32)
        if kind == 'u':
            return {1: cls.INT16}.get(dtype.itemsize, cls.INT32)
        if kind == 'f':
            return cls.FLOAT32 if dtype.itemsize <= 4 else cls.FLOAT64
        if kind in {'O', 'S', 'U'}:
            return cls.STRING
        raise InvalidInput(f'dtype {dtype} not supported')

    def code(self, width=None):
        """
        Type byte for this storage type.
        """
        if self is VariableType.STRING:
            return self + width
        return int(self)

    @property
    def dtype(self):
        """
        Nullable Pandas dtype holding values of this type.
        """
        return {
            VariableType.FLOAT32: 'Float32',
            VariableType.FLOAT64: 'Float64',
            VariableType.INT32: 'Int32',
            VariableType.INT16: 'Int16',
            VariableType.BYTE: 'Int8',
            VariableType.STRING: 'string',
        }[self]


class Dataset(pd.DataFrame):
    """
    Stata data set.

    ``Dataset`` extends Pandas' ``DataFrame``, adding Stata metadata.
    Metadata lives in ``DataFrame.attrs``, so Pandas carries it over to
    copies and slices.
    """

    _attributes = [
        'label',
        'timestamp',
        'version',
        'byteorder',
        'vtypes',
        'formats',
        'variable_labels',
    ]

    def __init__(
        self,
        data=None,
        index=None,
        columns=None,
        dtype=None,
        copy=None,
        label=None,
        timestamp=None,
        version=None,
        byteorder=None,
        vtypes=None,
        formats=None,
        variable_labels=None,
    ):
        """
        Initialize Stata dataset metadata.
        """
        metadata = {
            'label': label,
            'timestamp': timestamp,
            'version': version,
            'byteorder': byteorder,
            'vtypes': vtypes,
            'formats': formats,
            'variable_labels': variable_labels,
        }
        super().__init__(data=data, index=index, columns=columns, dtype=dtype, copy=copy)
        self.copy_metadata(data)
        for name, value in metadata.items():
            if isinstance(value, Mapping):
                value = dict(value)
            if value is not None:
                self.attrs[name] = value

    def copy_metadata(self, other):
        """
        Copy metadata from another Dataset.
        """
        if isinstance(other, pd.DataFrame):
            for name in self._attributes:
                if name in other.attrs:
                    self.attrs[name] = deepcopy(other.attrs[name])

    def __repr__(self):
        """REPL-format."""
        metadata = (f'{name}: {self.attrs[name]}' for name in ('label', 'timestamp', 'version')
                    if self.attrs.get(name))
        return f'{type(self).__name__}\n{super().__repr__()}\n{", ".join(metadata)}'

    @property
    def _constructor(self):
        """
        Construct an instance with the same dimensions as the original.
        """
        return Dataset

    @property
    def label(self):
        """Dataset label."""
        return self.attrs.get('label')

    @label.setter
    def label(self, value):
        self.attrs['label'] = value

    @property
    def timestamp(self):
        """File creation time, as free text."""
        return self.attrs.get('timestamp')

    @timestamp.setter
    def timestamp(self, value):
        self.attrs['timestamp'] = value

    @property
    def version(self):
        """Format version of the file this dataset was read from."""
        return self.attrs.get('version')

    @property
    def byteorder(self):
        """Byte order of the file this dataset was read from."""
        return self.attrs.get('byteorder')

    @property
    def vtypes(self):
        """Storage type by variable name."""
        return self.attrs.setdefault('vtypes', {})

    @property
    def formats(self):
        """Print format by variable name.  Not interpreted."""
        return self.attrs.setdefault('formats', {})

    @property
    def variable_labels(self):
        """Variable label by variable name."""
        return self.attrs.setdefault('variable_labels', {})

    def vtype(self, name):
        """
        Storage type of a variable, inferred from its dtype if not set.
        """
        try:
            return self.vtypes[name]
        except KeyError:
            return VariableType.from_dtype(self[name].dtype)

    @property
    def contents(self):
        """
        Variable metadata, such as type, format, and label.
        """

        def vtype(name):
            try:
                return self.vtype(name).name
            except (InvalidInput, AttributeError):
                return ''

        df = pd.DataFrame([{
            'Variable': name,
            'Type': vtype(name),
            'Format': self.formats.get(name, ''),
            'Label': self.variable_labels.get(name, ''),
        } for name in self.columns])
        if df.empty:
            return df
        df.index = df.index + 1
        df.index.name = '#'
        return df
