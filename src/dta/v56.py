"""
Read and write the Stata data file format from Stata version 5 or 6.

A ``.dta`` file is a fixed header, a block of variable descriptors, a
self-terminating block of "characteristics," and then the data, one
observation after another, each variable stored in its declared type.
"""

# Multi-byte numbers are stored in the byte order named by the header.
# Text fields are fixed width and NUL-terminated.
# Missing values are the largest value of each numeric type.

# Standard Library
import enum
import functools
import logging
import math
import numbers
import struct
from collections import namedtuple
from collections.abc import Iterator, Mapping, Sequence
from io import BytesIO

# Community Packages
import pandas as pd

# Dta Modules
import dta
from dta import (
    CorruptFile,
    DtaIOError,
    InvalidInput,
    PlatformUnsupported,
    TruncatedFile,
    UnsupportedVersion,
    VariableType,
)

__all__ = [
    'load',
    'loads',
    'dump',
    'dumps',
]

LOG = logging.getLogger(__name__)

TEXT_ENCODING = 'ISO-8859-1'

# Release byte for each format version.
RELEASES = {
    5: 0x69,
    6: 0x6C,
}
VERSIONS = {release: version for version, release in RELEASES.items()}
CURRENT_VERSION = 6

# Dataset and variable labels are wider from version 6.
LABEL_WIDTHS = {
    5: 32,
    6: 81,
}
TIMESTAMP_WIDTH = 18
NAME_WIDTH = 9
FORMAT_WIDTH = 12

# The type byte is ``0x7F + width``, so one byte holds at most 128.
STRING_WIDTH_MAX = 0xFF - VariableType.STRING

DEFAULT_LABEL = 'Written by dta.'
NUMERIC_FORMAT = '%9.0g'
FILETYPE = 1

BYTE_NA = 127
INT16_NA = 32767
INT32_NA = 2147483647
FLOAT32_NA = 2.0 ** 127
FLOAT64_NA = 2.0 ** 1023


class ByteOrder(enum.IntEnum):
    """
    Byte order flag of the file header.
    """
    BIG = 1
    LITTLE = 2

    @property
    def prefix(self):
        """
        ``struct`` format prefix for this byte order.
        """
        return '>' if self is ByteOrder.BIG else '<'

    @classmethod
    def parse(cls, value):
        """
        Get a byte order from a flag value or a name like ``'little'``.
        """
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise InvalidInput(f'Unknown byte order {value!r}') from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidInput(f'Unknown byte order {value!r}') from None


@functools.lru_cache(maxsize=None)
def host_byteorder():
    """
    Detect the byte order of this machine's floating point numbers.

    Stata files written here use native ints and floats, so only
    platforms with 4-byte ints and IEEE 4- and 8-byte floats work.
    """
    sizes = {fmt: struct.calcsize(fmt) for fmt in 'ifd'}
    if sizes != {'i': 4, 'f': 4, 'd': 8}:
        raise PlatformUnsupported(f'Native int, float, double sizes are {sizes}, expected 4, 4, 8')
    bits = struct.pack('=d', 1.0)
    if bits[:2] == b'\x3f\xf0':
        byteorder = ByteOrder.BIG
    elif bits[-2:] == b'\xf0\x3f':
        byteorder = ByteOrder.LITTLE
    else:
        raise PlatformUnsupported(f"Couldn't determine byte order from {bits!r}")
    LOG.debug(f'Host byte order is {byteorder.name}')
    return byteorder


class Context(namedtuple('Context', 'host byteorder version encoding')):
    """
    Settings shared by every phase of one load or dump.
    """

    @property
    def swap(self):
        """
        Whether 4- and 8-byte numbers must be byte-swapped.
        """
        return self.host != self.byteorder


def read_exactly(fp, n):
    """
    Read ``n`` bytes or raise ``TruncatedFile``.
    """
    bytestring = fp.read(n)
    if isinstance(bytestring, str):
        raise TypeError(f'Expected a stream in bytes-mode, got {type(fp).__name__}')
    if len(bytestring) != n:
        raise TruncatedFile(f'Expected {n} bytes, got {len(bytestring)}')
    return bytestring


def is_missing(value):
    """
    Whether a cell value is missing (None, NaN, or ``pd.NA``).
    """
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class Reader:
    """
    Read fixed-width fields from a ``.dta`` stream.

    Numeric readers return ``pd.NA`` for the type's missing value
    sentinel unless called with ``missing=False``.
    """

    def __init__(self, fp, context):
        self.fp = fp
        self.context = context

    def read(self, n):
        return read_exactly(self.fp, n)

    def skip(self, n):
        self.read(n)

    def _native(self, fmt):
        bytestring = self.read(struct.calcsize('=' + fmt))
        if self.context.swap:
            bytestring = bytestring[::-1]
        value, = struct.unpack('=' + fmt, bytestring)
        return value

    def byte(self, missing=True):
        value, = struct.unpack('b', self.read(1))
        return pd.NA if missing and value == BYTE_NA else value

    def int16(self, missing=True):
        # Shorts follow the file's byte order directly, not the swap flag.
        value, = struct.unpack(self.context.byteorder.prefix + 'h', self.read(2))
        return pd.NA if missing and value == INT16_NA else value

    def int32(self, missing=True):
        value = self._native('i')
        return pd.NA if missing and value == INT32_NA else value

    def float32(self, missing=True):
        value = self._native('f')
        return pd.NA if missing and value == FLOAT32_NA else value

    def float64(self, missing=True):
        value = self._native('d')
        return pd.NA if missing and value == FLOAT64_NA else value

    def string(self, width):
        return self.read(width)

    def text(self, width):
        """
        Read a NUL-terminated text field.
        """
        return decode_text(self.read(width).split(b'\x00', 1)[0], self.context.encoding)


class Writer:
    """
    Write fixed-width fields to a ``.dta`` stream.

    Numeric writers store missing values as the type's sentinel unless
    called with ``missing=False``.
    """

    def __init__(self, fp, context):
        self.fp = fp
        self.context = context

    def write(self, bytestring):
        n = self.fp.write(bytestring)
        if n is not None and n != len(bytestring):
            raise DtaIOError(f'Wrote {n} of {len(bytestring)} bytes')

    def _pack(self, fmt, value):
        try:
            return struct.pack(fmt, value)
        except (struct.error, OverflowError) as e:
            raise InvalidInput(f'Cannot store {value!r} as {fmt!r}: {e}') from e

    def _native(self, fmt, value):
        bytestring = self._pack('=' + fmt, value)
        if self.context.swap:
            bytestring = bytestring[::-1]
        self.write(bytestring)

    def byte(self, value, missing=True):
        value = BYTE_NA if missing and is_missing(value) else integer(value)
        self.write(self._pack('b', value))

    def int16(self, value, missing=True):
        value = INT16_NA if missing and is_missing(value) else integer(value)
        self.write(self._pack(self.context.byteorder.prefix + 'h', value))

    def int32(self, value, missing=True):
        value = INT32_NA if missing and is_missing(value) else integer(value)
        self._native('i', value)

    def float32(self, value, missing=True):
        self._native('f', real(value, FLOAT32_NA if missing else None))

    def float64(self, value, missing=True):
        self._native('d', real(value, FLOAT64_NA if missing else None))

    def string(self, bytestring, width):
        """
        Write bytes, NUL-padded to ``width``.
        """
        if len(bytestring) > width:
            raise InvalidInput(f'{bytestring!r} is longer than {width} bytes')
        self.write(bytestring.ljust(width, b'\x00'))

    def text(self, value, width):
        """
        Write a NUL-terminated text field, truncating to fit.
        """
        bytestring = encode_text(value if value is not None else '', self.context.encoding)
        self.string(bytestring[:width - 1], width)


def integer(value):
    """
    Convert a cell to ``int``, refusing to drop a fractional part.
    """
    if isinstance(value, numbers.Integral):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f'Expected an integer, got {value!r}') from e
    if not number.is_integer():
        raise InvalidInput(f'Expected an integer, got {value!r}')
    return int(number)


def real(value, sentinel):
    """
    Convert a cell to ``float``.  Missing and non-finite become ``sentinel``.
    """
    if sentinel is not None and is_missing(value):
        return sentinel
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f'Expected a number, got {value!r}') from e
    if sentinel is not None and not math.isfinite(number):
        return sentinel
    return number


def encode_text(value, encoding):
    """
    Encode a text cell.  Byte strings pass through unchanged.
    """
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f'Expected text, got {type(value).__name__} {value!r}')
    try:
        return value.encode(encoding)
    except UnicodeEncodeError as e:
        raise InvalidInput(f'Cannot encode {value!r} as {encoding}') from e


def decode_text(bytestring, encoding):
    try:
        return bytestring.decode(encoding)
    except UnicodeDecodeError as e:
        raise CorruptFile(f'Cannot decode {bytestring!r} as {encoding}') from e


def mangle(name):
    """
    Make a variable name legal in Stata: dots become underscores.
    """
    return name.replace('.', '_')


def demangle(name):
    """
    Make a Stata variable name readable: underscores become dots.

    This reverses ``mangle`` unless the original had both characters.
    """
    return name.replace('_', '.')


class Header:
    """
    File header from a Stata version 5 or 6 ``.dta`` file.
    """

    # struct HEADER {
    #    char  release;       /* 0x69 = version 5, 0x6C = version 6   */
    #    char  byteorder;     /* 1 = big-endian, 2 = little-endian    */
    #    char  filetype;      /* always 1                             */
    #    char  unused;
    #    short nvar;          /* number of variables                  */
    #    int   nobs;          /* number of observations               */
    #    char  data_label[];  /* 32 bytes in version 5, 81 in 6       */
    #    char  time_stamp[18];
    #    };

    def __init__(self, version, byteorder, nvar, nobs, label='', timestamp='', filetype=FILETYPE):
        """
        Initialize a ``Header``.
        """
        self.version = version
        self.byteorder = byteorder
        self.nvar = nvar
        self.nobs = nobs
        self.label = label
        self.timestamp = timestamp
        self.filetype = filetype

    def __repr__(self):
        """
        Format for the REPL.
        """
        return (
            f'<{type(self).__name__} version={self.version} byteorder={self.byteorder.name} '
            f'nvar={self.nvar} nobs={self.nobs} label={self.label!r}>'
        )

    def __eq__(self, other):
        """Equality."""
        if not isinstance(other, Header):
            raise TypeError(f"Can't compare {type(self).__name__} with {type(other).__name__}")
        attributes = [
            'version',
            'byteorder',
            'nvar',
            'nobs',
            'label',
            'timestamp',
        ]
        return all(getattr(self, name) == getattr(other, name) for name in attributes)

    def context(self, encoding=TEXT_ENCODING):
        """
        Settings for reading or writing the rest of the file.
        """
        return Context(host_byteorder(), self.byteorder, self.version, encoding)

    @classmethod
    def from_dataset(cls, dataset, byteorder):
        """
        Construct a ``Header`` for writing an ``dta.Dataset``.
        """
        nvar, nobs = len(dataset.columns), len(dataset)
        if nvar > INT16_NA - 1:
            raise InvalidInput(f'Too many variables: {nvar}')
        if nobs > INT32_NA - 1:
            raise InvalidInput(f'Too many observations: {nobs}')
        return cls(
            version=CURRENT_VERSION,
            byteorder=byteorder,
            nvar=nvar,
            nobs=nobs,
            label=dataset.label if dataset.label is not None else DEFAULT_LABEL,
            timestamp=dataset.timestamp if dataset.timestamp is not None else '',
        )

    @classmethod
    def read(cls, fp, encoding=TEXT_ENCODING):
        """
        Decode a ``Header`` from the start of a ``.dta`` stream.
        """
        LOG.debug(f'Decode {cls.__name__}')
        release, = read_exactly(fp, 1)
        try:
            version = VERSIONS[release]
        except KeyError:
            raise UnsupportedVersion(f'Not a Stata version 5 or 6 file, release {release:#04x}') from None
        flag, = read_exactly(fp, 1)
        try:
            byteorder = ByteOrder(flag)
        except ValueError:
            raise CorruptFile(f'Unknown byte order flag {flag}') from None

        reader = Reader(fp, Context(host_byteorder(), byteorder, version, encoding))
        filetype = reader.byte(missing=False)
        reader.skip(1)  # Padding
        nvar = reader.int16(missing=False)
        nobs = reader.int32(missing=False)
        if nvar < 0 or nobs < 0:
            raise CorruptFile(f'Negative size: {nvar} variables, {nobs} observations')
        self = cls(
            version=version,
            byteorder=byteorder,
            nvar=nvar,
            nobs=nobs,
            label=reader.text(LABEL_WIDTHS[version]),
            timestamp=reader.text(TIMESTAMP_WIDTH),
            filetype=filetype,
        )
        LOG.debug(f'Decoded {self}')
        return self

    def write(self, writer):
        """
        Encode in ``.dta`` format.
        """
        LOG.debug(f'Encode {type(self).__name__}')
        writer.write(bytes([RELEASES[self.version], self.byteorder, self.filetype, 0]))
        writer.int16(self.nvar, missing=False)
        writer.int32(self.nobs, missing=False)
        writer.text(self.label, LABEL_WIDTHS[self.version])
        writer.text(self.timestamp, TIMESTAMP_WIDTH)


class Descriptor:
    """
    Variable metadata from a Stata version 5 or 6 ``.dta`` file.
    """

    def __init__(self, name, vtype, width=None, format='', label=''):
        """
        Initialize a ``Descriptor``.
        """
        self.name = name
        self.vtype = vtype
        self.width = width
        self.format = format
        self.label = label

    def __repr__(self):
        """
        Format for the REPL.
        """
        vtype = self.vtype.name if self.width is None else f'{self.vtype.name}{self.width}'
        return f'<{type(self).__name__} {self.name!r} {vtype} format={self.format!r} label={self.label!r}>'

    def __eq__(self, other):
        """Equality."""
        if not isinstance(other, Descriptor):
            raise TypeError(f"Can't compare {type(self).__name__} with {type(other).__name__}")
        attributes = [
            'name',
            'vtype',
            'width',
            'format',
            'label',
        ]
        return all(getattr(self, name) == getattr(other, name) for name in attributes)

    @property
    def code(self):
        """
        Type byte.
        """
        return self.vtype.code(self.width)

    @classmethod
    def from_column(cls, name, column, dataset, encoding=TEXT_ENCODING):
        """
        Construct a ``Descriptor`` from a column of a ``dta.Dataset``.
        """
        try:
            vtype = VariableType(dataset.vtypes[name])
        except KeyError:
            vtype = VariableType.from_dtype(column.dtype)
            if column.dtype.kind == 'b' or (column.dtype.kind in 'iu' and column.dtype.itemsize > 4):
                LOG.warning(f'Converting column {name!r} from {column.dtype} to {vtype.name}')

        if vtype is VariableType.STRING:
            # TODO: Avoid encoding twice, once here and once in ``Observations``.
            width = max(
                (len(encode_text(v, encoding)) for v in column if not is_missing(v)),
                default=0,
            )
            if width > STRING_WIDTH_MAX:
                raise InvalidInput(
                    f'Column {name!r} has {width}-byte text, at most {STRING_WIDTH_MAX} allowed'
                )
            form = f'%{width}s'
        else:
            width = None
            form = dataset.formats.get(name, NUMERIC_FORMAT)

        label = dataset.variable_labels.get(name)
        return cls(
            name=str(name),
            vtype=vtype,
            width=width,
            format=form,
            label=label if label is not None else str(name),
        )


class Descriptors(Sequence):
    """
    All variable descriptors from a Stata version 5 or 6 ``.dta`` file.
    """

    # The descriptors are stored field by field, not variable by variable:
    #
    #    char  typlist[nvar];        /* type bytes                    */
    #    char  varlist[nvar][9];     /* names                         */
    #    short srtlist[nvar + 1];    /* sort order, unused            */
    #    char  fmtlist[nvar][12];    /* print formats                 */
    #    char  lbllist[nvar][9];     /* value label names, unused     */
    #    char  varlabels[nvar][];    /* 32 bytes in version 5, 81 in 6 */

    def __init__(self, descriptors=()):
        self.descriptors = list(descriptors)

    def __repr__(self):
        """
        Format for the REPL.
        """
        return f'<{type(self).__name__} {self.descriptors!r}>'

    def __getitem__(self, index):
        return self.descriptors[index]

    def __len__(self):
        return len(self.descriptors)

    def __eq__(self, other):
        """Equality."""
        return list(self) == list(other)

    @classmethod
    def from_dataset(cls, dataset, encoding=TEXT_ENCODING):
        """
        Construct ``Descriptors`` for the columns of a ``dta.Dataset``.
        """
        return cls(
            Descriptor.from_column(name, dataset.iloc[:, i], dataset, encoding)
            for i, name in enumerate(dataset.columns)
        )

    @classmethod
    def read(cls, reader, nvar):
        """
        Decode ``nvar`` descriptors.
        """
        LOG.debug(f'Decode {cls.__name__}')
        version = reader.context.version
        types = [VariableType.from_code(code) for code in reader.read(nvar)]
        names = [demangle(reader.text(NAME_WIDTH)) for _ in range(nvar)]
        reader.skip(2 * (nvar + 1))  # Sort list
        formats = [reader.text(FORMAT_WIDTH) for _ in range(nvar)]
        reader.skip(NAME_WIDTH * nvar)  # Value label names
        labels = [reader.text(LABEL_WIDTHS[version]) for _ in range(nvar)]
        return cls(
            Descriptor(
                name=name,
                vtype=vtype,
                width=width,
                format=form,
                label=label,
            )
            for (vtype, width), name, form, label
            in zip(types, names, formats, labels)
        )

    def write(self, writer):
        """
        Encode in ``.dta`` format.
        """
        LOG.debug(f'Encode {type(self).__name__}')
        version = writer.context.version
        writer.write(bytes(d.code for d in self))
        for d in self:
            name = encode_text(mangle(d.name), writer.context.encoding)
            writer.string(name[:NAME_WIDTH - 1], NAME_WIDTH)
        writer.write(b'\x00' * 2 * (len(self) + 1))  # Sort list
        for d in self:
            writer.text(d.format, FORMAT_WIDTH)
        writer.write(b'\x00' * NAME_WIDTH * len(self))  # Value label names
        for d in self:
            writer.text(d.label, LABEL_WIDTHS[version])


def skip_characteristics(reader):
    """
    Skip the characteristics block.

    Each record is a non-zero flag byte, a short length, and that many
    bytes.  A zero flag and a zero length end the block.
    """
    LOG.debug('Decode characteristics')
    count = 0
    while reader.byte(missing=False):
        length = reader.int16(missing=False)
        if length < 0:
            raise CorruptFile(f'Characteristic of negative length {length}')
        reader.skip(length)
        count += 1
    length = reader.int16(missing=False)
    if length != 0:
        raise CorruptFile(f'Characteristics terminator has nonzero length {length}')
    LOG.debug(f'Skipped {count} characteristics')


def write_characteristics(writer):
    """
    Write an empty characteristics block.
    """
    LOG.debug('Encode characteristics')
    writer.byte(0, missing=False)
    writer.int16(0, missing=False)


class Observations(Iterator):
    """
    Data from a Stata version 5 or 6 ``.dta`` file.

    ``Observations`` is an iterator, yielding observations as tuples.
    """

    def __init__(self, observations, descriptors):
        """
        Initialize from an iterable of observations.
        """
        self.it = iter(observations)
        self.descriptors = descriptors

    def __next__(self):
        """
        Get the next item from the iterator.
        """
        return next(self.it)

    @classmethod
    def from_dataset(cls, dataset, descriptors):
        """
        Yield observations from a ``dta.Dataset``.
        """
        return cls(dataset.itertuples(index=False, name=None), descriptors)

    @classmethod
    def read(cls, reader, descriptors, nobs):
        """
        Yield ``nobs`` observations from a ``.dta`` stream, one cell at a time.
        """
        LOG.debug(f'Decode {cls.__name__}')

        def string_reader(width):

            def read():
                # Keep anything after an embedded NUL, drop the padding.
                return decode_text(reader.string(width).rstrip(b'\x00'), reader.context.encoding)

            return read

        readers = {
            VariableType.FLOAT32: reader.float32,
            VariableType.FLOAT64: reader.float64,
            VariableType.INT32: reader.int32,
            VariableType.INT16: reader.int16,
            VariableType.BYTE: reader.byte,
        }
        converters = [
            string_reader(d.width) if d.vtype is VariableType.STRING else readers[d.vtype]
            for d in descriptors
        ]

        def iterator():
            for _ in range(nobs):
                yield tuple(f() for f in converters)

        return cls(iterator(), descriptors)

    def write(self, writer):
        """
        Encode observations in ``.dta`` format, one cell at a time.
        """
        LOG.debug(f'Encode {type(self).__name__}')
        encoding = writer.context.encoding

        def string_writer(width):

            def write(value):
                bytestring = b'' if is_missing(value) else encode_text(value, encoding)
                writer.string(bytestring, width)

            return write

        writers = {
            VariableType.FLOAT32: writer.float32,
            VariableType.FLOAT64: writer.float64,
            VariableType.INT32: writer.int32,
            VariableType.INT16: writer.int16,
            VariableType.BYTE: writer.byte,
        }
        converters = [
            string_writer(d.width) if d.vtype is VariableType.STRING else writers[d.vtype]
            for d in self.descriptors
        ]
        n = 0
        for row in self:
            for f, d, value in zip(converters, self.descriptors, row):
                try:
                    f(value)
                except InvalidInput as e:
                    raise InvalidInput(f'Column {d.name!r}, row {n}: {e}') from e
            n += 1
        return n

    def to_dataset(self, header):
        """
        Collect observations into a ``dta.Dataset``.
        """
        columns = [[] for _ in self.descriptors]
        for row in self:
            for values, value in zip(columns, row):
                values.append(value)
        data = pd.DataFrame(
            {i: pd.array(values, dtype=d.vtype.dtype)
             for i, (d, values) in enumerate(zip(self.descriptors, columns))},
            index=pd.RangeIndex(header.nobs),
        )
        data.columns = [d.name for d in self.descriptors]
        return dta.Dataset(
            data,
            label=header.label,
            timestamp=header.timestamp,
            version=header.version,
            byteorder=header.byteorder,
            vtypes={d.name: d.vtype for d in self.descriptors},
            formats={d.name: d.format for d in self.descriptors},
            variable_labels={d.name: d.label for d in self.descriptors},
        )


def load(fp, encoding=TEXT_ENCODING):
    """
    Deserialize a Stata version 5 or 6 ``.dta`` file.

        >>> with open('test/data/example.dta', 'rb') as f:
        ...     dataset = load(f)
    """
    header = Header.read(fp, encoding)
    reader = Reader(fp, header.context(encoding))
    descriptors = Descriptors.read(reader, header.nvar)
    skip_characteristics(reader)
    dataset = Observations.read(reader, descriptors, header.nobs).to_dataset(header)
    LOG.info(f'Decoded {header.nvar} variables, {header.nobs} observations')
    return dataset


def loads(bytestring, encoding=TEXT_ENCODING):
    """
    Deserialize a Stata version 5 or 6 ``.dta`` document from bytes.

        >>> with open('test/data/example.dta', 'rb') as f:
        ...     bytestring = f.read()
        >>> dataset = loads(bytestring)
    """
    return load(BytesIO(bytestring), encoding)


def dump(dataset, fp, byteorder=None, encoding=TEXT_ENCODING):
    """
    Serialize a dataset to a Stata version 6 ``.dta`` file.

        >>> ds = dta.Dataset({'a': [1, 2], 'b': ['x', 'yz']})
        >>> with open('test/data/doctest.dta', 'wb') as f:
        ...     dump(ds, f)

    The input ``dataset`` can be a ``dta.Dataset``, a
    ``pandas.DataFrame``, or a mapping of equal-length columns.  By
    default the file uses this machine's byte order.  If writing fails,
    ``fp`` holds a partial, invalid file.
    """
    host = host_byteorder()
    byteorder = ByteOrder.parse(byteorder) if byteorder is not None else host
    if not isinstance(dataset, (pd.DataFrame, Mapping)):
        raise InvalidInput(f'Expected a table, got {type(dataset).__name__}')
    if not isinstance(dataset, dta.Dataset):
        try:
            dataset = dta.Dataset(dataset)
        except ValueError as e:
            raise InvalidInput(f'Not a table: {e}') from e

    header = Header.from_dataset(dataset, byteorder)
    descriptors = Descriptors.from_dataset(dataset, encoding)
    writer = Writer(fp, header.context(encoding))
    header.write(writer)
    descriptors.write(writer)
    write_characteristics(writer)
    Observations.from_dataset(dataset, descriptors).write(writer)
    LOG.info(f'Encoded {header.nvar} variables, {header.nobs} observations')


def dumps(dataset, byteorder=None, encoding=TEXT_ENCODING):
    """
    Serialize a dataset to bytes in Stata version 6 ``.dta`` format.

        >>> bytestring = dumps(dta.Dataset({'a': [1, 2]}))
    """
    fp = BytesIO()
    dump(dataset, fp, byteorder, encoding)
    return fp.getvalue()
