from .version import __version__
from .tmpfile import tmpfile, create, set_log, get_log
from .errors import TmpFileError, CreateFailed, ReadFailed, WriteFailed, SeekFailed
from .names import INT_MAX, physical_name, parse_physical_name, leftovers, sweep
from .jlog import jlog

ScopedTempFile = tmpfile
