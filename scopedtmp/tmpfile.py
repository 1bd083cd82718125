from typing import Any, Optional
import io
import os
import sys
from .names import INT_MAX, Rand, default_rand, physical_name
from .errors import CreateFailed, ReadFailed, WriteFailed, SeekFailed
from .colored import colored
from .jlog import jlog

default_log : Optional[jlog] = None

def set_log(log:Optional[jlog])->None:
    global default_log
    default_log = log

def get_log()->Optional[jlog]:
    return default_log

class tmpfile(io.RawIOBase):
    """
    A scratch file for tests. The file is created in the current
    directory under the name _<random>_<logical_name> and is removed
    when the object is closed, leaves a with-block, or is garbage
    collected.

        with tmpfile("foo.txt") as t:
            t.write_all(b"hello")
            t.seek(0)
            assert t.read(5) == b"hello"
    """

    # Print cleanup failures to stderr. Set on the class for every
    # tmpfile, or on one instance.
    verbose = False

    def __init__(self, logical_name:str, rand:Optional[Rand]=None, log:Optional[jlog]=None)->None:
        super().__init__()
        self.fd : Optional[io.FileIO] = None
        self.is_open = False
        self.jl = log if log is not None else default_log
        if rand is None:
            rand = default_rand
        r = rand(INT_MAX)
        if r < 0 or r >= INT_MAX:
            raise ValueError(f"random suffix {r} not in [0, {INT_MAX})")
        self.logical_name = logical_name
        self.random_suffix = r
        self.physical_name = physical_name(logical_name, r)
        self.path = os.path.abspath(self.physical_name)

        # No O_TRUNC and no O_EXCL: a file left over by an earlier
        # run with the same name is reused as is.
        flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
        try:
            fd = os.open(self.physical_name, flags, 0o666)
        except OSError as e:
            self.log(exc=e,create=self.path)
            raise CreateFailed(self.physical_name, e) from e
        try:
            self.fd = os.fdopen(fd, "r+b", buffering=0)
        except OSError as e:
            os.close(fd)
            self.remove()
            raise CreateFailed(self.physical_name, e) from e
        self.is_open = True
        self.log(create=self.path)

    def log(self,**kwargs:Any)->None:
        if self.jl is not None:
            self.jl.log(**kwargs)

    @property
    def name(self)->str:
        return self.physical_name

    @property
    def mode(self)->str:
        return "rb+"

    def _check_open(self)->io.FileIO:
        if not self.is_open or self.fd is None:
            raise ValueError("I/O operation on closed file.")
        return self.fd

    def readable(self)->bool:
        self._check_open()
        return True

    def writable(self)->bool:
        self._check_open()
        return True

    def seekable(self)->bool:
        self._check_open()
        return True

    def fileno(self)->int:
        return self._check_open().fileno()

    def isatty(self)->bool:
        return self._check_open().isatty()

    def write(self,b:Any)->int:
        fd = self._check_open()
        try:
            n = fd.write(b)
        except OSError as e:
            raise WriteFailed(self.physical_name, e) from e
        return 0 if n is None else n

    def write_all(self,b:Any)->None:
        """
        Keep writing until every byte of b is on disk. A short
        write is continued from where it stopped; an error or a
        write that makes no progress raises WriteFailed.
        """
        view = memoryview(b).cast("B")
        while len(view) > 0:
            n = self.write(view)
            if n <= 0:
                raise WriteFailed(self.physical_name, msg="write returned no progress")
            view = view[n:]

    def flush(self)->None:
        # IOBase.close() flushes before marking the stream closed,
        # including for an object whose constructor failed.
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        fd = self.fd
        if fd is None:
            return
        try:
            fd.flush()
        except OSError as e:
            raise WriteFailed(self.physical_name, e) from e

    def truncate(self,size:Optional[int]=None)->int:
        fd = self._check_open()
        try:
            return fd.truncate(size)
        except OSError as e:
            raise WriteFailed(self.physical_name, e) from e

    def readinto(self,b:Any)->int:
        fd = self._check_open()
        try:
            n = fd.readinto(b)
        except OSError as e:
            raise ReadFailed(self.physical_name, e) from e
        return 0 if n is None else n

    def read(self,size:Optional[int]=-1)->bytes:
        fd = self._check_open()
        try:
            data = fd.read(size)
        except OSError as e:
            raise ReadFailed(self.physical_name, e) from e
        return b"" if data is None else data

    def readall(self)->bytes:
        return self.read(-1)

    def seek(self,offset:int,whence:int=os.SEEK_SET)->int:
        fd = self._check_open()
        try:
            return fd.seek(offset, whence)
        except OSError as e:
            raise SeekFailed(self.physical_name, e) from e

    def tell(self)->int:
        fd = self._check_open()
        try:
            return fd.tell()
        except OSError as e:
            raise SeekFailed(self.physical_name, e) from e

    def getvalue(self)->bytes:
        """
        The whole content of the file. The cursor is left where it was.
        """
        pos = self.tell()
        try:
            self.seek(0)
            return self.readall()
        finally:
            self.seek(pos)

    def remove(self)->bool:
        """
        Delete the file if it is there. Never raises; returns
        False if the file could not be removed.
        """
        try:
            if os.path.exists(self.path):
                os.unlink(self.path)
            return True
        except OSError as e:
            self.log(exc=e,remove=self.path)
            if self.verbose:
                print(colored(f"tmpfile: could not remove {self.path}: {e}","red"),file=sys.stderr)
            return False

    def close(self)->None:
        if not self.is_open:
            super().close()
            return
        removed = self.remove()
        try:
            super().close()
        except OSError as e:
            self.log(exc=e,close=self.path)
        self.is_open = False
        fd, self.fd = self.fd, None
        try:
            fd.close()
        except OSError as e:
            self.log(exc=e,close=self.path)
        # Some platforms refuse to delete a file that is still open.
        if not removed:
            self.remove()
        self.log(close=self.path)

    def __repr__(self)->str:
        return f"tmpfile({getattr(self,'physical_name',None)},{self.is_open})"

def create(logical_name:str, rand:Optional[Rand]=None, log:Optional[jlog]=None)->tmpfile:
    return tmpfile(logical_name, rand=rand, log=log)
