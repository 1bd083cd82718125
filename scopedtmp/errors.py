from typing import Optional

# All errors raised by a tmpfile derive from OSError
# so that code written against ordinary file objects
# (except OSError: ...) keeps working when handed a
# tmpfile instead.
class TmpFileError(OSError):
    what = "I/O"

    def __init__(self, fname:str, oserr:Optional[OSError]=None, msg:Optional[str]=None)->None:
        if oserr is not None:
            super().__init__(oserr.errno, oserr.strerror, fname)
        else:
            super().__init__(msg or self.what+" failed")
        self.fname = fname
        self.oserr = oserr
        self.msg = msg

    def __str__(self)->str:
        if self.msg is not None:
            reason = self.msg
        elif self.oserr is not None:
            reason = str(self.oserr)
        else:
            reason = "unknown error"
        return f"{self.what.upper()} FAILED: {self.fname}: {reason}"

class CreateFailed(TmpFileError):
    what = "create"

class ReadFailed(TmpFileError):
    what = "read"

class WriteFailed(TmpFileError):
    what = "write"

class SeekFailed(TmpFileError):
    what = "seek"
