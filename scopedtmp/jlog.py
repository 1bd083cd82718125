from typing import Any, Optional, TextIO
from traceback import format_exc
from time import time
import json
import os

def prepJson(arg:Any)->Any:
    """
    Convert an argument to something json.dumps() will accept.
    Exceptions and other unknown objects are stored as their repr().
    """
    if arg is None:
        return None
    t = type(arg)
    if t == dict:
        narg = {}
        for k in arg:
            narg[str(k)] = prepJson(arg[k])
        return narg
    elif t in [list, tuple]:
        return [prepJson(a) for a in arg]
    elif t in [str, int, float, bool]:
        return arg
    elif t == bytes:
        return arg.decode("utf-8", "replace")
    else:
        return repr(arg)

class jlog:
    """
    Append-only log of json records, one per line.
    """
    def __init__(self, fname:str)->None:
        self.fname = fname
        self.fd : Optional[TextIO] = open(fname, "a")

    @staticmethod
    def default()->'jlog':
        log_file_dir = os.path.join(os.path.expanduser("~"),".scopedtmp-logs")
        os.makedirs(log_file_dir, exist_ok = True)
        return jlog(os.path.join(log_file_dir, f"log-{os.getpid()}.jtxt"))

    def log(self,**kwargs:Any)->None:
        if self.fd is None:
            return
        args = prepJson(kwargs)
        if "time" not in args:
            args["time"] = time()
        args["pid"] = os.getpid()
        print(json.dumps(args),file=self.fd)
        self.fd.flush()

    def log_exc(self,e:BaseException,**kwargs:Any)->None:
        self.log(exc=e,trace=format_exc(),**kwargs)

    def close(self)->None:
        if self.fd is not None:
            self.fd.close()
            self.fd = None

    def __repr__(self)->str:
        return f"jlog({self.fname})"
