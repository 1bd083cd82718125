from typing import Callable, List, Optional, Tuple
from piraha import parse_peg_src, Matcher
import random
import os

# Upper bound (exclusive) of the random suffix.
INT_MAX = 2**31 - 1

Rand = Callable[[int], int]

def default_rand(hi:int)->int:
    return random.randrange(hi)

def physical_name(logical_name:str, suffix:int)->str:
    return f"_{suffix}_{logical_name}"

grammar = r"""
suffix=0|[1-9][0-9]*
logical=(.|\n)*
physical=^_{suffix}_{logical}$
"""
pp,_ = parse_peg_src(grammar)

def parse_physical_name(fname:str)->Optional[Tuple[int,str]]:
    """
    Split a name of the form _<suffix>_<logical> into
    (suffix, logical). Returns None if fname does not
    have that form. The suffix is written the way
    physical_name() writes it, so "_007_x" is rejected;
    the logical part may hold any character, newlines too.
    """
    m = Matcher(pp, "physical", fname)
    if not m.matches():
        return None
    suffix = None
    logical = ""
    for gr in m.gr.children:
        if gr.is_("suffix"):
            suffix = int(gr.substring())
        elif gr.is_("logical"):
            logical = gr.substring()
    if suffix is None or suffix >= INT_MAX:
        return None
    return suffix, logical

def leftovers(logical_name:Optional[str]=None, dirname:str=".")->List[str]:
    """
    List the files in dirname that look like they were
    left behind by a tmpfile, optionally only those made
    for one logical name.
    """
    found = []
    for f in sorted(os.listdir(dirname)):
        if not os.path.isfile(os.path.join(dirname, f)):
            continue
        parsed = parse_physical_name(f)
        if parsed is None:
            continue
        if logical_name is not None and parsed[1] != logical_name:
            continue
        found.append(f)
    return found

def sweep(logical_name:Optional[str]=None, dirname:str=".", log=None)->List[str]:
    """
    Remove leftover files. Failures are logged and skipped.
    Returns the names that were removed.
    """
    removed = []
    for f in leftovers(logical_name, dirname):
        fn = os.path.join(dirname, f)
        try:
            os.unlink(fn)
            removed.append(f)
            if log is not None:
                log.log(sweep=fn)
        except OSError as e:
            if log is not None:
                log.log_exc(e,sweep=fn)
    return removed
