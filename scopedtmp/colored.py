import sys
from termcolor import colored as _colored

def not_colored(a:str,_:str)->str:
    return a

def colored(a:str,color:str,file=None)->str:
    """
    Color the text only if it is headed for a terminal.
    """
    if file is None:
        file = sys.stderr
    isatty = getattr(file, "isatty", None)
    if isatty is not None and isatty():
        return _colored(a,color,force_color=True)
    return not_colored(a,color)

if __name__ == "__main__":
    print(colored("Colored output enabled","green",sys.stdout))
