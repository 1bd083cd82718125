from setuptools import setup, find_packages
import re

vfile="scopedtmp/version.py"
verstrline = open(vfile, "rt").read()
VSRE = r"^__version__\s*=\s*(['\"])(.*)\1"
g = re.search(VSRE, verstrline, re.M)
if g:
    __version__ = g.group(2)
else:
    raise RuntimeError(f"Unable to find version in file '{vfile}")

setup(
  name='scopedtmp',
  version=__version__,
  description='scopedtmp: uniquely named scratch files for tests, deleted when they go out of scope',
  long_description='Creates a file named _<random>_<name> in the working directory, gives read/write/seek access to it, and removes it when the owning object is closed or leaves its with-block.',
  url='https://github.com/stevenrbrandt/scopedtmp.git',
  author='Steven R. Brandt',
  author_email='steven@stevenrbrandt.com',
  license='LGPL',
  packages=['scopedtmp'],
  python_requires='>=3.8',
  install_requires=['piraha', 'termcolor>=2.1'],
  extras_require={
    'tests' : ['pytest'],
  },
)
