from setuptools import setup, find_namespace_packages
import codecs
import os

here = os.path.abspath(os.path.dirname(__file__))

with codecs.open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
    long_description = "\n" + fh.read()

VERSION = '0.1.0'
DESCRIPTION = 'Sub-cube reading and writing of raw BSQ, BIL and BIP hyperspectral files.'
NAME = "hsicube"

# Setting up
setup(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=find_namespace_packages(include=['hsicube', 'hsicube.*']),
    python_requires='>=3.10',
    install_requires=['numpy>=2.0.0',
                      'tqdm',
                      'h5py'],
    extras_require={'dev': 'twine',
                    'test': ['pytest', 'spectral']},
    keywords=['python', 'hyperspectral imaging', 'envi', 'bsq', 'bil', 'bip'],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ]
)
