from setuptools import setup

setup(
    name        = "libschematic",
    version     = "1.0.0",
    description = "Schematic file reader / writer with legacy block id mapping",
    packages    = [ "libschematic" ],
    python_requires = ">=3.6",
    zip_safe    = True
)
