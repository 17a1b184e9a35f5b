"""Package build script"""
import re
import setuptools

ver_file = 'VERSION'
__version__ = None

# Pull package version number from VERSION
with open(ver_file, 'r') as f:
    for line in f.readlines():
        if re.match(r'^\s*#', line):  # comment
            continue

        verstr = re.match(r'^\s*v?(\d+\.\d+\.\d+(?:\.[a-zA-Z0-9]+)?)\s*$', line)
        if verstr is not None:
            __version__ = verstr.groups()[0]
            break

    if __version__ is None:
        raise EnvironmentError(f'Could not find valid version number in {ver_file}; aborting setup')

with open("./README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="geobearing",
    version=__version__,
    author="",
    author_email="",
    description="Great-circle bearing and orientation fusion for pointing at a fixed target.",
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(
        include=('geobearing*', ),
        exclude=('*tests', 'tests*')
    ),
    package_data={"geobearing": ["py.typed"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent"
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20',
        'pydantic>=2,<3',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
