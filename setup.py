#!/usr/bin/env python
import ast
from pathlib import Path
import setuptools
from typing import Generator, List, Optional, Union


###############################################################################
# Some helper functions

def parse_version(fpath: Union[str, Path]) -> str:
    """
    Statically parse the "__version__" number string from a python file.
    """
    with open(fpath, 'r') as file_:
        pt = ast.parse(file_.read())

    class VersionVisitor(ast.NodeVisitor):
        def __init__(self) -> None:
            self.version: Optional[str] = None

        def visit_Assign(self, node: ast.Assign) -> None:
            for target in node.targets:
                if isinstance(target, ast.Name) and target.id == "__version__":
                    if isinstance(node.value, ast.Constant):
                        self.version = str(node.value.value)

    visitor = VersionVisitor()
    visitor.visit(pt)
    if visitor.version is None:
        raise RuntimeError("Failed to find __version__!")
    return visitor.version


def parse_req(filepath: Union[str, Path]) -> List[str]:
    """
    Read requirements file and return the list of requirements specified
    therein, following ``-r`` sub-requirement file includes.
    """
    filepath = Path(filepath)
    # Known prefixes of lines that are definitely not requirements
    # specifications.
    skip_prefix_tuple = (
        "#", "--index-url"
    )

    def filter_req_lines(_filepath: Path) -> Generator[str, None, None]:
        """ Filter lines from file that are requirements. """
        with open(_filepath, 'r') as _f:
            for _line in _f:
                _line = _line.strip()
                if not _line or _line.startswith(skip_prefix_tuple):
                    # Empty or has a skippable prefix.
                    continue
                elif _line.startswith('-r '):
                    # sub-requirements file specification, yield that file's
                    # req lines.
                    target = _filepath.parent / _line.split(" ")[1]
                    for _r_line in filter_req_lines(target):
                        yield _r_line
                else:
                    yield _line

    return list(filter_req_lines(filepath))


################################################################################

PYTHON_SRC = 'python'
PACKAGE_NAME = "mbr2d"
SETUP_DIR = Path(__file__).parent

with open(SETUP_DIR / "README.md") as f:
    LONG_DESCRIPTION = f.read()

VERSION = parse_version(SETUP_DIR / PYTHON_SRC / PACKAGE_NAME / "__init__.py")


if __name__ == "__main__":
    setuptools.setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description='Minimum bounding rectangle algebra for 2D geometry and '
                    'spatial indexing',
        long_description=LONG_DESCRIPTION,
        long_description_content_type='text/markdown',
        license='BSD 3-Clause',
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Developers',
            'Intended Audience :: Science/Research',
            'License :: OSI Approved :: BSD License',
            'Operating System :: MacOS :: MacOS X',
            'Operating System :: Unix',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering :: GIS',
        ],
        platforms=[
            'Linux',
            'Max OS-X',
            'Unix',
        ],
        python_requires='>=3.8',

        package_dir={'': PYTHON_SRC},
        packages=setuptools.find_packages(PYTHON_SRC),
        zip_safe=False,

        install_requires=parse_req(SETUP_DIR / "requirements" / "runtime.txt"),
        extras_require={
            'test': parse_req(SETUP_DIR / "requirements" / "test.txt"),
        },

        entry_points={
            'console_scripts': [
                'mbr2d-compare = mbr2d.bin.compare_mbrs:main',
            ]
        }
    )
