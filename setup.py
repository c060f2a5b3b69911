import io
import os
import re

from setuptools import find_packages, setup


with io.open("flask_formbuilder/__init__.py", "rt", encoding="utf8") as f:
    version = re.search(r"__version__ = \"(.*?)\"", f.read()).group(1)


def fpath(name):
    return os.path.join(os.path.dirname(__file__), name)


def read(fname):
    return open(fpath(fname)).read()


def desc():
    return read("README.rst")


setup(
    name="Flask-FormBuilder",
    version=version,
    license="BSD",
    description=(
        "Declarative HTML form building for Flask."
        " Compose forms out of typed widgets, bind submitted values and"
        " validation errors, and render indented, escaped markup."
    ),
    long_description=desc(),
    long_description_content_type="text/x-rst",
    packages=find_packages(exclude=["tests*"]),
    include_package_data=True,
    zip_safe=False,
    platforms="any",
    install_requires=[
        "bleach>=6, <7",
        "Flask>=2, <4",
        "Flask-Babel>=2, <5",
        "markupsafe>=2, <4",
        "python-dateutil>=2.3, <3",
    ],
    extras_require={
        "testing": ["pytest>=7", "WTForms<4"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires="~=3.8",
)
