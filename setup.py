#!/usr/bin/env python

from setuptools import setup

setup(
    name="id3codec",
    version="0.1.0",
    author="The id3codec authors",
    packages=["id3codec"],
    description="ID3v2 tag encoder/decoder in pure Python 3",
    long_description="""
Reads and writes ID3v2.3 and ID3v2.4 tags: the tag header and extended
header, frame headers with their optional group, encryption and data
length fields, unsynchronisation, and the payloads of the common text,
URL, picture, lyrics, comment and identifier frames.  Frames with other
ids are kept as raw data so that tags survive a decode/encode roundtrip.
""",
    install_requires=["click"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["id3codec = id3codec.cli:main"],
        },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
