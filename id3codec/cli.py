# Copyright (c) 2026, the id3codec authors

"""Command line tool listing the frames of an ID3v2 tag."""

import sys

import click

import id3codec
from id3codec.util import print_warnings

def format_frame(frame):
    summary = frame.summary()
    if summary is None:
        return "Frame {0}".format(frame.frameid)
    return "Frame {0}: {1}".format(frame.frameid, summary)

@click.command()
@click.argument("filename", type=click.Path(dir_okay=False))
@click.option("-q", "--quiet", is_flag=True, help="Do not print warnings.")
@click.option("-v", "--verbose", is_flag=True, help="Print tag header details.")
def main(filename, quiet, verbose):
    """Decode the ID3v2 tag at the start of FILENAME and list its frames."""
    with print_warnings(filename, quiet):
        try:
            with open(filename, "rb") as file:
                (tag, consumed) = id3codec.decode(file)
        except (id3codec.Error, OSError) as e:
            click.echo("{0}: error: {1}".format(filename, e), err=True)
            sys.exit(1)

    if verbose:
        click.echo("Version: 2.{0}".format(tag.version))
        click.echo("Size: {0} bytes".format(consumed))
        if "crc" in tag.flags:
            click.echo("CRC: 0x{0:08x}".format(tag.crc))
        if tag.padding:
            click.echo("Pad: {0} bytes".format(tag.padding))
    for frame in tag.frames:
        click.echo(format_frame(frame))

if __name__ == "__main__":
    main()
