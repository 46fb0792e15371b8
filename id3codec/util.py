# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

import warnings
import sys
from contextlib import contextmanager

import id3codec.errors

@contextmanager
def print_warnings(filename, quiet=False):
    "Collect library warnings raised in the context and print them to stderr."
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always", id3codec.errors.Warning)
        try:
            yield None
        finally:
            if not quiet and len(ws) > 0:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()
