"""
Copy a file, optionally overwriting the destination.

Arguments:
 - source: the file to copy
 - target: where to put it (defaults to $target when it is set)
 - --force: overwrite an existing target
"""
from rich.pretty import pprint

from scriptkit import run


if __name__ == '__main__':
    pprint(run("source [--target=<path>] [--force]"))
