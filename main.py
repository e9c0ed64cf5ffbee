"""
Run the full pokecache scrape with the settings from the environment.

Equivalent to ``python cli.py [global options] run [--sequential]``.
"""

import sys

from cli import main

RUN_OPTIONS = ("--sequential",)


def build_run_argv(argv):
    """Place global options before the ``run`` sub-command and run options after it."""
    global_args = [arg for arg in argv if arg not in RUN_OPTIONS]
    run_args = [arg for arg in argv if arg in RUN_OPTIONS]
    return [*global_args, "run", *run_args]


if __name__ == "__main__":
    sys.exit(main(build_run_argv(sys.argv[1:])))
