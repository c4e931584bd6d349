"""CLI entrypoint package.

Thin wrappers intended to be run as `python -m bpdaily.cli.bp_daily`
or through the `bp-daily` console script.
"""

__all__ = ["bp_daily"]
