"""GitHub release publisher.

A small command-line tool that creates a release on a GitHub repository
and uploads one binary asset to it, authenticating with HTTP Basic
credentials.
"""

__version__ = "0.1.0"
