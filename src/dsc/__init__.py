"""
dsc - command-line client for the Docspell document management server.

This package holds the session manager shared by every authenticated
command: token resolution, expiry checks, silent refresh and login.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
