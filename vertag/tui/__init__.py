"""
Terminal user interface for vertag.

Provides the list pickers shown when module, channel or commit are not
given on the command line.
"""

from .selector import run_selection, select_one, select_many

__all__ = ['run_selection', 'select_one', 'select_many']
