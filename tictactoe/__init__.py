"""Two-player tic-tac-toe game state core.

The controller consumes input events and drives a presentation layer through the
protocols in `tictactoe.presentation`; rendering itself lives outside this package.
"""

__version__ = "0.1.0"
