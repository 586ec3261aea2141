from tictactoe.core.board import COMPUTER, HUMAN


# Terminal scores. A win found `depth` plies from the root is worth
# WIN_SCORE - depth, so quicker wins and slower losses score better.
WIN_SCORE = 10
DRAW_SCORE = 0
# Depth given to the position right after the root candidate move.
ROOT_DEPTH = 1

# Maximizing side and minimizing side of the search.
MAXIMIZER = COMPUTER
MINIMIZER = HUMAN
