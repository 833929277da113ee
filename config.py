# config.py
import os

# ======= Board =======
MATRIX_MAX = int(os.getenv("TT_MATRIX_MAX", "17"))

# ======= Strategy / search caps =======
STRATEGY     = os.getenv("TT_STRATEGY", "backtracking").strip().lower()
SEARCH_ORDER = os.getenv("TT_SEARCH_ORDER", "given").strip().lower()

# 0 disables the cap; the search then runs until solved or exhausted.
NODE_LIMIT   = int(os.getenv("TT_NODE_LIMIT", "0"))

# Echo the "----12" depth trace to stderr in addition to the debug log.
TRACE_DEPTH  = int(os.getenv("TT_TRACE_DEPTH", "0")) != 0

# ======= CP-SAT cross-check =======
WORKERS              = int(os.getenv("TT_WORKERS", "1"))
CP_SAT_MAX_SECONDS   = float(os.getenv("TT_CP_SAT_MAX_SECONDS", "60"))
CP_SAT_MAX_PAIRS     = int(os.getenv("TT_CP_SAT_MAX_PAIRS", "2000000"))
MAX_MEMORY_MB        = int(os.getenv("TT_MAX_MEMORY_MB", "2048"))

# ======= Output names =======
COORDS_OUT    = os.getenv("TT_COORDS_OUT", "coords.txt")
LAYOUT_HTML   = os.getenv("TT_LAYOUT_HTML", "layout_view.html")
WRITE_OUTPUTS = int(os.getenv("TT_WRITE_OUTPUTS", "0")) != 0
LOG_DIR       = os.getenv("TT_LOG_DIR", "")

# ======= Puzzle instance =======
# (area, anchor_x, anchor_y); every triangle starts pointing UP.
TRIANGLES = (
    (2, 3, 0),     # T1
    (18, 7, 0),    # T2
    (12, 2, 1),    # T3
    (4, 13, 1),    # T4
    (3, 4, 2),     # T5
    (7, 11, 2),    # T6
    (6, 16, 2),    # T7
    (6, 0, 3),     # T8
    (9, 3, 4),     # T9
    (11, 9, 4),    # T10
    (8, 14, 5),    # T11
    (4, 0, 6),     # T12
    (14, 5, 6),    # T13
    (18, 15, 6),   # T14
    (20, 8, 8),    # T15
    (7, 1, 10),    # T16
    (3, 11, 10),   # T17
    (3, 16, 10),   # T18
    (3, 2, 11),    # T19
    (7, 7, 12),    # T20
    (10, 13, 12),  # T21
    (5, 16, 13),   # T22
    (4, 0, 14),    # T23
    (10, 5, 14),   # T24
    (3, 12, 14),   # T25
    (12, 3, 15),   # T26
    (7, 14, 15),   # T27
    (8, 9, 16),    # T28
    (2, 13, 16),   # T29
)

class CFG:
    MATRIX_MAX = MATRIX_MAX

    STRATEGY     = STRATEGY
    SEARCH_ORDER = SEARCH_ORDER
    NODE_LIMIT   = NODE_LIMIT
    TRACE_DEPTH  = TRACE_DEPTH

    WORKERS            = WORKERS
    CP_SAT_MAX_SECONDS = CP_SAT_MAX_SECONDS
    CP_SAT_MAX_PAIRS   = CP_SAT_MAX_PAIRS
    MAX_MEMORY_MB      = MAX_MEMORY_MB

    COORDS_OUT    = COORDS_OUT
    LAYOUT_HTML   = LAYOUT_HTML
    WRITE_OUTPUTS = WRITE_OUTPUTS
    LOG_DIR       = LOG_DIR

    TRIANGLES = TRIANGLES

__all__ = ["CFG", "MATRIX_MAX", "TRIANGLES"]
