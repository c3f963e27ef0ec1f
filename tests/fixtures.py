"""Literal puzzle fixtures shared by the tests."""

# Nine 5x5 tiles (3x3 interiors) that interlock into a 3x3 grid. Every tile
# is rotated and/or mirrored away from its solved orientation, and three of
# the shared borders are palindromes.
SMALL_PUZZLE = """\
Tile 1427:
##..#
#.#.#
#....
..#..
.##..

Tile 1951:
##.##
..#.#
##...
..###
#####

Tile 1489:
.###.
#.#..
##...
#..#.
###..

Tile 3079:
###.#
...##
#..##
.....
.#.##

Tile 2473:
#.#..
..#..
..###
#..##
.#...

Tile 1171:
.....
.#.#.
.##.#
#....
..#..

Tile 2311:
#...#
#####
..###
#...#
...##

Tile 2971:
####.
.##.#
##.#.
##.##
.#.#.

Tile 2729:
#.##.
##...
.....
...#.
#.#.#
"""

SMALL_PUZZLE_CORNERS = (1171, 1951, 2971, 3079)
SMALL_PUZZLE_CORNER_PRODUCT = 20899048083289

# Interior-only composite of SMALL_PUZZLE in one of its eight orientations.
SMALL_PUZZLE_COMPOSITE = [
    "..####.##",
    "#.###....",
    ".#.......",
    "#......#.",
    "...#.###.",
    "..#...#..",
    "###..###.",
    "..##...#.",
    "##..#.#..",
]
SMALL_PUZZLE_ACTIVE_PIXELS = 32
