def is_in_range(number, lo, hi):
    """True if lo <= number <= hi (both ends inclusive)."""
    return lo <= number <= hi


def grid_to_string(matrix):
    # matrix is a list of rows (matrix[y][x]); each cell renders as [label]
    lines = []
    for row in matrix:
        lines.append(''.join(f"[{'' if cell is None else cell}]" for cell in row))
    return '\n'.join(lines)
