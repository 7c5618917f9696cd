"""
Section mechanics shared by the option generator, the detailed checker
and the serviceability checker.

All lengths in mm, stresses in MPa, areas in mm².
"""

import math

from nzbeam.utils.constants import MIN_CLEAR_BAR_SPACING


def bar_area(diameter: float) -> float:
    """Area of one round bar."""
    return math.pi * diameter * diameter / 4


def stirrup_area(diameter: float, legs: int) -> float:
    """Total area of all stirrup legs crossing a shear plane."""
    return legs * bar_area(diameter)


def beta1(fc: float) -> float:
    """
    Stress block depth factor β1.

    0.85 up to f'c = 30 MPa, reducing by 0.008 per MPa above that,
    never less than 0.65.
    """
    if fc <= 30:
        return 0.85
    return max(0.85 - 0.008 * (fc - 30), 0.65)


def minimum_flexural_steel(fc: float, fy: float, breadth: float, d: float) -> float:
    """As,min = √f'c / (4 fy) × B × d. Zero when fy is zero."""
    if fy == 0:
        return 0.0
    return (math.sqrt(fc) / (4 * fy)) * breadth * d


def bars_fit_in_single_layer(breadth: float, cover: float, ds: float, db: float, n: int) -> bool:
    """
    Check that n bars fit across the section in one layer.

    Clear spacing between bars is the greater of db and 25 mm.
    """
    if n <= 1:
        return True
    clear_spacing = max(db, MIN_CLEAR_BAR_SPACING)
    required_width = 2 * cover + 2 * ds + n * db + (n - 1) * clear_spacing
    return required_width <= breadth


def effective_depth(depth: float, cover: float, ds: float, db: float) -> float:
    """d = D - cover - ds - db/2 for a single bottom layer."""
    return depth - cover - ds - db / 2


def stirrup_leg_spacing(breadth: float, cover: float, ds: float, legs: int) -> float:
    """Centre spacing of stirrup legs across the section; infinite for one leg."""
    if legs <= 1:
        return math.inf
    return (breadth - 2 * cover - ds) / (legs - 1)


def bar_spacing(breadth: float, cover: float, ds: float, db: float, n: int) -> float:
    """Centre spacing of main bars in one layer; B/2 for a single bar."""
    if n > 1:
        return (breadth - 2 * cover - 2 * ds - db) / (n - 1)
    return breadth / 2
